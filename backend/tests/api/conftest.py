"""API test fixtures — FastAPI test client with the feed service overridden.

Invariants:
    - Every test gets its own signed-in FeedService (lifespan is not run by ASGITransport)
    - dependency_overrides cleared after each test

Design Decisions:
    - Override get_feed_service rather than patching the module singleton:
      routes resolve the service only through the dependency
"""

import pytest
from httpx import ASGITransport, AsyncClient

from authrelay.infrastructure.refresh_invoker import RetryingRequestInvoker
from authrelay.infrastructure.session_refresher import SessionTokenStore
from authrelay.main import app
from authrelay.services.feed_service import FeedService, get_feed_service


@pytest.fixture
async def api_feed_service():
    service = FeedService(SessionTokenStore(), RetryingRequestInvoker())
    await service.tokens.refresh()
    return service


@pytest.fixture
async def client(api_feed_service):
    """FastAPI test client with the feed service dependency overridden."""
    app.dependency_overrides[get_feed_service] = lambda: api_feed_service

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
