"""Service test fixtures — signed-in FeedService over the stub token store.

Invariants:
    - Every test gets a fresh SessionTokenStore (no state shared across tests)
    - feed_service starts signed in; fresh_feed_service starts without a token

Design Decisions:
    - Real SessionTokenStore instead of a mock: it is already an in-memory stub
"""

import pytest

from authrelay.infrastructure.refresh_invoker import RetryingRequestInvoker
from authrelay.infrastructure.session_refresher import SessionTokenStore
from authrelay.services.feed_service import FeedService


@pytest.fixture
def fresh_feed_service():
    return FeedService(SessionTokenStore(), RetryingRequestInvoker())


@pytest.fixture
async def feed_service(fresh_feed_service):
    await fresh_feed_service.tokens.refresh()
    return fresh_feed_service
