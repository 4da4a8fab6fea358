"""Error Handlers — every failure renders the AuthRelayError envelope.

Invariants:
    - Domain errors keep their code and http_status
    - Unhandled exceptions become 500 INTERNAL_ERROR with no exception text
"""

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from authrelay.api.error_handlers import register_error_handlers
from authrelay.core.errors import ErrorContext, RefreshFailedError


def _build_app() -> FastAPI:
    app = FastAPI()
    register_error_handlers(app)

    @app.get("/refresh-down")
    async def refresh_down():
        raise RefreshFailedError("issuer down", ErrorContext(resource_id="42"))

    @app.get("/boom")
    async def boom():
        raise RuntimeError("db password is hunter2")

    return app


@pytest.fixture
async def error_client():
    # Starlette re-raises after the catch-all responds; keep the response instead
    transport = ASGITransport(app=_build_app(), raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


async def test_domain_error_keeps_code_and_status(error_client):
    resp = await error_client.get("/refresh-down")
    assert resp.status_code == 503
    error = resp.json()["error"]
    assert error["code"] == "REFRESH_FAILED"
    assert error["context"]["resource_id"] == "42"


async def test_unhandled_exception_uses_domain_envelope(error_client):
    resp = await error_client.get("/boom")
    assert resp.status_code == 500
    error = resp.json()["error"]
    assert error["code"] == "INTERNAL_ERROR"
    assert error["category"] == "internal"
    assert error["severity"] == "critical"
    assert error["context"] == {"endpoint": "/boom", "resource_id": None}
    assert "timestamp" in error
    assert "hunter2" not in resp.text
