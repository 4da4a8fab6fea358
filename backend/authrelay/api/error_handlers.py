"""Error Handlers — render AuthRelayError envelopes for every failed request.

Invariants:
    - AuthRelayError → its own to_response() envelope and http_status
    - Any other exception → wrapped in UnexpectedError, same envelope shape
    - Exception text and type never reach the response body, only the log

Design Decisions:
    - Two layers only: routes take plain str path params and no body, so
      request validation has nothing to reject
    - Log level follows the status: client-side outcomes (401) are warnings,
      upstream and internal failures are errors
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from authrelay.core.errors import AuthRelayError, ErrorContext, UnexpectedError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register the global error handlers on the FastAPI app."""

    @app.exception_handler(AuthRelayError)
    async def authrelay_error_handler(request: Request, exc: AuthRelayError):
        level = logging.WARNING if exc.http_status < 500 else logging.ERROR
        logger.log(
            level,
            f"{exc.code} on {request.url.path}: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        return _render(exc)

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            extra={"path": request.url.path},
        )
        return _render(UnexpectedError(ErrorContext(
            endpoint=request.url.path,
            debug_info={"exception_type": type(exc).__name__},
        )))


def _render(exc: AuthRelayError) -> JSONResponse:
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())
