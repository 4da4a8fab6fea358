"""Error Hierarchy — typed, categorized exceptions for all AuthRelay failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Each terminal ResponseErrorKind maps to exactly one exception class
    - to_response() produces the REST envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with AuthRelayError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
    - Request operations report failures as ResponseErrorKind values, not exceptions;
      exceptions only appear at the HTTP boundary (error_for_outcome)
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone

from authrelay.core.domain_types import InvocationState, ResponseErrorKind
from authrelay.core.request_outcome import RequestOutcome


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    endpoint: str | None = None
    resource_id: str | None = None
    user_message: str | None = None
    debug_info: dict[str, Any] | None = None


class AuthRelayError(Exception):
    """Base exception for all AuthRelay errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.context.user_message or self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "endpoint": self.context.endpoint,
                    "resource_id": self.context.resource_id,
                },
            }
        }


# ─── Request Errors (surfaced from a final outcome) ─────────────

class SessionExpiredError(AuthRelayError):
    """Session still expired after one refresh-and-retry cycle. Terminal."""
    def __init__(self, endpoint: str, context: ErrorContext | None = None):
        super().__init__(
            f"Session expired on '{endpoint}' and did not recover after refresh",
            "SESSION_EXPIRED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.ERROR, context, 401,
        )
        self.endpoint = endpoint


class UpstreamRequestError(AuthRelayError):
    """Request operation reported a non-retryable failure."""
    def __init__(self, endpoint: str, context: ErrorContext | None = None):
        super().__init__(
            f"Request to '{endpoint}' failed",
            "UPSTREAM_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.ERROR, context, 502,
        )
        self.endpoint = endpoint


class RefreshFailedError(AuthRelayError):
    """Session refresh collaborator failed; the retry was not attempted."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Session refresh failed: {message}",
            "REFRESH_FAILED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.CRITICAL, context, 503,
        )


# ─── Internal Errors ────────────────────────────────────────────

class InvalidTransitionError(AuthRelayError):
    """Invocation state machine asked to leave a terminal state."""
    def __init__(self, state: InvocationState, context: ErrorContext | None = None):
        super().__init__(
            f"No transition out of invocation state '{state.value}'",
            "INVALID_TRANSITION", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.state = state


class UnexpectedError(AuthRelayError):
    """Unhandled exception at the HTTP boundary. Details stay in the log."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "An unexpected error occurred",
            "INTERNAL_ERROR", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )


def error_for_outcome(
    outcome: RequestOutcome, endpoint: str, context: ErrorContext | None = None,
) -> AuthRelayError | None:
    """Map a final outcome to the exception the HTTP boundary raises. None on success."""
    ctx = context or ErrorContext()
    ctx.endpoint = ctx.endpoint or endpoint
    if outcome.error is None:
        return None
    if outcome.error is ResponseErrorKind.SESSION_EXPIRED:
        return SessionExpiredError(endpoint, ctx)
    if outcome.error is ResponseErrorKind.REFRESH_FAILED:
        return RefreshFailedError(f"while requesting '{endpoint}'", ctx)
    return UpstreamRequestError(endpoint, ctx)
