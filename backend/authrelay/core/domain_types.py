"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId, CommentId wrap str: never pass bare strings into endpoint stubs
    - ResponseErrorKind is a closed set: request operations only ever report
      SESSION_EXPIRED or OTHER; REFRESH_FAILED is produced by the invoker alone
    - InvocationState has exactly one initial and one terminal state

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders (log extras, error envelopes)
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", str)
CommentId = NewType("CommentId", str)


# ─── Enums ───────────────────────────────────────────────────────

class ResponseErrorKind(str, Enum):
    """Failure kinds carried in the error slot of a (result, error) pair."""
    SESSION_EXPIRED = "session_expired"
    OTHER = "other"
    REFRESH_FAILED = "refresh_failed"


class InvocationState(str, Enum):
    """Per-invocation lifecycle of the refresh-and-retry wrapper."""
    AWAITING_FIRST_ATTEMPT = "awaiting_first_attempt"
    AWAITING_REFRESH = "awaiting_refresh"
    AWAITING_SECOND_ATTEMPT = "awaiting_second_attempt"
    DONE = "done"


class RefreshFailurePolicy(str, Enum):
    """What the invoker does when the refresh operation raises."""
    SURFACE = "surface"            # complete with REFRESH_FAILED, no retry
    RETRY_ANYWAY = "retry_anyway"  # log and issue the retry regardless
