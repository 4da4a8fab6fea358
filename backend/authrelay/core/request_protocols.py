"""Boundary Protocols — contracts for the collaborators the invoker sequences.

Invariants:
    - Core NEVER imports from shell: dependency arrows point inward only
    - RequestOperation produces exactly one outcome per call
    - RefreshOperation signals completion by returning; raising is its only failure channel
    - CompletionSink is called exactly once per top-level invocation

Design Decisions:
    - Protocol over ABC: structural subtyping, plain functions and functools.partial
      objects satisfy these without inheritance
    - Async in Protocol: collaborators do IO, but the decision logic that sequences
      them (core/enforce_retry.py) is never async itself
"""

from typing import Awaitable, Protocol, TypeVar

from authrelay.core.domain_types import ResponseErrorKind
from authrelay.core.request_outcome import RequestOutcome

T_co = TypeVar("T_co", covariant=True)
T_contra = TypeVar("T_contra", contravariant=True)


class RequestOperation(Protocol[T_co]):
    """Endpoint already applied to its arguments, e.g. partial(fetch_posts, user_id)."""
    def __call__(self) -> Awaitable[RequestOutcome[T_co]]: ...


class RefreshOperation(Protocol):
    """Renews the externally-held session. Returns None when done."""
    def __call__(self) -> Awaitable[None]: ...


class CompletionSink(Protocol[T_contra]):
    """Caller-supplied sink for the final (result, error) pair."""
    def __call__(
        self, result: T_contra | None, error: ResponseErrorKind | None,
    ) -> None: ...
