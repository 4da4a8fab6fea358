"""Request Outcome — the (result, error) pair every request operation reports.

Invariants:
    - Immutable: an outcome is forwarded unchanged, never patched in place
    - error is None on success; result is None on every failure built here
    - REFRESH_FAILED never enters through as_outcome: only the invoker makes it
    - Unpacks like a 2-tuple so sinks can take (result, error) positionally

Design Decisions:
    - Generic frozen dataclass over a bare tuple: named fields plus helpers,
      while as_outcome() still accepts plain 2-tuples from simple callables
"""

from dataclasses import dataclass
from typing import Generic, Iterator, TypeVar

from authrelay.core.domain_types import ResponseErrorKind

T = TypeVar("T")


@dataclass(frozen=True)
class RequestOutcome(Generic[T]):
    """Final or intermediate outcome of one request attempt."""
    result: T | None = None
    error: ResponseErrorKind | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def session_expired(self) -> bool:
        return self.error is ResponseErrorKind.SESSION_EXPIRED

    def __iter__(self) -> Iterator:
        yield self.result
        yield self.error

    @classmethod
    def success(cls, result: T) -> "RequestOutcome[T]":
        return cls(result=result, error=None)

    @classmethod
    def failure(cls, error: ResponseErrorKind) -> "RequestOutcome[T]":
        return cls(result=None, error=error)


def as_outcome(value: object) -> RequestOutcome:
    """Normalize what a request operation returned into a RequestOutcome.

    Accepts a RequestOutcome as-is or a (result, error) 2-tuple. The error slot
    may hold a ResponseErrorKind or its string value. A request reporting
    REFRESH_FAILED raises ValueError.
    """
    if isinstance(value, RequestOutcome):
        outcome = value
    elif isinstance(value, tuple) and len(value) == 2:
        result, error = value
        if error is not None and not isinstance(error, ResponseErrorKind):
            error = ResponseErrorKind(error)
        outcome = RequestOutcome(result=result, error=error)
    else:
        raise TypeError(
            f"Request operation must return RequestOutcome or (result, error), "
            f"got {type(value).__name__}",
        )
    if outcome.error is ResponseErrorKind.REFRESH_FAILED:
        raise ValueError("REFRESH_FAILED is reserved for the invoker")
    return outcome
