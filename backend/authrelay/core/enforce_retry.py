"""Retry Enforcement — pure decision table for the refresh-and-retry state machine.

Invariants:
    - next_state is PURE: maps (state, error) to the next state, never mutates
    - Only SESSION_EXPIRED on the FIRST attempt leads to a refresh
    - AWAITING_SECOND_ATTEMPT always goes to DONE (at most one retry)
    - DONE is terminal; asking for a transition out of it raises

Design Decisions:
    - Shell (infrastructure/refresh_invoker.py) does the awaiting and asks this
      module what to do next: keeps the ordering guarantee testable without a loop
    - Refresh failure expressed as REFRESH_FAILED on the AWAITING_REFRESH edge,
      so the policy decision is one more row in the same table
"""

from authrelay.core.domain_types import (
    InvocationState, RefreshFailurePolicy, ResponseErrorKind,
)
from authrelay.core.errors import InvalidTransitionError
from authrelay.core.request_outcome import RequestOutcome


def should_refresh(error: ResponseErrorKind | None) -> bool:
    """Only an expired session is worth a refresh."""
    return error is ResponseErrorKind.SESSION_EXPIRED


def next_state(
    state: InvocationState, error: ResponseErrorKind | None = None,
) -> InvocationState:
    """Advance one step. `error` is the outcome of the step that just finished."""
    if state is InvocationState.AWAITING_FIRST_ATTEMPT:
        if should_refresh(error):
            return InvocationState.AWAITING_REFRESH
        return InvocationState.DONE

    if state is InvocationState.AWAITING_REFRESH:
        if error is ResponseErrorKind.REFRESH_FAILED:
            return InvocationState.DONE
        return InvocationState.AWAITING_SECOND_ATTEMPT

    if state is InvocationState.AWAITING_SECOND_ATTEMPT:
        return InvocationState.DONE

    raise InvalidTransitionError(state)


def refresh_failure_outcome(
    policy: RefreshFailurePolicy,
) -> RequestOutcome | None:
    """Outcome to complete with after a failed refresh, or None to retry anyway."""
    if policy is RefreshFailurePolicy.SURFACE:
        return RequestOutcome.failure(ResponseErrorKind.REFRESH_FAILED)
    return None
