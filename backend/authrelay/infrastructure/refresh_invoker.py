"""Retrying Request Invoker — refresh the session once and retry when a request reports expiry.

Invariants:
    - Completion fires exactly once per top-level invocation, on every branch
    - At most one retry: a second SESSION_EXPIRED is forwarded, not re-intercepted
    - refresh() has returned before the retried request is issued
    - Outcomes are forwarded unchanged; the only kind introduced here is REFRESH_FAILED
    - asyncio.CancelledError passes through uncaught

Design Decisions:
    - Coroutine form (run) is the primitive; callback form (invoke) schedules run()
      as a task and feeds the sink, so both share one sequencing path
    - State transitions delegated to core/enforce_retry.py (functional core, async shell)
    - Refresh failure handling is a constructor-level policy, not a per-call flag
"""

import asyncio
import logging
from typing import TypeVar

from authrelay.core.domain_types import (
    InvocationState, RefreshFailurePolicy, ResponseErrorKind,
)
from authrelay.core.enforce_retry import next_state, refresh_failure_outcome
from authrelay.core.request_outcome import RequestOutcome, as_outcome
from authrelay.core.request_protocols import (
    CompletionSink, RefreshOperation, RequestOperation,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RetryingRequestInvoker:
    """Runs a request, refreshing the session and retrying once on SESSION_EXPIRED."""

    def __init__(
        self,
        refresh_failure_policy: RefreshFailurePolicy = RefreshFailurePolicy.SURFACE,
    ):
        self.refresh_failure_policy = refresh_failure_policy

    async def run(
        self,
        request: RequestOperation[T],
        refresh: RefreshOperation,
        *,
        endpoint: str = "request",
    ) -> RequestOutcome[T]:
        """Drive one invocation to DONE and return the final outcome."""
        state = InvocationState.AWAITING_FIRST_ATTEMPT
        outcome = as_outcome(await request())
        state = next_state(state, outcome.error)
        if state is InvocationState.DONE:
            self._log_done(endpoint, outcome, state, attempts=1)
            return outcome

        logger.info(
            f"Session expired on {endpoint}, refreshing before retry",
            extra={"endpoint": endpoint, "state": state, "attempt": 1},
        )
        state = await self._refresh(refresh, state, endpoint)
        if state is InvocationState.DONE:
            failed = refresh_failure_outcome(self.refresh_failure_policy)
            self._log_done(endpoint, failed, state, attempts=1)
            return failed

        outcome = as_outcome(await request())
        state = next_state(state, outcome.error)
        self._log_done(endpoint, outcome, state, attempts=2)
        return outcome

    def invoke(
        self,
        request: RequestOperation[T],
        refresh: RefreshOperation,
        completion: CompletionSink[T],
        *,
        endpoint: str = "request",
    ) -> "asyncio.Task[None]":
        """Callback form: schedule run() and hand the final pair to `completion`.

        Must be called with a running event loop. A request that raises instead
        of reporting an outcome completes as (None, OTHER).
        """
        async def _drive() -> None:
            try:
                outcome = await self.run(request, refresh, endpoint=endpoint)
            except Exception as e:
                logger.error(
                    f"Request operation for {endpoint} raised: {e}",
                    exc_info=True,
                    extra={"endpoint": endpoint},
                )
                outcome = RequestOutcome.failure(ResponseErrorKind.OTHER)
            completion(outcome.result, outcome.error)

        return asyncio.get_running_loop().create_task(_drive())

    async def _refresh(
        self, refresh: RefreshOperation, state: InvocationState, endpoint: str,
    ) -> InvocationState:
        """Await the refresh; map a raising refresh through the failure policy."""
        try:
            await refresh()
        except Exception as e:
            surface = self.refresh_failure_policy is RefreshFailurePolicy.SURFACE
            logger.warning(
                f"Session refresh failed for {endpoint}: {e}"
                + ("" if surface else " (retrying anyway)"),
                extra={
                    "endpoint": endpoint,
                    "error_kind": ResponseErrorKind.REFRESH_FAILED,
                },
            )
            if surface:
                return next_state(state, ResponseErrorKind.REFRESH_FAILED)
        return next_state(state)

    def _log_done(
        self, endpoint: str, outcome: RequestOutcome,
        state: InvocationState, attempts: int,
    ) -> None:
        logger.debug(
            f"Request {endpoint} done after {attempts} attempt(s)",
            extra={
                "endpoint": endpoint,
                "attempt": attempts,
                "error_kind": outcome.error,
                "state": state,
            },
        )


def request_and_refresh_if_needed(
    request: RequestOperation[T],
    refresh: RefreshOperation,
    completion: CompletionSink[T],
) -> "asyncio.Task[None]":
    """invoke() with the default SURFACE policy."""
    return RetryingRequestInvoker().invoke(request, refresh, completion)
