"""Session Refresher — stub session token store plus concurrent-refresh coalescing.

Invariants:
    - SessionTokenStore.refresh() either installs a new token and clears the
      lapsed flag, or raises RefreshFailedError and leaves the old state intact
    - generation increases by exactly one per successful refresh
    - CoalescingRefresher runs at most one refresh at a time; callers arriving
      while it is in flight await that same refresh
    - A caller cancelled while waiting does not cancel the shared refresh

Design Decisions:
    - Token issuance injectable (async callable): real token exchange is an
      external collaborator, the default issuer is a random-hex stub
    - In-flight refresh held as an asyncio.Task and awaited through
      asyncio.shield: one waiter's cancellation stays local to that waiter
    - No lock needed around the in-flight check: nothing awaits between the
      check and the task assignment, so the event loop cannot interleave
"""

import asyncio
import logging
import secrets
from typing import Awaitable, Callable

from authrelay.core.errors import ErrorContext, RefreshFailedError
from authrelay.core.request_protocols import RefreshOperation

logger = logging.getLogger(__name__)

TokenIssuer = Callable[[], Awaitable[str]]


async def _issue_random_token() -> str:
    return secrets.token_hex(16)


class SessionTokenStore:
    """Holds the current session token. Stands in for the external auth service."""

    def __init__(self, issue_token: TokenIssuer | None = None):
        self._issue_token = issue_token or _issue_random_token
        self.token: str | None = None
        self.generation = 0
        self.expired = False

    @property
    def has_session(self) -> bool:
        return self.token is not None

    def expire(self) -> None:
        """Mark the current session as lapsed (server-side expiry, in the stub)."""
        self.expired = True
        logger.info("Session marked expired", extra={
            "refresh_generation": self.generation,
        })

    async def refresh(self) -> None:
        """Obtain a new token. Raises RefreshFailedError if the issuer fails."""
        logger.info("Refreshing session", extra={
            "refresh_generation": self.generation,
        })
        try:
            token = await self._issue_token()
        except Exception as e:
            raise RefreshFailedError(
                str(e), ErrorContext(debug_info={"generation": self.generation}),
            ) from e
        if not token:
            raise RefreshFailedError("token issuer returned an empty token")
        self.token = token
        self.generation += 1
        self.expired = False


class CoalescingRefresher:
    """Wraps a refresh operation so concurrent callers share one in-flight refresh."""

    def __init__(self, refresh: RefreshOperation):
        self._refresh = refresh
        self._inflight: asyncio.Task | None = None
        self.refresh_count = 0

    @property
    def in_flight(self) -> bool:
        return self._inflight is not None and not self._inflight.done()

    async def __call__(self) -> None:
        if not self.in_flight:
            self.refresh_count += 1
            self._inflight = asyncio.ensure_future(self._refresh())
            self._inflight.add_done_callback(self._on_done)
        else:
            logger.debug("Joining in-flight session refresh")
        await asyncio.shield(self._inflight)

    def _on_done(self, task: asyncio.Task) -> None:
        """Mark the outcome retrieved; waiters still receive it through shield()."""
        if not task.cancelled():
            task.exception()
        if self._inflight is task:
            self._inflight = None
