"""Feed Service — stub posts/comments endpoints wrapped with session refresh-and-retry.

Invariants:
    - fetch_posts / fetch_comments are raw endpoints: one attempt, one outcome, no retry
    - The expired-user stub id reports SESSION_EXPIRED on every call, refreshed or not
    - posts() / comments() go through the shared RetryingRequestInvoker
    - fetch_posts_and_refresh_session_if_needed keeps the same contract, written
      out inline for a single endpoint

Design Decisions:
    - functools.partial adapts each endpoint to the zero-argument request shape,
      so one invoker serves every endpoint regardless of its parameters
    - Refresh wrapped in CoalescingRefresher when coalesce_refreshes is on:
      concurrent expiries on different endpoints share one token refresh
    - Module-level singleton initialized from lifespan, exposed via FastAPI dependency
"""

import logging
from functools import partial

from authrelay.config import Settings
from authrelay.core.domain_types import (
    CommentId, RefreshFailurePolicy, ResponseErrorKind, UserId,
)
from authrelay.core.enforce_retry import should_refresh
from authrelay.core.request_outcome import RequestOutcome
from authrelay.core.request_protocols import RefreshOperation
from authrelay.infrastructure.refresh_invoker import RetryingRequestInvoker
from authrelay.infrastructure.session_refresher import (
    CoalescingRefresher, SessionTokenStore,
)
from authrelay.schemas.feed import Comment, Post

logger = logging.getLogger(__name__)


class FeedService:
    """Posts and comments endpoints backed by a stub session token store."""

    def __init__(
        self,
        tokens: SessionTokenStore,
        invoker: RetryingRequestInvoker | None = None,
        *,
        coalesce_refreshes: bool = True,
        expired_user_id: str = "123",
        failing_id: str = "500",
    ):
        self.tokens = tokens
        self.invoker = invoker or RetryingRequestInvoker()
        self.refresh: RefreshOperation = (
            CoalescingRefresher(tokens.refresh) if coalesce_refreshes
            else tokens.refresh
        )
        self.expired_user_id = expired_user_id
        self.failing_id = failing_id

    # ─── Raw endpoints ───────────────────────────────────────────

    async def fetch_posts(self, user_id: UserId) -> RequestOutcome[list[Post]]:
        """Fetch the user's posts. Single attempt."""
        if user_id == self.expired_user_id:
            return RequestOutcome.failure(ResponseErrorKind.SESSION_EXPIRED)
        error = self._stub_error(user_id)
        if error:
            return RequestOutcome.failure(error)
        return RequestOutcome.success([
            Post(id=f"{user_id}-p1", user_id=user_id, title="First post"),
            Post(id=f"{user_id}-p2", user_id=user_id, title="Second post"),
        ])

    async def fetch_comments(
        self, comment_id: CommentId,
    ) -> RequestOutcome[list[Comment]]:
        """Fetch comments for a comment thread. Single attempt."""
        error = self._stub_error(comment_id)
        if error:
            return RequestOutcome.failure(error)
        return RequestOutcome.success([
            Comment(id=f"{comment_id}-c1", comment_id=comment_id, body="Nice"),
        ])

    # ─── Wrapped endpoints ───────────────────────────────────────

    async def fetch_posts_and_refresh_session_if_needed(
        self, user_id: UserId,
    ) -> RequestOutcome[list[Post]]:
        """fetch_posts with its own inline refresh-and-retry."""
        outcome = await self.fetch_posts(user_id)
        if not should_refresh(outcome.error):
            return outcome
        try:
            await self.refresh()
        except Exception as e:
            logger.warning(
                f"Session refresh failed for posts: {e}",
                extra={"endpoint": "posts"},
            )
            if self.invoker.refresh_failure_policy is RefreshFailurePolicy.SURFACE:
                return RequestOutcome.failure(ResponseErrorKind.REFRESH_FAILED)
        return await self.fetch_posts(user_id)

    async def posts(self, user_id: UserId) -> RequestOutcome[list[Post]]:
        return await self.invoker.run(
            partial(self.fetch_posts, user_id), self.refresh, endpoint="posts",
        )

    async def comments(
        self, comment_id: CommentId,
    ) -> RequestOutcome[list[Comment]]:
        return await self.invoker.run(
            partial(self.fetch_comments, comment_id), self.refresh,
            endpoint="comments",
        )

    def _stub_error(self, resource_id: str) -> ResponseErrorKind | None:
        if resource_id == self.failing_id:
            return ResponseErrorKind.OTHER
        if self.tokens.expired or not self.tokens.has_session:
            return ResponseErrorKind.SESSION_EXPIRED
        return None


def build_feed_service(settings: Settings) -> FeedService:
    """Wire a FeedService from settings."""
    return FeedService(
        SessionTokenStore(),
        RetryingRequestInvoker(settings.refresh_failure_policy),
        coalesce_refreshes=settings.coalesce_refreshes,
        expired_user_id=settings.stub_expired_user_id,
        failing_id=settings.stub_failing_id,
    )


# Singleton (initialized on startup)
feed_service: FeedService | None = None


def init_feed_service(settings: Settings) -> FeedService:
    global feed_service
    feed_service = build_feed_service(settings)
    return feed_service


def get_feed_service() -> FeedService:
    """FastAPI dependency for the feed service."""
    if not feed_service:
        raise RuntimeError("Feed service not initialized")
    return feed_service
