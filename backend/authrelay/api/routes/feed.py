"""Feed Routes — posts and comments through the refresh-and-retry invoker.

Invariants:
    - Every route awaits exactly one invoker run per request
    - Failed final outcomes become AuthRelayError subclasses (global handler renders them)
    - POST /session/expire only flips the stub store's lapsed flag

Design Decisions:
    - Routes raise via error_for_outcome instead of building error JSON inline:
      one mapping from ResponseErrorKind to HTTP status
"""

import logging

from fastapi import APIRouter, Depends, status

from authrelay.core.domain_types import CommentId, UserId
from authrelay.core.errors import ErrorContext, error_for_outcome
from authrelay.core.request_outcome import RequestOutcome
from authrelay.schemas.feed import Comment, FeedResponse, Post
from authrelay.services.feed_service import FeedService, get_feed_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1", tags=["feed"])


def _unwrap(outcome: RequestOutcome, endpoint: str, resource_id: str) -> list:
    error = error_for_outcome(
        outcome, endpoint, ErrorContext(resource_id=resource_id),
    )
    if error:
        raise error
    return outcome.result or []


@router.get("/users/{user_id}/posts", response_model=FeedResponse[Post])
async def list_posts(
    user_id: str, service: FeedService = Depends(get_feed_service),
):
    """Posts for a user, refreshing the session once if it expired."""
    outcome = await service.posts(UserId(user_id))
    return FeedResponse[Post](items=_unwrap(outcome, "posts", user_id))


@router.get("/comments/{comment_id}", response_model=FeedResponse[Comment])
async def list_comments(
    comment_id: str, service: FeedService = Depends(get_feed_service),
):
    """Comments for a thread, refreshing the session once if it expired."""
    outcome = await service.comments(CommentId(comment_id))
    return FeedResponse[Comment](
        items=_unwrap(outcome, "comments", comment_id),
    )


@router.post("/session/expire", status_code=status.HTTP_202_ACCEPTED)
async def expire_session(service: FeedService = Depends(get_feed_service)):
    """Mark the stub session lapsed so the next request exercises a refresh."""
    service.tokens.expire()
    return {"status": "expired", "generation": service.tokens.generation}
