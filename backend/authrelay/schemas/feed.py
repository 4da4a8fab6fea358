"""Feed Schemas — stub Post/Comment payloads and list response envelopes.

Invariants:
    - FeedResponse.count always equals len(items)

Design Decisions:
    - Generic FeedResponse[T] over one envelope per resource: same shape for
      posts and comments, mirroring the generic invoker
"""

from typing import Generic, TypeVar

from pydantic import BaseModel, Field, model_validator

T = TypeVar("T")


class Post(BaseModel):
    """Stub post."""
    id: str
    user_id: str
    title: str = ""


class Comment(BaseModel):
    """Stub comment."""
    id: str
    comment_id: str
    body: str = ""


class FeedResponse(BaseModel, Generic[T]):
    """List envelope returned by the feed routes."""
    items: list[T] = Field(default_factory=list)
    count: int = 0

    @model_validator(mode="after")
    def sync_count(self):
        self.count = len(self.items)
        return self
