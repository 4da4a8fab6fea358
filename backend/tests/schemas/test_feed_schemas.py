"""Feed Schemas — FeedResponse envelope and stub payload validation."""

from authrelay.schemas.feed import Comment, FeedResponse, Post


def test_count_tracks_items():
    resp = FeedResponse[Post](items=[
        Post(id="1-p1", user_id="1"), Post(id="1-p2", user_id="1"),
    ])
    assert resp.count == 2


def test_count_ignores_supplied_value():
    resp = FeedResponse[Comment](items=[], count=5)
    assert resp.count == 0


def test_items_validated_from_dicts():
    resp = FeedResponse[Comment](items=[{"id": "c1", "comment_id": "9"}])
    assert isinstance(resp.items[0], Comment)
    assert resp.items[0].body == ""
