"""Feed Routes — HTTP behavior of posts/comments through the invoker.

Invariants:
    - Success → 200 with items and count
    - Final SESSION_EXPIRED → 401 SESSION_EXPIRED envelope
    - OTHER → 502 UPSTREAM_ERROR envelope
    - REFRESH_FAILED → 503 REFRESH_FAILED envelope
    - Expiring the session then fetching triggers exactly one refresh
"""


async def test_list_posts(client):
    resp = await client.get("/api/v1/users/42/posts")
    assert resp.status_code == 200
    body = resp.json()
    assert body["count"] == 2
    assert [p["id"] for p in body["items"]] == ["42-p1", "42-p2"]


async def test_list_comments(client):
    resp = await client.get("/api/v1/comments/123")
    assert resp.status_code == 200
    body = resp.json()
    assert body["count"] == 1
    assert body["items"][0]["comment_id"] == "123"


async def test_expired_user_is_401(client, api_feed_service):
    resp = await client.get("/api/v1/users/123/posts")
    assert resp.status_code == 401
    error = resp.json()["error"]
    assert error["code"] == "SESSION_EXPIRED"
    assert error["context"]["endpoint"] == "posts"
    assert error["context"]["resource_id"] == "123"
    assert set(error["context"]) == {"endpoint", "resource_id"}
    assert api_feed_service.tokens.generation == 2


async def test_failing_id_is_502(client, api_feed_service):
    resp = await client.get("/api/v1/comments/500")
    assert resp.status_code == 502
    assert resp.json()["error"]["code"] == "UPSTREAM_ERROR"
    assert api_feed_service.tokens.generation == 1


async def test_expire_then_fetch_refreshes_once(client, api_feed_service):
    resp = await client.post("/api/v1/session/expire")
    assert resp.status_code == 202
    assert resp.json()["status"] == "expired"

    resp = await client.get("/api/v1/users/42/posts")
    assert resp.status_code == 200
    assert api_feed_service.tokens.generation == 2
    assert not api_feed_service.tokens.expired


async def test_refresh_failure_is_503(client, api_feed_service):
    async def failing_issuer():
        raise ConnectionError("auth server down")

    api_feed_service.tokens._issue_token = failing_issuer
    api_feed_service.tokens.expire()

    resp = await client.get("/api/v1/users/42/posts")
    assert resp.status_code == 503
    assert resp.json()["error"]["code"] == "REFRESH_FAILED"
