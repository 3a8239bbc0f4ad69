from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from pymongo.errors import ServerSelectionTimeoutError

from feed_service.app.exceptions import TransientStorageError
from feed_service.app.main import create_app
from feed_service.app.repositories import database as database_module
from feed_service.app.services.content_service import get_content_store
from feed_service.app.services.feed_service import get_feed_assembler
from feed_service.app.services.identity_service import get_identity_directory
from feed_service.app.services.reactions_service import get_bookmark_ledger, get_heart_ledger
from feed_service.app.services.social_graph_service import get_social_graph


def _make_client(engine) -> TestClient:
    app = create_app()

    app.dependency_overrides[get_content_store] = lambda: engine.content
    app.dependency_overrides[get_feed_assembler] = lambda: engine.feed
    app.dependency_overrides[get_heart_ledger] = lambda: engine.hearts
    app.dependency_overrides[get_bookmark_ledger] = lambda: engine.bookmarks
    app.dependency_overrides[get_social_graph] = lambda: engine.social
    app.dependency_overrides[get_identity_directory] = lambda: engine.identity

    return TestClient(app)


@pytest.fixture
def client(engine) -> TestClient:
    return _make_client(engine)


def test_health(client: TestClient) -> None:
    resp = client.get("/health")

    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_create_post_returns_tags(client: TestClient) -> None:
    resp = client.post("/api/v1/posts", json={"author_id": "alice", "text": "hi #cs4370"})

    assert resp.status_code == 201
    body = resp.json()
    assert body["tags"] == ["#cs4370"]
    assert body["tags_indexed"] is True
    assert body["created_at"].endswith("+00:00")


def test_create_post_with_blank_text_is_400(client: TestClient, engine) -> None:
    resp = client.post("/api/v1/posts", json={"author_id": "alice", "text": "   "})

    assert resp.status_code == 400
    assert resp.json()["retryable"] is False
    assert engine.post_repo.posts == {}


def test_comment_on_missing_post_is_404(client: TestClient) -> None:
    resp = client.post(
        "/api/v1/posts/post-9999/comments", json={"author_id": "bob", "text": "hello"}
    )

    assert resp.status_code == 404


def test_post_detail(client: TestClient, engine) -> None:
    post_id = engine.post("alice", "hello")
    engine.content.add_comment(post_id, "bob", "nice")

    resp = client.get(f"/api/v1/posts/{post_id}", params={"viewer_id": "bob"})

    assert resp.status_code == 200
    body = resp.json()
    assert body["post"]["comment_count"] == 1
    assert [c["text"] for c in body["comments"]] == ["nice"]

    assert client.get("/api/v1/posts/post-9999", params={"viewer_id": "bob"}).status_code == 404


def test_heart_toggle_reports_live_count(client: TestClient, engine) -> None:
    post_id = engine.post("alice", "hello")

    first = client.put(f"/api/v1/posts/{post_id}/heart", json={"user_id": "bob", "present": True})
    again = client.put(f"/api/v1/posts/{post_id}/heart", json={"user_id": "bob", "present": True})

    assert first.json()["result"] == "added"
    assert again.json()["result"] == "already_present"
    assert again.json()["count"] == 1
    assert again.json()["present"] is True


def test_bookmark_feed_and_no_content(client: TestClient, engine) -> None:
    post_id = engine.post("alice", "hello")

    empty = client.get("/api/v1/feed/bookmarks", params={"viewer_id": "bob"})
    assert empty.status_code == 200
    assert empty.json() == {"items": [], "no_content": True}

    client.put(f"/api/v1/posts/{post_id}/bookmark", json={"user_id": "bob", "present": True})
    body = client.get("/api/v1/feed/bookmarks", params={"viewer_id": "bob"}).json()
    assert [i["post_id"] for i in body["items"]] == [post_id]
    assert body["items"][0]["viewer_has_bookmarked"] is True


def test_hashtag_search(client: TestClient, engine) -> None:
    post_id = engine.post("alice", "hello #cs4370 world")

    body = client.get(
        "/api/v1/feed/search/hashtags", params={"q": "#cs4370", "viewer_id": "bob"}
    ).json()

    assert [i["post_id"] for i in body["items"]] == [post_id]


def test_follow_unknown_user_is_404(client: TestClient) -> None:
    resp = client.put(
        "/api/v1/people/nobody/follow", json={"follower_id": "alice", "following": True}
    )

    assert resp.status_code == 404


def test_follow_then_following_feed(client: TestClient, engine) -> None:
    post_id = engine.post("bob", "from bob")

    resp = client.put(
        "/api/v1/people/bob/follow", json={"follower_id": "alice", "following": True}
    )
    assert resp.json()["result"] == "added"
    assert resp.json()["following"] is True

    body = client.get("/api/v1/feed/following", params={"viewer_id": "alice"}).json()
    assert [i["post_id"] for i in body["items"]] == [post_id]

    followers = client.get("/api/v1/people/bob/followers").json()
    assert followers["user_ids"] == ["alice"]


def test_profile_last_active(client: TestClient, engine) -> None:
    resp = client.get("/api/v1/people/carol")
    assert resp.status_code == 200
    assert resp.json()["last_active_at"] is None

    assert client.get("/api/v1/people/nobody").status_code == 404


def test_transient_storage_error_is_503() -> None:
    class _Unavailable:
        def global_feed(self, viewer_id: str):
            raise TransientStorageError()

    app = create_app()
    app.dependency_overrides[get_feed_assembler] = lambda: _Unavailable()
    client = TestClient(app)

    resp = client.get("/api/v1/feed/global", params={"viewer_id": "alice"})

    assert resp.status_code == 503
    assert resp.json()["retryable"] is True


def test_unreachable_store_is_503_through_real_dependencies(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    def _unreachable():
        raise ServerSelectionTimeoutError("127.0.0.1:1: [Errno 111] Connection refused")

    monkeypatch.setattr(database_module, "get_database", _unreachable)
    client = TestClient(create_app())

    resp = client.get("/api/v1/feed/global", params={"viewer_id": "alice"})

    assert resp.status_code == 503
    body = resp.json()
    assert body["retryable"] is True
    assert "127.0.0.1" not in body["detail"]
