"""API tests for review details, comments and likes."""
from datetime import datetime, timezone

from app.services import review_service
from conftest import make_async

NOW = datetime(2025, 1, 20, tzinfo=timezone.utc)


def review_row(user):
    return {
        "id": "bob_1",
        "user_id": user["id"],
        "user_name": "bob",
        "book_id": 1,
        "title": "A classic",
        "description": "Worth it.",
        "like_count": 3,
        "comment_count": 1,
        "date": NOW,
    }


def test_get_review_with_comments(client, monkeypatch, user):
    monkeypatch.setattr(review_service, "get_review", make_async(review_row(user)))
    monkeypatch.setattr(
        review_service,
        "list_comments",
        make_async([{"user_name": "carol", "text": "Agreed", "created_at": NOW}]),
    )

    response = client.get("/reviews/bob_1")

    assert response.status_code == 200
    body = response.json()
    assert body["like_count"] == 3
    assert body["comments"][0]["user_name"] == "carol"


def test_get_missing_review(client, monkeypatch):
    monkeypatch.setattr(review_service, "get_review", make_async(None))
    assert client.get("/reviews/nobody_1").status_code == 404


def test_comment_is_attributed_to_commenter(auth_client, monkeypatch, user):
    monkeypatch.setattr(review_service, "get_review", make_async(review_row(user)))
    add = make_async([{"user_name": "alice", "text": "Nice review", "created_at": NOW}])
    monkeypatch.setattr(review_service, "add_comment", add)

    response = auth_client.post("/reviews/bob_1/comments", json={"text": "  Nice review "})

    assert response.status_code == 201
    assert response.json() == [{"user_name": "alice", "text": "Nice review", "created_at": "2025-01-20T00:00:00Z"}]
    args = add.calls[0][0]
    assert args[0] == "bob_1"
    assert args[1]["name"] == "alice"
    assert args[2] == "Nice review"


def test_blank_comment_is_rejected(auth_client):
    assert auth_client.post("/reviews/bob_1/comments", json={"text": "   "}).status_code == 400


def test_comment_on_missing_review(auth_client, monkeypatch):
    monkeypatch.setattr(review_service, "get_review", make_async(None))
    assert auth_client.post("/reviews/bob_1/comments", json={"text": "hi"}).status_code == 404


def test_toggle_like(auth_client, monkeypatch, user):
    monkeypatch.setattr(review_service, "get_review", make_async(review_row(user)))
    toggle = make_async((True, 4))
    monkeypatch.setattr(review_service, "toggle_like", toggle)

    response = auth_client.post("/reviews/bob_1/like")

    assert response.status_code == 200
    assert response.json() == {"liked": True, "like_count": 4}
    assert toggle.calls[0][0] == ("bob_1", user["id"])


def test_like_missing_review(auth_client, monkeypatch):
    monkeypatch.setattr(review_service, "get_review", make_async(None))
    assert auth_client.post("/reviews/bob_1/like").status_code == 404


def test_malformed_review_id_is_not_looked_up(auth_client, monkeypatch):
    lookup = make_async(None)
    monkeypatch.setattr(review_service, "get_review", lookup)

    assert auth_client.get("/reviews/not-a-review").status_code == 404
    assert auth_client.get("/reviews/a_b_1").status_code == 404
    assert auth_client.post("/reviews/alice_x/like").status_code == 404
    assert lookup.calls == []
