"""API tests for signup, login, logout and token validation."""
from uuid import uuid4

from app.services import user_service
from app.utils.security import create_access_token, decode_access_token
from conftest import TEST_PASSWORD, make_async


def test_signup_returns_token(client, monkeypatch, user):
    monkeypatch.setattr(user_service, "get_user_by_email", make_async(None))
    monkeypatch.setattr(user_service, "get_user_by_name", make_async(None))
    create = make_async(user)
    monkeypatch.setattr(user_service, "create_user", create)

    response = client.post(
        "/auth/signup",
        json={"name": "alice", "email": "alice@example.com", "password": "secret1"},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["token_type"] == "bearer"
    assert decode_access_token(body["access_token"]) == {"sub": str(user["id"]), "ver": 0}
    assert create.calls[0][0] == ("alice", "alice@example.com", "secret1")


def test_signup_rejects_existing_email(client, monkeypatch, user):
    monkeypatch.setattr(user_service, "get_user_by_email", make_async(user))

    response = client.post(
        "/auth/signup",
        json={"name": "alice2", "email": "alice@example.com", "password": "secret1"},
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Email already exists"


def test_signup_rejects_taken_name(client, monkeypatch, user):
    monkeypatch.setattr(user_service, "get_user_by_email", make_async(None))
    monkeypatch.setattr(user_service, "get_user_by_name", make_async(user))

    response = client.post(
        "/auth/signup",
        json={"name": "alice", "email": "other@example.com", "password": "secret1"},
    )
    assert response.status_code == 409


def test_signup_validates_fields(client):
    assert client.post("/auth/signup", json={"name": "a_b", "email": "a@example.com", "password": "secret1"}).status_code == 422
    assert client.post("/auth/signup", json={"name": "", "email": "a@example.com", "password": "secret1"}).status_code == 422
    assert client.post("/auth/signup", json={"name": "ab", "email": "not-an-email", "password": "secret1"}).status_code == 422
    assert client.post("/auth/signup", json={"name": "ab", "email": "a@example.com", "password": "short"}).status_code == 422


def test_login_with_valid_credentials(client, monkeypatch, user):
    monkeypatch.setattr(user_service, "get_user_by_email", make_async(user))

    response = client.post("/auth/login", json={"email": user["email"], "password": TEST_PASSWORD})

    assert response.status_code == 200
    assert decode_access_token(response.json()["access_token"])["sub"] == str(user["id"])


def test_login_with_wrong_password(client, monkeypatch, user):
    monkeypatch.setattr(user_service, "get_user_by_email", make_async(user))

    response = client.post("/auth/login", json={"email": user["email"], "password": "nope-nope"})
    assert response.status_code == 401


def test_login_unknown_email(client, monkeypatch):
    monkeypatch.setattr(user_service, "get_user_by_email", make_async(None))

    response = client.post("/auth/login", json={"email": "ghost@example.com", "password": "whatever"})
    assert response.status_code == 401


def test_logout_bumps_token_version(auth_client, monkeypatch, user):
    bump = make_async(1)
    monkeypatch.setattr(user_service, "bump_token_version", bump)

    response = auth_client.post("/auth/logout")

    assert response.status_code == 204
    assert bump.calls[0][0] == (user["id"],)


def test_request_without_token_is_rejected(client):
    assert client.get("/users/me").status_code in (401, 403)


def test_valid_token_authenticates(client, monkeypatch, user):
    monkeypatch.setattr(user_service, "get_user_by_id", make_async(user))
    token = create_access_token(str(user["id"]), version=0)

    response = client.get("/users/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 200
    assert response.json()["name"] == "alice"


def test_revoked_token_is_rejected(client, monkeypatch, user):
    monkeypatch.setattr(user_service, "get_user_by_id", make_async({**user, "token_version": 2}))
    token = create_access_token(str(user["id"]), version=1)

    response = client.get("/users/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401
    assert response.json()["detail"] == "Token has been revoked"


def test_token_for_deleted_user_is_rejected(client, monkeypatch):
    monkeypatch.setattr(user_service, "get_user_by_id", make_async(None))
    token = create_access_token(str(uuid4()))

    response = client.get("/users/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_token_with_non_uuid_subject_is_rejected(client):
    token = create_access_token("alice@example.com")

    response = client.get("/users/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_signup_rejects_blank_names_and_slashes(client, monkeypatch):
    create = make_async(None)
    monkeypatch.setattr(user_service, "create_user", create)

    assert client.post("/auth/signup", json={"name": "   ", "email": "a@example.com", "password": "secret1"}).status_code == 422
    assert client.post("/auth/signup", json={"name": "a/b", "email": "a@example.com", "password": "secret1"}).status_code == 422
    assert create.calls == []


def test_signup_strips_name_and_lowercases_email(client, monkeypatch, user):
    lookup = make_async(None)
    monkeypatch.setattr(user_service, "get_user_by_email", lookup)
    monkeypatch.setattr(user_service, "get_user_by_name", make_async(None))
    create = make_async(user)
    monkeypatch.setattr(user_service, "create_user", create)

    response = client.post(
        "/auth/signup",
        json={"name": "  alice  ", "email": "Alice@Example.COM", "password": "secret1"},
    )

    assert response.status_code == 201
    assert lookup.calls[0][0] == ("alice@example.com",)
    assert create.calls[0][0] == ("alice", "alice@example.com", "secret1")


def test_login_email_is_case_insensitive(client, monkeypatch, user):
    lookup = make_async(user)
    monkeypatch.setattr(user_service, "get_user_by_email", lookup)

    response = client.post("/auth/login", json={"email": "ALICE@example.com", "password": TEST_PASSWORD})

    assert response.status_code == 200
    assert lookup.calls[0][0] == ("alice@example.com",)
