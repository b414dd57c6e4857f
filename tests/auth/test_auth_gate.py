"""
Tests for bearer token verification and the role gates.
"""
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import text
from sqlalchemy.exc import OperationalError

from hospital_admin.auth.dependencies import extract_bearer_token
from hospital_admin.config import Settings
from hospital_admin.core.security import ACCESS_TOKEN_LIFETIME, create_access_token


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.mark.parametrize(
    "header, expected",
    [
        (None, None),
        ("", None),
        ("abc.def.ghi", None),
        ("Token abc.def.ghi", None),
        ("bearer abc.def.ghi", None),
        ("Bearer ", None),
        ("Bearer abc.def.ghi", "abc.def.ghi"),
    ],
)
def test_extract_bearer_token(header, expected):
    assert extract_bearer_token(header) == expected


def test_me_returns_current_user(client, regular_user, user_headers):
    response = client.get("/auth/me", headers=user_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["id"] == regular_user.id
    assert data["isActive"] is True
    assert "passwordHash" not in data


def test_missing_header_is_unauthenticated(client, regular_user):
    response = client.get("/auth/me")
    assert response.status_code == 401
    assert set(response.json()) == {"message"}


def test_header_without_bearer_prefix_is_unauthenticated(client, regular_user, settings):
    token = create_access_token(regular_user.id, "user", settings)
    response = client.get("/auth/me", headers={"Authorization": token})
    assert response.status_code == 401


def test_garbage_token_is_unauthenticated(client):
    response = client.get("/auth/me", headers=bearer("garbage"))
    assert response.status_code == 401


def test_token_with_wrong_signature_is_unauthenticated(client, regular_user):
    token = create_access_token(regular_user.id, "user", Settings(jwt_secret="forged"))
    response = client.get("/auth/me", headers=bearer(token))
    assert response.status_code == 401


def test_expired_token_is_unauthenticated(client, regular_user, settings):
    issued_at = datetime.now(timezone.utc) - ACCESS_TOKEN_LIFETIME - timedelta(seconds=1)
    token = create_access_token(regular_user.id, "user", settings, issued_at=issued_at)
    response = client.get("/auth/me", headers=bearer(token))
    assert response.status_code == 401


def test_token_near_end_of_window_is_accepted(client, regular_user, settings):
    issued_at = datetime.now(timezone.utc) - ACCESS_TOKEN_LIFETIME + timedelta(minutes=1)
    token = create_access_token(regular_user.id, "user", settings, issued_at=issued_at)
    response = client.get("/auth/me", headers=bearer(token))
    assert response.status_code == 200


def test_token_of_deleted_account_is_unauthenticated(client, db, regular_user, user_headers):
    db.delete(regular_user)
    db.commit()

    response = client.get("/auth/me", headers=user_headers)
    assert response.status_code == 401
    assert response.json() == {"message": "Account not found"}


def test_deactivated_account_token_is_rejected(client, admin_headers, regular_user):
    login = client.post("/auth/login", json={"username": "alice", "password": "secret123"})
    headers = bearer(login.json()["token"])
    assert client.get("/auth/me", headers=headers).status_code == 200

    response = client.patch(
        f"/users/{regular_user.id}/status", json={"isActive": False}, headers=admin_headers
    )
    assert response.status_code == 200

    replay = client.get("/auth/me", headers=headers)
    assert replay.status_code == 401
    assert replay.json() == {"message": "Account disabled"}


def test_disabled_account_can_still_log_in_but_not_use_token(client, make_user):
    make_user(username="carol", password="pw123456", is_active=False)
    login = client.post("/auth/login", json={"username": "carol", "password": "pw123456"})
    assert login.status_code == 200

    response = client.get("/auth/me", headers=bearer(login.json()["token"]))
    assert response.status_code == 401


def test_admin_route_rejects_regular_user(client, user_headers):
    response = client.get("/users", headers=user_headers)
    assert response.status_code == 403
    assert set(response.json()) == {"message"}


def test_admin_route_accepts_admin(client, admin_headers):
    response = client.get("/users", headers=admin_headers)
    assert response.status_code == 200


def test_admin_route_checks_identity_before_role(client):
    response = client.get("/users")
    assert response.status_code == 401


def test_user_or_admin_route_accepts_both_roles(client, user_headers, admin_headers):
    assert client.get("/doctors", headers=user_headers).status_code == 200
    assert client.get("/doctors", headers=admin_headers).status_code == 200


def test_role_is_read_from_store_not_token(client, db, regular_user, settings):
    # A token claiming admin does not grant admin to a regular account
    token = create_access_token(regular_user.id, "admin", settings)
    response = client.get("/users", headers=bearer(token))
    assert response.status_code == 403


def test_unknown_stored_role_is_rejected_as_unauthenticated(client, db, regular_user, user_headers):
    db.execute(text("UPDATE users SET role = 'NURSE' WHERE id = :id"), {"id": regular_user.id})
    db.commit()

    response = client.get("/auth/me", headers=user_headers)
    assert response.status_code == 401
    assert response.json() == {"message": "Authentication failed"}


@pytest.mark.parametrize(
    "error",
    [
        OperationalError("SELECT users", {}, Exception("database is locked")),
        RuntimeError("connection pool exhausted"),
    ],
)
def test_lookup_failure_is_rejected_as_unauthenticated(client, monkeypatch, user_headers, error):
    def failing_lookup(db, user_id):
        raise error

    monkeypatch.setattr("hospital_admin.auth.dependencies.get_user_by_id", failing_lookup)

    response = client.get("/auth/me", headers=user_headers)
    assert response.status_code == 401
    assert response.json() == {"message": "Authentication failed"}
