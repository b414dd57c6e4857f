"""
Tests for the /users endpoints.
"""
from hospital_admin.auth.models import User


def test_list_users_newest_first_without_passwords(client, admin_user, make_user, admin_headers):
    bob = make_user(username="bob")
    carol = make_user(username="carol")

    response = client.get("/users", headers=admin_headers)
    assert response.status_code == 200
    data = response.json()

    assert [u["username"] for u in data] == [carol.username, bob.username, admin_user.username]
    for user in data:
        assert "password" not in user
        assert "passwordHash" not in user
        assert {"id", "username", "name", "email", "role", "isActive", "lastLogin", "createdAt"} <= set(user)


def test_get_user(client, regular_user, admin_headers):
    response = client.get(f"/users/{regular_user.id}", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["username"] == "alice"


def test_get_missing_user_is_404(client, admin_headers):
    response = client.get("/users/9999", headers=admin_headers)
    assert response.status_code == 404
    assert response.json() == {"message": "User not found"}


def test_update_user_merges_fields(client, db, regular_user, admin_headers):
    response = client.put(
        f"/users/{regular_user.id}", json={"name": "Alice W.", "role": "admin"}, headers=admin_headers
    )

    assert response.status_code == 200
    assert response.json() == {
        "id": regular_user.id,
        "username": "alice",
        "name": "Alice W.",
        "role": "admin",
        "email": "alice@example.com",
    }


def test_update_user_password_is_stored_hashed(client, db, regular_user, admin_headers):
    response = client.put(
        f"/users/{regular_user.id}", json={"password": "brand-new-pw"}, headers=admin_headers
    )
    assert response.status_code == 200
    assert "password" not in response.json()

    db.expire_all()
    stored = db.query(User).filter(User.id == regular_user.id).one()
    assert stored.password_hash != "brand-new-pw"
    assert "brand-new-pw" not in stored.password_hash
    assert stored.check_password("brand-new-pw")

    fetched = client.get(f"/users/{regular_user.id}", headers=admin_headers).json()
    assert "brand-new-pw" not in fetched.values()

    old = client.post("/auth/login", json={"username": "alice", "password": "secret123"})
    new = client.post("/auth/login", json={"username": "alice", "password": "brand-new-pw"})
    assert old.status_code == 401
    assert new.status_code == 200


def test_update_user_rejects_taken_username(client, make_user, regular_user, admin_headers):
    make_user(username="bob")
    response = client.put(f"/users/{regular_user.id}", json={"username": "bob"}, headers=admin_headers)
    assert response.status_code == 400


def test_update_user_keeping_own_email_is_allowed(client, regular_user, admin_headers):
    response = client.put(
        f"/users/{regular_user.id}", json={"email": "alice@example.com"}, headers=admin_headers
    )
    assert response.status_code == 200


def test_update_missing_user_is_404(client, admin_headers):
    response = client.put("/users/9999", json={"name": "x"}, headers=admin_headers)
    assert response.status_code == 404


def test_update_user_requires_admin(client, regular_user, user_headers):
    response = client.put(f"/users/{regular_user.id}", json={"name": "x"}, headers=user_headers)
    assert response.status_code == 403


def test_patch_status_only_changes_active_flag(client, db, regular_user, admin_headers):
    response = client.patch(
        f"/users/{regular_user.id}/status",
        json={"isActive": False, "name": "ignored"},
        headers=admin_headers,
    )

    assert response.status_code == 200
    data = response.json()
    assert data["isActive"] is False
    assert data["name"] == "Alice Zhang"
    assert "passwordHash" not in data


def test_patch_status_reenables_account(client, make_user, admin_headers):
    carol = make_user(username="carol", password="pw123456", is_active=False)
    response = client.patch(f"/users/{carol.id}/status", json={"isActive": True}, headers=admin_headers)
    assert response.status_code == 200

    login = client.post("/auth/login", json={"username": "carol", "password": "pw123456"})
    me = client.get("/auth/me", headers={"Authorization": f"Bearer {login.json()['token']}"})
    assert me.status_code == 200


def test_patch_status_requires_flag(client, regular_user, admin_headers):
    response = client.patch(f"/users/{regular_user.id}/status", json={}, headers=admin_headers)
    assert response.status_code == 400


def test_patch_status_of_missing_user_is_404(client, admin_headers):
    response = client.patch("/users/9999/status", json={"isActive": False}, headers=admin_headers)
    assert response.status_code == 404


def test_delete_user(client, db, regular_user, admin_headers):
    response = client.delete(f"/users/{regular_user.id}", headers=admin_headers)
    assert response.status_code == 200

    assert client.get(f"/users/{regular_user.id}", headers=admin_headers).status_code == 404


def test_delete_missing_user_is_404(client, admin_headers):
    response = client.delete("/users/9999", headers=admin_headers)
    assert response.status_code == 404
