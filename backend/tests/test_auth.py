from conftest import auth_headers, register, set_roles

from storefront.utils.security import create_access_token


def test_register_returns_user_and_token(client):
    body = register(client, "New@Example.com")
    assert body["email"] == "new@example.com"
    assert body["roles"] == ["user"]
    assert body["is_active"] is True
    assert body["token"]
    assert "password" not in body


def test_register_duplicate_email_is_400(client):
    register(client, "dup@example.com")
    res = client.post(
        "/api/auth/register",
        json={"email": "dup@example.com", "password": "Abc123", "full_name": "Again"},
    )
    assert res.status_code == 400
    assert "email" in res.json()["detail"]


def test_register_rejects_weak_password(client):
    res = client.post(
        "/api/auth/register",
        json={"email": "weak@example.com", "password": "abcdef", "full_name": "Weak"},
    )
    assert res.status_code == 422


def test_login(client):
    register(client, "login@example.com")
    ok = client.post("/api/auth/login", json={"email": "login@example.com", "password": "Abc123"})
    assert ok.status_code == 200
    assert ok.json()["token"]

    bad = client.post("/api/auth/login", json={"email": "login@example.com", "password": "Wrong1"})
    assert bad.status_code == 401
    assert bad.json()["detail"] == "Credentials are not valid (email|password)"

    unknown = client.post("/api/auth/login", json={"email": "who@example.com", "password": "Abc123"})
    assert unknown.status_code == 401


def test_check_status_needs_valid_token(client):
    headers = auth_headers(client, "status@example.com")
    res = client.get("/api/auth/check-status", headers=headers)
    assert res.status_code == 200
    assert res.json()["email"] == "status@example.com"

    assert client.get("/api/auth/check-status").status_code == 401
    res = client.get("/api/auth/check-status", headers={"Authorization": "Bearer garbage"})
    assert res.status_code == 401
    assert res.json()["detail"] == "Token not valid"


def test_token_for_deleted_user_is_rejected(client):
    token = create_access_token("00000000-0000-0000-0000-000000000000")
    res = client.get("/api/auth/check-status", headers={"Authorization": f"Bearer {token}"})
    assert res.status_code == 401


def test_inactive_user_is_rejected(client):
    headers = auth_headers(client, "gone@example.com")
    set_roles("gone@example.com", ["user"], is_active=False)
    res = client.get("/api/auth/check-status", headers=headers)
    assert res.status_code == 401
    assert res.json()["detail"] == "User is inactive, talk with an admin"


def test_private_route_requires_super_user(client):
    user = auth_headers(client, "u@example.com", roles=("user",))
    assert client.get("/api/auth/private", headers=user).status_code == 403

    boss = auth_headers(client, "boss@example.com", roles=("super-user",))
    res = client.get("/api/auth/private", headers=boss)
    assert res.status_code == 200
    assert res.json()["ok"] is True


def test_admin_manages_users(client, admin_headers):
    target = register(client, "target@example.com")

    res = client.get("/api/auth", headers=admin_headers)
    assert res.status_code == 200
    assert {"admin@example.com", "target@example.com"} <= {u["email"] for u in res.json()}

    res = client.patch(
        f"/api/auth/{target['id']}", json={"full_name": "Renamed"}, headers=admin_headers
    )
    assert res.status_code == 200
    assert res.json()["full_name"] == "Renamed"

    res = client.delete(f"/api/auth/{target['id']}", headers=admin_headers)
    assert res.status_code == 204
    res = client.delete(f"/api/auth/{target['id']}", headers=admin_headers)
    assert res.status_code == 404


def test_register_rejects_password_over_bcrypt_limit(client):
    # 50 characters but 191 UTF-8 bytes
    res = client.post(
        "/api/auth/register",
        json={"email": "emoji@example.com", "password": "Aa1" + "\U0001F600" * 47, "full_name": "Emoji"},
    )
    assert res.status_code == 422
    assert "72 bytes" in res.text
