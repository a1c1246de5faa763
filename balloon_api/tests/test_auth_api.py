from conftest import auth_headers
from src.core.security import create_refresh_token
from src.db.models.enums import UserRole


def _register(client, username="maria", email="maria@example.com", password="balloons1"):
    return client.post(
        "/api/auth/register",
        json={"username": username, "email": email, "password": password, "full_name": "Maria Lopez"},
    )


def test_health(client):
    r = client.get("/api/health")
    assert r.status_code == 200
    assert r.json()["message"] == "Healthy"
    assert r.headers["X-Correlation-ID"]


def test_correlation_id_is_echoed(client):
    r = client.get("/api/health", headers={"X-Correlation-ID": "abc-123"})
    assert r.headers["X-Correlation-ID"] == "abc-123"


def test_register_creates_designer(client):
    r = _register(client)
    assert r.status_code == 201
    body = r.json()
    assert body["username"] == "maria"
    assert body["role"] == "designer"
    assert body["is_active"] is True
    assert "hashed_password" not in body


def test_register_rejects_duplicates(client):
    assert _register(client).status_code == 201
    r = _register(client, email="other@example.com")
    assert r.status_code == 400
    assert r.json()["error"]["message"] == "Username or email already registered"
    assert _register(client, username="other").status_code == 400


def test_register_validates_input(client):
    r = _register(client, password="123")
    assert r.status_code == 422
    assert r.json()["error"]["type"] == "validation_error"


def test_login_with_username_or_email_and_read_me(client):
    _register(client)
    for login in ("maria", "maria@example.com"):
        r = client.post("/api/auth/login", data={"username": login, "password": "balloons1"})
        assert r.status_code == 200
        tokens = r.json()
        assert tokens["token_type"] == "bearer"

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {tokens['access_token']}"})
    assert me.status_code == 200
    assert me.json()["email"] == "maria@example.com"


def test_login_wrong_password(client):
    _register(client)
    r = client.post("/api/auth/login", data={"username": "maria", "password": "nope-nope"})
    assert r.status_code == 401
    assert r.json()["error"]["message"] == "Invalid credentials"


def test_login_inactive_user(client, make_user):
    make_user("sleepy", password="secret123", is_active=False)
    r = client.post("/api/auth/login", data={"username": "sleepy", "password": "secret123"})
    assert r.status_code == 400


def test_refresh_issues_new_pair(client, designer):
    user, _ = designer
    r = client.post("/api/auth/refresh", json={"refresh_token": create_refresh_token(str(user.id))})
    assert r.status_code == 200
    assert r.json()["access_token"]


def test_refresh_rejects_access_token(client, designer):
    _, headers = designer
    access = headers["Authorization"].split(" ", 1)[1]
    r = client.post("/api/auth/refresh", json={"refresh_token": access})
    assert r.status_code == 401


def test_refresh_token_cannot_authenticate_requests(client, designer):
    user, _ = designer
    refresh = create_refresh_token(str(user.id))
    r = client.get("/api/auth/me", headers={"Authorization": f"Bearer {refresh}"})
    assert r.status_code == 401


def test_protected_route_requires_token(client):
    r = client.get("/api/designs")
    assert r.status_code == 401
    assert r.json()["status"] == 401


def test_logout(client):
    assert client.post("/api/auth/logout").json()["message"] == "Logged out"


def test_users_admin_only_listing(client, designer, admin):
    _, designer_headers = designer
    _, admin_headers = admin
    assert client.get("/api/users", headers=designer_headers).status_code == 403
    r = client.get("/api/users", headers=admin_headers)
    assert r.status_code == 200
    assert {u["username"] for u in r.json()} == {"designer", "admin"}


def test_user_can_update_self_but_not_role(client, designer):
    user, headers = designer
    r = client.patch(f"/api/users/{user.id}", json={"full_name": "New Name"}, headers=headers)
    assert r.status_code == 200
    assert r.json()["full_name"] == "New Name"

    r = client.patch(f"/api/users/{user.id}", json={"role": "admin"}, headers=headers)
    assert r.status_code == 403


def test_admin_changes_role_and_deletes(client, make_user, admin):
    _, admin_headers = admin
    other = make_user("helper")
    r = client.patch(f"/api/users/{other.id}", json={"role": "inventory_manager"}, headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["role"] == "inventory_manager"

    assert client.delete(f"/api/users/{other.id}", headers=admin_headers).status_code == 204
    assert client.get(f"/api/users/{other.id}", headers=admin_headers).status_code == 404


def test_user_cannot_read_other_users(client, make_user, designer):
    _, headers = designer
    other = make_user("someone", role=UserRole.DESIGNER)
    assert client.get(f"/api/users/{other.id}", headers=headers).status_code == 403
    assert client.get(f"/api/users/{other.id}", headers=auth_headers(other)).status_code == 200
