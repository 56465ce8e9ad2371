"""Tests for auth domain router."""

from fastapi.testclient import TestClient


def test_login_sets_session(anon_client: TestClient, admin_user):
    response = anon_client.post(
        "/api/auth/login", json={"username": "alice", "password": "alice-pass"}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["username"] == "alice"
    assert data["role"] == "admin"
    assert "password_hash" not in data
    # Admins see their e-paper credentials
    assert data["epaper_import_key"] == "alice-secret"
    assert data["last_updated"].endswith("Z")

    me = anon_client.get("/api/auth/user")
    assert me.status_code == 200
    assert me.json()["id"] == str(admin_user.id)


def test_regular_login_hides_epaper_credentials(anon_client: TestClient, regular_user):
    response = anon_client.post(
        "/api/auth/login", json={"username": "bob", "password": "bob-pass"}
    )

    assert response.status_code == 200
    data = response.json()
    assert "password_hash" not in data
    assert "epaper_import_key" not in data
    assert "epaper_export_url" not in data


def test_login_wrong_password(anon_client: TestClient, admin_user):
    response = anon_client.post(
        "/api/auth/login", json={"username": "alice", "password": "nope"}
    )

    assert response.status_code == 401
    assert response.json()["type"] == "invalid_credentials"


def test_login_unknown_user(anon_client: TestClient):
    response = anon_client.post(
        "/api/auth/login", json={"username": "ghost", "password": "nope"}
    )

    assert response.status_code == 401
    assert response.json()["type"] == "invalid_credentials"


def test_login_validation_error_is_400(anon_client: TestClient):
    response = anon_client.post("/api/auth/login", json={"username": ""})

    assert response.status_code == 400
    assert response.json()["type"] == "validation_error"


def test_current_user_requires_session(anon_client: TestClient):
    response = anon_client.get("/api/auth/user")

    assert response.status_code == 401
    assert response.json()["type"] == "not_authenticated"


def test_logout_clears_session(admin_client: TestClient):
    assert admin_client.get("/api/auth/user").status_code == 200

    response = admin_client.post("/api/auth/logout")

    assert response.status_code == 200
    assert response.json() == {"message": "Logout successful"}
    assert admin_client.get("/api/auth/user").status_code == 401


def test_deleted_user_session_stops_working(
    regular_client: TestClient, regular_user, memory_store
):
    memory_store.delete_user(regular_user.id)

    assert regular_client.get("/api/auth/user").status_code == 401
