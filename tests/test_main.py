"""Tests for doorsign/main.py - application factory and lifespan."""

from unittest.mock import patch

from fastapi.testclient import TestClient

from doorsign.main import create_app
from doorsign.store import InMemoryStatusStore


def test_lifespan_seeds_and_bootstraps(test_settings):
    settings = test_settings.model_copy(
        update={
            "admin_username": "admin",
            "admin_password": "admin-pass",
            "sync_back_enabled": False,
        }
    )
    store = InMemoryStatusStore()
    app = create_app(settings=settings, store=store)

    with TestClient(app) as client:
        assert [o.name for o in store.list_status_options()][0] == "Available"
        admin = store.get_user_by_username("admin")
        assert admin is not None and admin.is_admin
        assert app.state.scheduler is None

        response = client.post(
            "/api/auth/login", json={"username": "admin", "password": "admin-pass"}
        )
        assert response.status_code == 200


def test_lifespan_starts_and_stops_scheduler(test_settings):
    settings = test_settings.model_copy(
        update={"sync_back_enabled": True, "sync_interval_minutes": 5}
    )
    app = create_app(settings=settings, store=InMemoryStatusStore())

    with patch("doorsign.main.close_epaper_http_client") as close_client:
        with TestClient(app):
            scheduler = app.state.scheduler
            assert scheduler is not None
            assert scheduler.running

        assert not scheduler.running
        close_client.assert_awaited_once()


def test_memory_store_has_no_admin_ui(test_settings):
    app = create_app(settings=test_settings, store=InMemoryStatusStore())

    assert not any(getattr(route, "path", None) == "/admin" for route in app.routes)


def test_sql_store_mounts_admin_ui(test_settings, sql_store):
    app = create_app(settings=test_settings, store=sql_store)

    assert any(getattr(route, "path", None) == "/admin" for route in app.routes)


def test_session_cookie_is_signed(admin_client: TestClient):
    cookie = admin_client.cookies.get("session")

    assert cookie
    assert "user_id" not in cookie
