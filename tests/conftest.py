import os

# Settings are read (and cached) on first import of the app.
os.environ.setdefault("SESSION_SECRET_KEY", "test-secret-key")
os.environ["STORAGE_BACKEND"] = "memory"
os.environ["ENV_NAME"] = "test"
os.environ.pop("ADMIN_USERNAME", None)
os.environ.pop("ADMIN_PASSWORD", None)

import inspect  # noqa: E402
from collections.abc import Callable  # noqa: E402

import anyio  # noqa: E402
import httpx  # noqa: E402
import pytest  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlmodel import SQLModel  # noqa: E402
from sqlmodel.pool import StaticPool  # noqa: E402

from doorsign.core.security import hash_password  # noqa: E402
from doorsign.core.settings import Settings, get_settings  # noqa: E402
from doorsign.db.engine import build_engine  # noqa: E402
from doorsign.epaper.client import (  # noqa: E402
    EpaperClient,
    EpaperEndpoint,
    get_epaper_client,
)
from doorsign.main import create_app  # noqa: E402
from doorsign.store import InMemoryStatusStore, SqlStatusStore, StatusStore  # noqa: E402
from doorsign.user.models import User, UserRole  # noqa: E402

IMPORT_URL = "https://epaper.test/import"
EXPORT_URL = "https://epaper.test/export"


def pytest_configure(config: pytest.Config) -> None:
    # Tests use @pytest.mark.asyncio, but we intentionally rely on anyio.
    config.addinivalue_line(
        "markers",
        "asyncio: run async tests using anyio (project-local hook)",
    )


@pytest.hookimpl(tryfirst=True)
def pytest_pyfunc_call(pyfuncitem: pytest.Function) -> bool | None:
    """Run @pytest.mark.asyncio tests with anyio.

    This avoids adding an external pytest-asyncio dependency.
    """
    if pyfuncitem.get_closest_marker("asyncio") is None:
        return None

    test_func = pyfuncitem.obj
    if not inspect.iscoroutinefunction(test_func):
        return None

    funcargs = {
        name: pyfuncitem.funcargs[name] for name in pyfuncitem._fixtureinfo.argnames
    }

    async def _run_async_test() -> None:
        await test_func(**funcargs)

    anyio.run(_run_async_test)
    return True


# --- Stores ---


@pytest.fixture(name="sql_store")
def sql_store_fixture():
    """SQL store on a private in-memory SQLite database."""
    engine = build_engine("sqlite://", poolclass=StaticPool)
    SQLModel.metadata.create_all(engine)
    yield SqlStatusStore(engine)
    engine.dispose()


@pytest.fixture(name="memory_store")
def memory_store_fixture():
    return InMemoryStatusStore()


@pytest.fixture(name="store", params=["memory", "sql"])
def store_fixture(request: pytest.FixtureRequest) -> StatusStore:
    """Run the test once per backend; both must behave the same."""
    if request.param == "memory":
        return InMemoryStatusStore()
    return request.getfixturevalue("sql_store")


def _make_user(
    store: StatusStore,
    username: str,
    *,
    password: str = "password123",
    role: UserRole = UserRole.regular,
    **fields,
) -> User:
    return store.create_user(
        User(
            username=username,
            password_hash=hash_password(password),
            role=role,
            **fields,
        )
    )


@pytest.fixture(name="make_user")
def make_user_fixture():
    """Factory creating a user with a hashed password directly in a store."""
    return _make_user


# --- E-paper provider ---


class FakeProvider:
    """Scriptable stand-in for the e-paper HTTP service."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.snapshots: dict[str, dict[str, object]] = {}
        self.fail_hosts: set[str] = set()
        self.push_status_code = 200

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        url = request.url
        base = f"{url.scheme}://{url.host}{url.path}".rstrip("/")
        if base in self.fail_hosts:
            raise httpx.ConnectError("provider unreachable", request=request)
        if "import_key" in request.url.params:
            return httpx.Response(self.push_status_code, text="ok")
        if "export_key" in request.url.params:
            return httpx.Response(200, json=self.snapshots.get(base, {}))
        return httpx.Response(400)

    @property
    def pushes(self) -> list[httpx.Request]:
        return [r for r in self.requests if "import_key" in r.url.params]

    @property
    def pulls(self) -> list[httpx.Request]:
        return [r for r in self.requests if "export_key" in r.url.params]


@pytest.fixture(name="provider")
def provider_fixture() -> FakeProvider:
    return FakeProvider()


@pytest.fixture(name="epaper")
def epaper_fixture(provider: FakeProvider) -> EpaperClient:
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(provider.handler))
    return EpaperClient(
        http_client,
        default_import=EpaperEndpoint(IMPORT_URL, "import-key"),
        default_export=EpaperEndpoint(EXPORT_URL, "export-key"),
        push_timeout=1.0,
    )


# --- Application ---


@pytest.fixture(name="test_settings")
def test_settings_fixture() -> Settings:
    return Settings(
        ENV_NAME="test",
        STORAGE_BACKEND="memory",
        SESSION_SECRET_KEY="test-secret-key",
        SYNC_BACK_ENABLED=True,
        SYNC_INTERVAL_MINUTES=0,
    )


@pytest.fixture(name="app")
def app_fixture(
    test_settings: Settings, memory_store: InMemoryStatusStore, epaper: EpaperClient
):
    """App over the in-memory store with the provider mocked out."""
    app = create_app(settings=test_settings, store=memory_store)
    app.dependency_overrides[get_settings] = lambda: test_settings
    app.dependency_overrides[get_epaper_client] = lambda: epaper
    yield app
    app.dependency_overrides.clear()


@pytest.fixture(name="admin_user")
def admin_user_fixture(memory_store: InMemoryStatusStore) -> User:
    return _make_user(
        memory_store,
        "alice",
        password="alice-pass",
        role=UserRole.admin,
        epaper_id="user1",
        epaper_import_key="alice-secret",
    )


@pytest.fixture(name="regular_user")
def regular_user_fixture(memory_store: InMemoryStatusStore, admin_user: User) -> User:
    return _make_user(memory_store, "bob", password="bob-pass", epaper_id="user2")


def login(app: FastAPI, username: str, password: str) -> TestClient:
    client = TestClient(app)
    response = client.post(
        "/api/auth/login", json={"username": username, "password": password}
    )
    assert response.status_code == 200, response.text
    return client


@pytest.fixture(name="client_for")
def client_for_fixture(app: FastAPI) -> Callable[[str, str], TestClient]:
    """Return a factory producing a logged-in client per user."""
    return lambda username, password: login(app, username, password)


@pytest.fixture(name="admin_client")
def admin_client_fixture(app: FastAPI, admin_user: User) -> TestClient:
    return login(app, "alice", "alice-pass")


@pytest.fixture(name="regular_client")
def regular_client_fixture(app: FastAPI, regular_user: User) -> TestClient:
    return login(app, "bob", "bob-pass")


@pytest.fixture(name="anon_client")
def anon_client_fixture(app: FastAPI) -> TestClient:
    return TestClient(app)
