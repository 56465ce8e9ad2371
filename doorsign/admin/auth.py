import uuid

from sqladmin.authentication import AuthenticationBackend
from starlette.requests import Request

from doorsign.auth.exceptions import InvalidCredentialsError
from doorsign.auth.service import authenticate
from doorsign.store.base import StatusStore

ADMIN_SESSION_KEY = "admin_user_id"


class AdminAuth(AuthenticationBackend):
    """SQLAdmin auth against the status store; admin role required."""

    def __init__(self, store: StatusStore, secret_key: str) -> None:
        # SQLAdmin uses this secret for its own session middleware.
        super().__init__(secret_key=secret_key)
        self._store = store

    async def login(self, request: Request) -> bool:
        form = await request.form()
        username = str(form.get("username", "")).strip()
        password = str(form.get("password", ""))

        try:
            identity = authenticate(self._store, username, password)
        except InvalidCredentialsError:
            return False
        if not identity.is_admin:
            return False

        request.session[ADMIN_SESSION_KEY] = str(identity.id)
        return True

    async def logout(self, request: Request) -> bool:
        request.session.clear()
        return True

    async def authenticate(self, request: Request) -> bool:
        raw_id = request.session.get(ADMIN_SESSION_KEY)
        if not raw_id:
            return False
        try:
            user = self._store.get_user(uuid.UUID(str(raw_id)))
        except ValueError:
            return False
        return user is not None and user.is_admin
