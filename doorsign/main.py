import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from starlette.middleware.sessions import SessionMiddleware

from doorsign.admin.views import mount_admin
from doorsign.core.cors import add_cors_middleware
from doorsign.core.exception_handlers import register_exception_handlers
from doorsign.core.http import close_epaper_http_client
from doorsign.core.logging import configure_logging
from doorsign.core.request_logging import add_request_logging_middleware
from doorsign.core.settings import Settings, get_settings
from doorsign.router import api_router
from doorsign.status_option.service import seed_status_options
from doorsign.store import SqlStatusStore, StatusStore, build_store
from doorsign.sync.scheduler import start_scheduler, stop_scheduler
from doorsign.sync.service import build_sync_service
from doorsign.user.service import bootstrap_admin

configure_logging()

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None, store: StatusStore | None = None
) -> FastAPI:
    """Build the application around one store chosen up front."""
    settings = settings or get_settings()
    store = store if store is not None else build_store(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        store.create_schema()
        seed_status_options(store)
        bootstrap_admin(store, settings)

        scheduler = None
        if settings.sync_back_enabled:
            scheduler = start_scheduler(
                lambda: build_sync_service(store, settings),
                settings.sync_interval_minutes,
            )
        app.state.scheduler = scheduler
        logger.info("Door sign API started (%s store)", settings.storage_backend.value)
        try:
            yield
        finally:
            stop_scheduler(scheduler)
            await close_epaper_http_client()

    app = FastAPI(title="Door Sign", version="0.1.0", lifespan=lifespan)
    app.state.store = store
    app.include_router(api_router)

    # Added before the session middleware so it runs inside it and sees the user.
    add_request_logging_middleware(app)
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.session_secret_key,
        max_age=settings.session_max_age_seconds,
        same_site="lax",
        https_only=settings.is_secure_cookie,
    )
    add_cors_middleware(app, settings)
    register_exception_handlers(app)

    # SQLAdmin UI at /admin; it needs a SQLAlchemy engine.
    if isinstance(store, SqlStatusStore):
        mount_admin(app, store, settings.session_secret_key)

    return app


app = create_app()
