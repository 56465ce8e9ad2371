from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from doorsign.core.settings import Settings, get_settings


def add_cors_middleware(app: FastAPI, settings: Settings | None = None):
    settings = settings or get_settings()

    # Session cookies are credentials; a wildcard origin cannot carry them.
    origins = settings.cors_origins_list
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["GET", "POST", "PATCH", "DELETE"],
        allow_headers=["*"],
    )
