"""
App-wide constants for route configuration.

This module provides a single source of truth for route prefixes, tags,
and common response definitions for API routes.
"""

from dataclasses import dataclass
from typing import Any

# Status assigned to new accounts and shown when nobody has set one yet.
DEFAULT_STATUS = "Available"

# Seeded quick-select catalog: (name, color, sort order).
DEFAULT_STATUS_OPTIONS: tuple[tuple[str, str, str], ...] = (
    ("Available", "green", "0"),
    ("In Meeting", "blue", "1"),
    ("Out", "red", "2"),
    ("Do Not Disturb", "purple", "3"),
    ("Be Right Back", "yellow", "4"),
)

STATUS_MAX_LENGTH = 50
CUSTOM_STATUS_MAX_LENGTH = 50

# Actor recorded on history rows written by the reconciliation run.
SYNC_ACTOR = "sync"


@dataclass(frozen=True)
class RouteConfig:
    """Configuration for a route group."""

    prefix: str
    tag: str


class Routes:
    """Route configurations for all API endpoints."""

    AUTH = RouteConfig(prefix="/api/auth", tag="auth")
    USER = RouteConfig(prefix="/api/users", tag="users")
    MEMBER = RouteConfig(prefix="/api/members", tag="members")
    STATUS_OPTION = RouteConfig(prefix="/api/status-options", tag="status-options")
    SYNC = RouteConfig(prefix="/api/sync", tag="sync")
    HEALTH = RouteConfig(prefix="/health", tag="health")


# Common response definitions for reuse across routers
# Use these when configuring APIRouter or individual endpoints
class CommonResponses:
    """Standard HTTP error response definitions for OpenAPI documentation."""

    UNAUTHORIZED: dict[int, dict[str, Any]] = {
        401: {"description": "Not authenticated or invalid credentials"}
    }
    FORBIDDEN: dict[int, dict[str, Any]] = {
        403: {"description": "Caller lacks permissions for this resource"}
    }
    NOT_FOUND: dict[int, dict[str, Any]] = {404: {"description": "Resource not found"}}
    BAD_REQUEST: dict[int, dict[str, Any]] = {
        400: {"description": "Invalid request data or duplicate key"}
    }
    STORAGE_ERROR: dict[int, dict[str, Any]] = {
        500: {"description": "Storage operation failed"}
    }
