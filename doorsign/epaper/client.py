"""E-paper status provider adapter.

Talks to the third-party service that drives the physical door signs.
Every call is best-effort: push returns a PushResult instead of raising and
pull returns an empty snapshot on any failure, so an offline display can
never block or fail an in-app status change.

Wire format (both calls are GETs against ``<url>/``):
- push: ``import_key=<key>&<epaper_id>_status=<value>``
- pull: ``export_key=<key>&my_values=json`` -> ``{"<epaper_id>_status": "..."}``
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Annotated

import httpx
from fastapi import Depends

from doorsign.core.deps import SettingsDep
from doorsign.core.exceptions import ExternalIntegrationError
from doorsign.core.http import get_epaper_http_client
from doorsign.core.retry import with_retry
from doorsign.user.models import User

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EpaperEndpoint:
    """One provider URL plus the API key that goes with it."""

    url: str
    api_key: str

    @classmethod
    def from_parts(cls, url: str | None, api_key: str | None) -> "EpaperEndpoint | None":
        if url and api_key:
            return cls(url=url.rstrip("/"), api_key=api_key)
        return None


class PushOutcome(str, Enum):
    sent = "sent"
    skipped = "skipped"
    failed = "failed"


@dataclass(frozen=True)
class PushResult:
    """Outcome of one push. Callers log it; nothing is raised."""

    outcome: PushOutcome
    reason: str | None = None

    @property
    def ok(self) -> bool:
        return self.outcome == PushOutcome.sent


def status_key(epaper_id: str) -> str:
    """Provider key holding a user's status."""
    return f"{epaper_id}_status"


class EpaperClient:
    """Push/pull adapter for the e-paper provider.

    Per-user credentials win over the globally configured endpoint; with
    neither configured every operation is a silent no-op.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        *,
        default_import: EpaperEndpoint | None = None,
        default_export: EpaperEndpoint | None = None,
        push_timeout: float = 5.0,
        pull_attempts: int = 2,
    ) -> None:
        self._http = http_client
        self._default_import = default_import
        self._default_export = default_export
        self._push_timeout = push_timeout
        self._pull_attempts = pull_attempts

    def import_endpoint_for(self, user: User) -> EpaperEndpoint | None:
        own = EpaperEndpoint.from_parts(user.epaper_import_url, user.epaper_import_key)
        return own or self._default_import

    def export_endpoint_for(self, user: User) -> EpaperEndpoint | None:
        own = EpaperEndpoint.from_parts(user.epaper_export_url, user.epaper_export_key)
        return own or self._default_export

    async def push(
        self,
        endpoint: EpaperEndpoint | None,
        epaper_id: str | None,
        status: str,
        custom_text: str | None = None,
    ) -> PushResult:
        """Send one status to the provider.

        The custom text, when present, is what the sign displays; otherwise
        the status name. The whole call is bounded by the push timeout.
        """
        if endpoint is None:
            return PushResult(PushOutcome.skipped, "e-paper import endpoint not configured")
        if not epaper_id:
            return PushResult(PushOutcome.skipped, "user has no epaper_id")

        params = {
            "import_key": endpoint.api_key,
            status_key(epaper_id): custom_text or status,
        }
        try:
            response = await asyncio.wait_for(
                self._http.get(f"{endpoint.url}/", params=params),
                timeout=self._push_timeout,
            )
            _raise_for_provider_status(response)
        except TimeoutError:
            return PushResult(
                PushOutcome.failed, f"timed out after {self._push_timeout:g}s"
            )
        except httpx.HTTPError as e:
            return PushResult(PushOutcome.failed, f"{type(e).__name__}: {e}")
        except ExternalIntegrationError as e:
            return PushResult(PushOutcome.failed, e.message)

        return PushResult(PushOutcome.sent)

    async def pull(self, endpoint: EpaperEndpoint | None) -> dict[str, str]:
        """Fetch the provider's snapshot of every status it holds.

        Any transport, HTTP status or parse failure yields an empty mapping.
        Transport errors are retried once before giving up.
        """
        if endpoint is None:
            return {}

        params = {"export_key": endpoint.api_key, "my_values": "json"}
        try:
            response = await with_retry(
                lambda: self._http.get(f"{endpoint.url}/", params=params),
                attempts=self._pull_attempts,
                exceptions=(httpx.TransportError,),
            )
            _raise_for_provider_status(response)
            return _parse_snapshot(response)
        except (httpx.HTTPError, ExternalIntegrationError) as e:
            logger.warning("E-paper pull from %s failed: %s", endpoint.url, e)
            return {}


def _raise_for_provider_status(response: httpx.Response) -> None:
    if not response.is_success:
        raise ExternalIntegrationError(
            f"e-paper provider returned HTTP {response.status_code}"
        )


def _parse_snapshot(response: httpx.Response) -> dict[str, str]:
    try:
        data = response.json()
    except ValueError as e:
        raise ExternalIntegrationError("e-paper snapshot is not valid JSON") from e

    if not isinstance(data, dict):
        raise ExternalIntegrationError("e-paper snapshot is not a JSON object")

    return {
        str(key): str(value)
        for key, value in data.items()
        if isinstance(value, str | int | float) and not isinstance(value, bool)
    }


def get_epaper_client(settings: SettingsDep) -> EpaperClient:
    """Build the adapter around the shared HTTP client."""
    return EpaperClient(
        get_epaper_http_client(),
        default_import=EpaperEndpoint.from_parts(
            settings.epaper_import_url, settings.epaper_import_key
        ),
        default_export=EpaperEndpoint.from_parts(
            settings.epaper_export_url, settings.epaper_export_key
        ),
        push_timeout=settings.epaper_push_timeout_seconds,
    )


EpaperDep = Annotated[EpaperClient, Depends(get_epaper_client)]
