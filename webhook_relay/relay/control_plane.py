"""Heroku Platform API client — the two read calls the relay needs.

Raises on any failure; callers decide how to degrade.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from webhook_relay.config import HEROKU_API_URL

logger = logging.getLogger(__name__)

HEROKU_ACCEPT = "application/vnd.heroku+json; version=3"


class ControlPlaneError(Exception):
    """The control plane answered with a record the relay cannot use."""


class HerokuControlPlane:
    """Thin async wrapper over the shared HTTP client.

    Args:
        http: Shared client (connection pool) used for every call.
        api_key: Heroku API token sent as a Bearer credential.
        base_url: API root, always ending in "/".
        timeout: Per-request timeout in seconds.
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        api_key: str,
        base_url: str = HEROKU_API_URL,
        timeout: float | None = None,
    ) -> None:
        self._http = http
        self._api_key = api_key
        self._base_url = base_url
        self._timeout = timeout

    @property
    def headers(self) -> dict[str, str]:
        return {
            "Accept": HEROKU_ACCEPT,
            "Authorization": f"Bearer {self._api_key}",
        }

    async def _get(self, path: str) -> Any:
        url = f"{self._base_url}{path}"
        kwargs: dict[str, Any] = {"headers": self.headers}
        if self._timeout is not None:
            kwargs["timeout"] = self._timeout
        logger.debug("Control plane GET %s", url)
        response = await self._http.get(url, **kwargs)
        response.raise_for_status()
        return response.json()

    async def review_apps(self, pipeline_id: str) -> list[dict[str, Any]]:
        """List the review app records of a pipeline."""
        data = await self._get(f"pipelines/{pipeline_id}/review-apps")
        if not isinstance(data, list):
            raise ControlPlaneError(f"expected a list of review apps, got {type(data).__name__}")
        return data

    async def app_web_url(self, app_id: str) -> str:
        """Return the public web URL of one app."""
        data = await self._get(f"apps/{app_id}")
        web_url = data.get("web_url") if isinstance(data, dict) else None
        if not isinstance(web_url, str) or not web_url:
            raise ControlPlaneError(f"app {app_id} has no web_url")
        return web_url
