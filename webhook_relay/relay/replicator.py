"""Request replicator — replays one inbound event to many destinations.

Each destination gets a POST with the original body, byte for byte, and the
original end-to-end headers with ``host`` rewritten. Destinations fail
independently: an error on one is logged and recorded, never raised, and
never stops delivery to the others.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from typing import Any

import httpx

from webhook_relay.relay.fanout import gather_settled
from webhook_relay.relay.models import DeliveryOutcome, InboundEvent

logger = logging.getLogger(__name__)

_SCHEME_OR_TRAILING_SLASH = re.compile(r"(^https://)|(^http://)|(/$)")

# Connection-scoped; the outbound client manages its own framing.
_HOP_BY_HOP = frozenset(
    {
        "connection",
        "keep-alive",
        "proxy-authenticate",
        "proxy-authorization",
        "te",
        "trailer",
        "transfer-encoding",
        "upgrade",
    }
)


def bare_host(endpoint: str) -> str:
    """Strip the scheme and a trailing slash: ``https://a.com/`` -> ``a.com``."""
    return _SCHEME_OR_TRAILING_SLASH.sub("", endpoint)


def delivery_url(endpoint: str, path: str) -> str:
    """Join an endpoint and the delivery path without doubling the slash."""
    if endpoint.endswith("/") and path.startswith("/"):
        return endpoint[:-1] + path
    return endpoint + path


def replicate_headers(event: InboundEvent, endpoint: str) -> dict[str, str]:
    """Copy the inbound end-to-end headers, pointing ``host`` at the destination."""
    headers = {name: value for name, value in event.headers.items() if name not in _HOP_BY_HOP}
    headers["host"] = bare_host(endpoint)
    return headers


class RequestReplicator:
    """Concurrent POST fan-out over a shared HTTP client.

    Args:
        http: Shared client; safe for concurrent use across runs.
        request_timeout: Per-destination timeout in seconds.
        batch_timeout: Upper bound in seconds for one whole fan-out.
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        request_timeout: float | None = None,
        batch_timeout: float | None = None,
    ) -> None:
        self._http = http
        self._request_timeout = request_timeout
        self._batch_timeout = batch_timeout

    async def _deliver(self, event: InboundEvent, endpoint: str, path: str) -> httpx.Response:
        url = delivery_url(endpoint, path)
        kwargs: dict[str, Any] = {
            "content": event.body,
            "headers": replicate_headers(event, endpoint),
        }
        if self._request_timeout is not None:
            kwargs["timeout"] = self._request_timeout

        logger.info("Sending request to: %s", url)
        response = await self._http.post(url, **kwargs)
        response.raise_for_status()
        return response

    async def send_all(
        self,
        event: InboundEvent,
        endpoints: Sequence[str],
        path: str,
    ) -> list[DeliveryOutcome]:
        """Deliver to every endpoint; return one outcome per endpoint, in order."""
        if not endpoints:
            return []

        settled = await gather_settled(
            (self._deliver(event, endpoint, path) for endpoint in endpoints),
            timeout=self._batch_timeout,
        )

        outcomes: list[DeliveryOutcome] = []
        for endpoint, result in zip(endpoints, settled):
            url = delivery_url(endpoint, path)
            if result.ok:
                outcomes.append(
                    DeliveryOutcome(endpoint=endpoint, url=url, status_code=result.value.status_code)
                )
                continue

            error = result.error
            status_code = None
            if isinstance(error, httpx.HTTPStatusError):
                status_code = error.response.status_code
            reason = str(error) or type(error).__name__
            logger.warning("Delivery to %s failed: %s", url, reason)
            outcomes.append(
                DeliveryOutcome(endpoint=endpoint, url=url, status_code=status_code, error=reason)
            )
        return outcomes
