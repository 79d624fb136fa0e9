"""FastAPI application factory for the relay.

The lifespan owns the one outbound HTTP client (connection pool) shared by
every fan-out run, and closes it at shutdown.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from webhook_relay import __version__
from webhook_relay.config import RelaySettings, get_settings
from webhook_relay.relay.coordinator import FanOutCoordinator
from webhook_relay.webhooks.handlers import register_webhook_routes

logger = logging.getLogger(__name__)


def build_http_client(
    settings: RelaySettings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create the shared outbound client with bounded pool and timeouts."""
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.request_timeout),
        limits=httpx.Limits(
            max_connections=settings.max_connections,
            max_keepalive_connections=min(20, settings.max_connections),
        ),
        transport=transport,
    )


def create_app(
    settings: RelaySettings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Build the relay app.

    Args:
        settings: Relay settings; defaults to the process-wide instance.
        transport: Optional httpx transport for every outbound call (tests).
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        async with build_http_client(settings, transport) as http:
            app.state.coordinator = FanOutCoordinator.from_settings(settings, http)
            logger.info(
                "Relay ready: pipeline=%s path=%r override=%s",
                settings.heroku_pipeline_id or "<unset>",
                settings.webhook_path,
                settings.test_proxy_url or "none",
            )
            yield
        logger.info("Relay HTTP client closed")

    app = FastAPI(title="Webhook Fan-Out Relay", version=__version__, lifespan=lifespan)
    app.state.settings = settings

    register_webhook_routes(app, settings.inbound_path)

    @app.get("/health")
    async def health():
        """Liveness check."""
        return {"status": "ok"}

    return app
