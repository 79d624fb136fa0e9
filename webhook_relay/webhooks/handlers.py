"""Webhook HTTP handlers — FastAPI route handlers for the inbound webhook.

Each request:
1. Reads raw body (needed for HMAC verification, and relayed verbatim)
2. Verifies the Stripe signature (when enabled)
3. Schedules the fan-out as a background task
4. Returns 200 immediately, whatever happens downstream

Security contract:
- Never return error details to the webhook caller
- Return 400 only for signature failures
- Log all webhook activity for audit trail
"""

from __future__ import annotations

import logging
import time

from fastapi import BackgroundTasks, FastAPI, Request
from fastapi.responses import JSONResponse

from webhook_relay.config import RelaySettings
from webhook_relay.relay.coordinator import FanOutCoordinator
from webhook_relay.relay.models import InboundEvent
from webhook_relay.webhooks.verification import verify_webhook

logger = logging.getLogger(__name__)

# Receive counters by outcome (in-memory, per process)
_webhook_counts: dict[str, int] = {}


def _log_webhook(status: str, size: int) -> None:
    """Audit log for webhook activity."""
    _webhook_counts[status] = _webhook_counts.get(status, 0) + 1
    logger.info(
        "WEBHOOK_AUDIT status=%s bytes=%d count=%d",
        status,
        size,
        _webhook_counts[status],
    )


async def _relay_in_background(coordinator: FanOutCoordinator, event: InboundEvent) -> None:
    """Run the fan-out after the response has been sent."""
    try:
        await coordinator.run(event)
    except Exception:
        logger.exception("Unexpected error while relaying webhook")


async def _handle_webhook(request: Request, background_tasks: BackgroundTasks) -> JSONResponse:
    """Verify, acknowledge, and relay one inbound webhook."""
    start = time.time()
    settings: RelaySettings = request.app.state.settings

    body = await request.body()
    headers = {k.lower(): v for k, v in request.headers.items()}

    if not verify_webhook(body, headers, settings):
        _log_webhook("signature_failed", len(body))
        return JSONResponse({"status": "invalid signature"}, status_code=400)

    event = InboundEvent(body=body, headers=headers)
    background_tasks.add_task(_relay_in_background, request.app.state.coordinator, event)
    _log_webhook("accepted", len(body))

    elapsed_ms = (time.time() - start) * 1000
    logger.debug("Webhook acknowledged in %.1fms", elapsed_ms)

    return JSONResponse({"status": "received"}, status_code=200)


def get_webhook_counts() -> dict[str, int]:
    return dict(_webhook_counts)


def reset_webhook_counts() -> None:
    _webhook_counts.clear()


def register_webhook_routes(app: FastAPI, inbound_path: str = "/webhook") -> None:
    """Register the inbound webhook routes on the FastAPI app."""

    @app.post(inbound_path)
    async def stripe_webhook(request: Request, background_tasks: BackgroundTasks):
        """Receive a Stripe webhook and relay it to every review app."""
        return await _handle_webhook(request, background_tasks)

    @app.get(f"{inbound_path}/status")
    async def webhook_status():
        """Webhook receive counts."""
        return {"counts": get_webhook_counts()}

    logger.info("Webhook routes registered: %s", inbound_path)
