"""Stripe webhook signature verification — constant-time HMAC.

Security contract:
- All comparisons use hmac.compare_digest() (constant-time)
- Verification enabled but no endpoint secret -> always fails (fail-closed)
- Timestamp tolerance (default 300s) rejects replays
- Verification disabled -> every request is accepted
"""

from __future__ import annotations

import hashlib
import hmac
import logging
import time
from collections.abc import Mapping

from webhook_relay.config import RelaySettings

logger = logging.getLogger(__name__)

STRIPE_SIGNATURE_HEADER = "stripe-signature"

DEFAULT_TOLERANCE = 300


def _parse_signature_header(header: str) -> tuple[str | None, list[str]]:
    """Split ``t=<ts>,v1=<sig>,v1=<sig>`` into the timestamp and v1 signatures."""
    timestamp = None
    signatures: list[str] = []
    for item in header.split(","):
        kv = item.strip().split("=", 1)
        if len(kv) != 2:
            continue
        key, value = kv
        if key == "t":
            timestamp = value
        elif key == "v1":
            signatures.append(value)
    return timestamp, signatures


def verify_stripe(
    body: bytes,
    signature_header: str | None,
    secret: str,
    tolerance: int = DEFAULT_TOLERANCE,
) -> bool:
    """Verify a Stripe-Signature header (v1 scheme) against the raw body.

    Args:
        body: Raw request body bytes
        signature_header: Value of the Stripe-Signature header
        secret: Webhook endpoint signing secret
        tolerance: Maximum age (or clock skew) of the timestamp in seconds

    Returns:
        True if any v1 signature matches and the timestamp is within tolerance
    """
    if not secret:
        logger.warning("STRIPE_ENDPOINT_SECRET not set — rejecting webhook")
        return False
    if not signature_header:
        return False

    timestamp_str, v1_sigs = _parse_signature_header(signature_header)
    if not timestamp_str or not v1_sigs:
        return False

    try:
        timestamp = int(timestamp_str)
    except ValueError:
        return False

    if abs(time.time() - timestamp) > tolerance:
        logger.warning("Stripe webhook timestamp outside tolerance: %s", timestamp)
        return False

    signed_payload = f"{timestamp}.".encode("utf-8") + body
    expected = hmac.new(secret.encode("utf-8"), signed_payload, hashlib.sha256).hexdigest()

    return any(hmac.compare_digest(expected, sig) for sig in v1_sigs)


def verify_webhook(body: bytes, headers: Mapping[str, str], settings: RelaySettings) -> bool:
    """Gate for the inbound endpoint.

    Args:
        body: Raw request body
        headers: Request headers (lowercase keys)
        settings: Relay settings (verification switch, secret, tolerance)

    Returns:
        True if the request may be relayed
    """
    if not settings.stripe_verify_webhook_signature:
        return True

    return verify_stripe(
        body,
        headers.get(STRIPE_SIGNATURE_HEADER),
        settings.stripe_endpoint_secret,
        tolerance=settings.stripe_signature_tolerance,
    )
