"""Tests for relay value types."""

from __future__ import annotations

import dataclasses

import pytest

from webhook_relay.relay.models import DeliveryOutcome, InboundEvent


class TestInboundEvent:
    def test_header_names_lowercased(self):
        event = InboundEvent(body=b"{}", headers={"Stripe-Signature": "t=1", "HOST": "a.com"})
        assert dict(event.headers) == {"stripe-signature": "t=1", "host": "a.com"}

    def test_accepts_header_pairs(self):
        event = InboundEvent(body=b"", headers=[("X-A", "1"), ("x-b", "2")])
        assert event.headers["x-a"] == "1"
        assert event.headers["x-b"] == "2"

    def test_is_immutable(self):
        event = InboundEvent(body=b"{}", headers={"host": "a.com"})
        with pytest.raises(dataclasses.FrozenInstanceError):
            event.body = b"changed"
        with pytest.raises(TypeError):
            event.headers["host"] = "b.com"

    def test_copy_of_caller_headers(self):
        source = {"host": "a.com"}
        event = InboundEvent(body=b"", headers=source)
        source["host"] = "evil.com"
        assert event.headers["host"] == "a.com"


class TestDeliveryOutcome:
    def test_ok(self):
        assert DeliveryOutcome(endpoint="https://a.com", url="https://a.com/x", status_code=200).ok

    def test_failed(self):
        outcome = DeliveryOutcome(endpoint="https://a.com", url="https://a.com/x", status_code=502, error="bad gateway")
        assert not outcome.ok
