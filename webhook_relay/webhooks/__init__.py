"""Inbound webhook endpoint.

Receives Stripe webhooks, verifies the signature when enabled, acknowledges
immediately, and hands the event to the fan-out engine in the background.
"""
