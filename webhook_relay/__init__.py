"""Stripe webhook fan-out relay.

Receives a Stripe webhook, verifies it, and replays it to every review app
of a Heroku pipeline.
"""

__version__ = "0.1.0"
