"""Shared fixtures for the relay test suite."""

from __future__ import annotations

import pytest
import pytest_asyncio

from tests.fakes import FakeHeroku
from webhook_relay.config import RelaySettings


@pytest.fixture
def fake_heroku() -> FakeHeroku:
    return FakeHeroku()


@pytest.fixture
def settings() -> RelaySettings:
    """Settings isolated from the environment and any .env file."""
    return RelaySettings(
        _env_file=None,
        heroku_api_key="test_key",
        heroku_pipeline_id="test-pipeline-id",
        webhook_path="/test-webhooks",
        test_proxy_url=None,
        stripe_verify_webhook_signature=False,
        request_timeout=5.0,
        batch_timeout=5.0,
    )


@pytest_asyncio.fixture
async def http(fake_heroku: FakeHeroku):
    """Shared async client whose every request goes to ``fake_heroku``."""
    async with fake_heroku.client() as client:
        yield client
