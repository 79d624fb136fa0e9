"""Tests for env-driven relay settings."""

from __future__ import annotations

import pydantic
import pytest

from webhook_relay.config import RelaySettings, get_settings

_ENV_NAMES = [
    "HEROKU_API_KEY",
    "HEROKU_PIPELINE_ID",
    "HEROKU_API_URL",
    "PORT",
    "STRIPE_ENDPOINT_SECRET",
    "STRIPE_VERIFY_WEBHOOK_SIGNATURE",
    "TEST_PROXY_URL",
    "WEBHOOK_PATH",
    "LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in _ENV_NAMES:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestRelaySettings:
    def test_defaults(self):
        settings = RelaySettings(_env_file=None)
        assert settings.heroku_api_url == "https://api.heroku.com/"
        assert settings.port == 8000
        assert settings.inbound_path == "/webhook"
        assert settings.stripe_verify_webhook_signature is False
        assert settings.stripe_signature_tolerance == 300
        assert settings.test_proxy_url is None
        assert settings.request_timeout == 10.0
        assert settings.batch_timeout == 30.0

    def test_reads_deployment_env_names(self, monkeypatch):
        monkeypatch.setenv("HEROKU_API_KEY", "test_key")
        monkeypatch.setenv("HEROKU_PIPELINE_ID", "test-pipeline-id")
        monkeypatch.setenv("WEBHOOK_PATH", "/test-webhooks")
        monkeypatch.setenv("PORT", "5000")
        monkeypatch.setenv("STRIPE_VERIFY_WEBHOOK_SIGNATURE", "true")

        settings = RelaySettings(_env_file=None)
        assert settings.heroku_api_key == "test_key"
        assert settings.heroku_pipeline_id == "test-pipeline-id"
        assert settings.webhook_path == "/test-webhooks"
        assert settings.port == 5000
        assert settings.stripe_verify_webhook_signature is True

    def test_blank_test_proxy_url_is_unset(self, monkeypatch):
        monkeypatch.setenv("TEST_PROXY_URL", "")
        assert RelaySettings(_env_file=None).test_proxy_url is None

    def test_api_url_gets_trailing_slash(self):
        settings = RelaySettings(_env_file=None, heroku_api_url="https://heroku.internal")
        assert settings.heroku_api_url == "https://heroku.internal/"

    def test_frozen(self):
        settings = RelaySettings(_env_file=None)
        with pytest.raises(pydantic.ValidationError):
            settings.port = 1

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()

    @pytest.mark.parametrize(
        "raw, expected",
        [("warn", "WARNING"), ("WARN", "WARNING"), (" debug ", "DEBUG"), ("fatal", "CRITICAL"), ("Error", "ERROR")],
    )
    def test_log_level_normalised(self, monkeypatch, raw, expected):
        monkeypatch.setenv("LOG_LEVEL", raw)
        assert RelaySettings(_env_file=None).log_level == expected

    def test_unknown_log_level_rejected(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "verbose")
        with pytest.raises(pydantic.ValidationError):
            RelaySettings(_env_file=None)
