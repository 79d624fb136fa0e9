"""Tests for the process entry point."""

from __future__ import annotations

from unittest.mock import patch

from fastapi import FastAPI

from webhook_relay import __main__ as entry
from webhook_relay.config import RelaySettings


@patch("webhook_relay.__main__.uvicorn.run")
@patch("webhook_relay.__main__.get_settings")
def test_main_serves_on_configured_port(mock_settings, mock_run):
    mock_settings.return_value = RelaySettings(_env_file=None, port=5055, host="127.0.0.1", log_level="WARNING")

    entry.main()

    args, kwargs = mock_run.call_args
    assert isinstance(args[0], FastAPI)
    assert kwargs["host"] == "127.0.0.1"
    assert kwargs["port"] == 5055
    assert kwargs["log_level"] == "warning"


@patch("webhook_relay.__main__.uvicorn.run")
@patch("webhook_relay.__main__.get_settings")
def test_main_passes_uvicorn_a_known_level(mock_settings, mock_run):
    mock_settings.return_value = RelaySettings(_env_file=None, log_level="warn")

    entry.main()

    assert mock_run.call_args.kwargs["log_level"] == "warning"
