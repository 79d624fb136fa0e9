"""Run the relay: ``python -m webhook_relay`` (or the ``webhook-relay`` script)."""

from __future__ import annotations

import logging
import sys

import uvicorn

from webhook_relay.config import RelaySettings, get_settings
from webhook_relay.serve import create_app


def _setup_logging(settings: RelaySettings) -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        stream=sys.stderr,
    )


def main() -> None:
    settings = get_settings()
    _setup_logging(settings)
    logging.getLogger(__name__).info("Proxy listening for requests on port: %d", settings.port)
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
