"""Fan-out coordinator — one inbound event, end to end."""

from __future__ import annotations

import logging

import httpx

from webhook_relay.config import RelaySettings
from webhook_relay.relay.control_plane import HerokuControlPlane
from webhook_relay.relay.directory import DestinationDirectory
from webhook_relay.relay.models import DeliveryOutcome, InboundEvent
from webhook_relay.relay.replicator import RequestReplicator
from webhook_relay.relay.resolver import EndpointResolver

logger = logging.getLogger(__name__)


class FanOutCoordinator:
    """Directory lookup -> endpoint resolution -> concurrent replication.

    Every run allocates its own member and endpoint lists; nothing is cached
    between runs. ``run`` never raises, and the inbound HTTP layer does not
    wait for it before answering the caller.
    """

    def __init__(
        self,
        directory: DestinationDirectory,
        resolver: EndpointResolver,
        replicator: RequestReplicator,
        group_id: str,
        delivery_path: str,
    ) -> None:
        self.directory = directory
        self.resolver = resolver
        self.replicator = replicator
        self.group_id = group_id
        self.delivery_path = delivery_path

    @classmethod
    def from_settings(cls, settings: RelaySettings, http: httpx.AsyncClient) -> FanOutCoordinator:
        """Wire all stages onto one shared HTTP client."""
        control_plane = HerokuControlPlane(
            http,
            api_key=settings.heroku_api_key,
            base_url=settings.heroku_api_url,
            timeout=settings.request_timeout,
        )
        return cls(
            directory=DestinationDirectory(control_plane),
            resolver=EndpointResolver(
                control_plane,
                override_url=settings.test_proxy_url,
                batch_timeout=settings.batch_timeout,
            ),
            replicator=RequestReplicator(
                http,
                request_timeout=settings.request_timeout,
                batch_timeout=settings.batch_timeout,
            ),
            group_id=settings.heroku_pipeline_id,
            delivery_path=settings.webhook_path,
        )

    async def run(self, event: InboundEvent) -> list[DeliveryOutcome]:
        member_ids = await self.directory.list_members(self.group_id)
        endpoints = await self.resolver.resolve(member_ids)
        if not endpoints:
            logger.info("No destinations resolved for pipeline %s, nothing to relay", self.group_id)
            return []

        outcomes = await self.replicator.send_all(event, endpoints, self.delivery_path)
        delivered = sum(1 for o in outcomes if o.ok)
        logger.info(
            "Relayed webhook to %d/%d destinations (pipeline=%s)",
            delivered,
            len(outcomes),
            self.group_id,
        )
        return outcomes
