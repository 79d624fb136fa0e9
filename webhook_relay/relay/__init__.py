"""Fan-out delivery engine.

Pipeline for one inbound event:
1. DestinationDirectory lists the review apps of the pipeline
2. EndpointResolver looks up the web URL of each app (concurrently)
3. RequestReplicator replays the event to every URL (concurrently)

FanOutCoordinator wires the three together. No stage raises to its caller.
"""

from webhook_relay.relay.coordinator import FanOutCoordinator
from webhook_relay.relay.directory import DestinationDirectory
from webhook_relay.relay.models import DeliveryOutcome, InboundEvent
from webhook_relay.relay.replicator import RequestReplicator
from webhook_relay.relay.resolver import EndpointResolver

__all__ = [
    "DeliveryOutcome",
    "DestinationDirectory",
    "EndpointResolver",
    "FanOutCoordinator",
    "InboundEvent",
    "RequestReplicator",
]
