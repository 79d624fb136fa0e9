"""Destination directory — which apps belong to the deployment group."""

from __future__ import annotations

import logging

from webhook_relay.relay.control_plane import HerokuControlPlane

logger = logging.getLogger(__name__)


class DestinationDirectory:
    """Lists member app ids of a pipeline.

    Any lookup failure yields an empty list: a broken directory must never
    abort the relay or hold up the acknowledgment. No retries.
    """

    def __init__(self, control_plane: HerokuControlPlane) -> None:
        self._control_plane = control_plane

    async def list_members(self, group_id: str) -> list[str]:
        try:
            records = await self._control_plane.review_apps(group_id)
            return [record["app"]["id"] for record in records]
        except Exception:
            logger.warning(
                "Failed to list review apps for pipeline %s, relaying to no one",
                group_id,
                exc_info=True,
            )
            return []
