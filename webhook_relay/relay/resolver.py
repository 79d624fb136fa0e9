"""Endpoint resolver — member app id -> base URL.

Lookups run concurrently, one per member. The batch is all-or-nothing: if
any single lookup fails the run gets no endpoints at all, not a partial list.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from webhook_relay.relay.control_plane import HerokuControlPlane
from webhook_relay.relay.fanout import gather_or_empty

logger = logging.getLogger(__name__)


class EndpointResolver:
    """Resolves member ids to web URLs via the control plane.

    Args:
        control_plane: Client for the "get app" call.
        override_url: When set, every resolution returns just this URL and
            the control plane is never contacted (non-production testing).
        batch_timeout: Upper bound in seconds for the whole lookup batch.
    """

    def __init__(
        self,
        control_plane: HerokuControlPlane,
        override_url: str | None = None,
        batch_timeout: float | None = None,
    ) -> None:
        self._control_plane = control_plane
        self._override_url = override_url
        self._batch_timeout = batch_timeout

    async def resolve(self, member_ids: Sequence[str]) -> list[str]:
        if self._override_url:
            logger.info("Using override endpoint %s", self._override_url)
            return [self._override_url]

        if not member_ids:
            return []

        return await gather_or_empty(
            (self._control_plane.app_web_url(member_id) for member_id in member_ids),
            timeout=self._batch_timeout,
            label=f"endpoint resolution for {len(member_ids)} apps",
        )
