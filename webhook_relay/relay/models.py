"""Value types passed between the fan-out stages."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


def _normalize_headers(headers: Mapping[str, str] | Iterable[tuple[str, str]]) -> Mapping[str, str]:
    """Lower-case header names into a read-only mapping (last value wins)."""
    items = headers.items() if isinstance(headers, Mapping) else headers
    return MappingProxyType({name.lower(): value for name, value in items})


@dataclass(frozen=True)
class InboundEvent:
    """A received webhook, exactly as it arrived.

    The body is never parsed or modified. Header names are stored
    lower-cased so lookups are case-insensitive.
    """

    body: bytes
    headers: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", _normalize_headers(self.headers))


@dataclass(frozen=True)
class DeliveryOutcome:
    """Result of replaying one event to one destination."""

    endpoint: str
    url: str
    status_code: int | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None
