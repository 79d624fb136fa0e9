"""Fan-out / fan-in primitives for concurrent batches of network calls.

Both helpers start every awaitable at once and wait for the whole batch:

- gather_settled: collect every result, a failure never short-circuits
- gather_or_empty: all results, or [] if any single task failed

A batch timeout bounds the wait. Tasks still pending at the deadline are
cancelled and reported as failures.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Iterable
from dataclasses import dataclass
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BatchTimeoutError(asyncio.TimeoutError):
    """A task did not settle before the batch deadline."""


@dataclass(frozen=True)
class Settled(Generic[T]):
    """Outcome of one task in a batch: either a value or an error."""

    value: T | None = None
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


async def gather_settled(
    awaitables: Iterable[Awaitable[T]],
    timeout: float | None = None,
) -> list[Settled[T]]:
    """Run all awaitables concurrently and return one Settled per input, in order."""
    tasks = [asyncio.ensure_future(aw) for aw in awaitables]
    if not tasks:
        return []

    _, pending = await asyncio.wait(tasks, timeout=timeout)
    if pending:
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)

    results: list[Settled[T]] = []
    for task in tasks:
        if task in pending:
            results.append(Settled(error=BatchTimeoutError(f"not settled within {timeout}s")))
        elif task.cancelled():
            results.append(Settled(error=asyncio.CancelledError()))
        elif task.exception() is not None:
            results.append(Settled(error=task.exception()))
        else:
            results.append(Settled(value=task.result()))
    return results


async def gather_or_empty(
    awaitables: Iterable[Awaitable[T]],
    timeout: float | None = None,
    label: str = "batch",
) -> list[T]:
    """Run all awaitables concurrently; return every value, or [] on any failure."""
    settled = await gather_settled(awaitables, timeout=timeout)
    failures = [s.error for s in settled if not s.ok]
    if failures:
        logger.warning(
            "%s failed: %d/%d tasks errored, discarding whole batch (first error: %r)",
            label,
            len(failures),
            len(settled),
            failures[0],
        )
        return []
    return [s.value for s in settled]  # type: ignore[misc]
