"""Resilience – Deadline."""
from __future__ import annotations

import asyncio
import dataclasses
import inspect
from datetime import UTC, datetime, timedelta
from typing import Awaitable, TypeVar

from catalog_search.kernel.errors import EngineTimeoutError

T = TypeVar("T")


@dataclasses.dataclass(frozen=True)
class Deadline:
    """An absolute deadline derived from a timeout."""
    expires_at: datetime

    @classmethod
    def after(cls, seconds: float) -> "Deadline":
        return cls(expires_at=datetime.now(UTC) + timedelta(seconds=seconds))

    @property
    def remaining_seconds(self) -> float:
        return max(0.0, (self.expires_at - datetime.now(UTC)).total_seconds())

    @property
    def is_expired(self) -> bool:
        return datetime.now(UTC) >= self.expires_at

    def raise_if_expired(self) -> None:
        if self.is_expired:
            raise EngineTimeoutError("Deadline exceeded")


async def run_with_deadline(call: Awaitable[T], deadline: Deadline | None) -> T:
    """Await *call*, cancelling it and raising :class:`EngineTimeoutError` once *deadline* passes.

    Nothing is retried; an already-expired deadline fails before *call* starts.
    """
    if deadline is None:
        return await call
    remaining = deadline.remaining_seconds
    if remaining <= 0:
        if inspect.iscoroutine(call):
            call.close()
        raise EngineTimeoutError("Deadline already exceeded before the engine call")
    try:
        return await asyncio.wait_for(call, timeout=remaining)
    except asyncio.TimeoutError as exc:
        raise EngineTimeoutError(
            f"Deadline exceeded after {remaining:.3f}s waiting for the engine",
            cause=exc,
        ) from exc


__all__ = ["Deadline", "run_with_deadline"]
