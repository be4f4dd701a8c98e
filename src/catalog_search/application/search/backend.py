"""Application search – SearchBackend port."""
from __future__ import annotations

from typing import Any, Protocol, Sequence, runtime_checkable


@runtime_checkable
class SearchBackend(Protocol):
    """Port: the external search engine.

    Implementations translate transport failures into
    :class:`~catalog_search.kernel.errors.EngineError` subclasses and hold
    no per-query state, so one instance may serve concurrent callers.
    """

    async def search(self, index: str, body: dict[str, Any], *, timeout: float | None = None) -> dict[str, Any]: ...

    async def index(
        self,
        index: str,
        source: dict[str, Any],
        *,
        id: str | None = None,
        refresh: bool = False,
    ) -> str: ...

    async def bulk_index(
        self,
        index: str,
        documents: Sequence[tuple[str | None, dict[str, Any]]],
        *,
        refresh: bool = False,
    ) -> list[str]: ...

    async def delete_all(self, index: str, *, refresh: bool = False) -> int: ...


__all__ = ["SearchBackend"]
