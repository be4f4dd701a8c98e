"""Application results – SearchHit/SearchHits and the result mapper.

Mapping never reorders, filters or de-duplicates: ``hits[i]`` is the
i-th hit of the engine response and carries ``rank == i``.
"""
from __future__ import annotations

import dataclasses
from typing import Any, Generic, Iterator, Mapping, TypeVar

from catalog_search.catalog.codec import DocumentCodec
from catalog_search.kernel.errors import DecodeMismatchError

T = TypeVar("T")


@dataclasses.dataclass(frozen=True)
class SearchHit(Generic[T]):
    content: T
    id: str | None
    score: float | None
    sort_values: tuple[Any, ...] = ()
    rank: int = 0
    index: str | None = None


@dataclasses.dataclass
class SearchHits(Generic[T]):
    hits: list[SearchHit[T]]
    total: int
    total_relation: str = "eq"
    max_score: float | None = None
    took_ms: int = 0

    def __iter__(self) -> Iterator[SearchHit[T]]:
        return iter(self.hits)

    def __len__(self) -> int:
        return len(self.hits)

    @property
    def contents(self) -> list[T]:
        return [h.content for h in self.hits]

    @property
    def ids(self) -> list[str | None]:
        return [h.id for h in self.hits]


def map_hit(raw: Mapping[str, Any], codec: DocumentCodec[T], rank: int) -> SearchHit[T]:
    source = raw.get("_source")
    if not isinstance(source, Mapping):
        raise DecodeMismatchError(f"hits[{rank}]", "hit with _source")
    score = raw.get("_score")
    return SearchHit(
        content=codec.decode(dict(source), raw.get("_id")),
        id=raw.get("_id"),
        score=None if score is None else float(score),
        sort_values=tuple(raw.get("sort") or ()),
        rank=rank,
        index=raw.get("_index"),
    )


def map_hits(response: Mapping[str, Any], codec: DocumentCodec[T]) -> SearchHits[T]:
    envelope = response.get("hits")
    if not isinstance(envelope, Mapping) or not isinstance(envelope.get("hits"), list):
        raise DecodeMismatchError("hits", "hits envelope")
    total, relation = _total(envelope.get("total"))
    max_score = envelope.get("max_score")
    return SearchHits(
        hits=[map_hit(raw, codec, rank) for rank, raw in enumerate(envelope["hits"])],
        total=total,
        total_relation=relation,
        max_score=None if max_score is None else float(max_score),
        took_ms=int(response.get("took", 0)),
    )


def _total(raw: Any) -> tuple[int, str]:
    if isinstance(raw, Mapping):
        return int(raw.get("value", 0)), str(raw.get("relation", "eq"))
    if isinstance(raw, int):
        return raw, "eq"
    return 0, "eq"


__all__ = ["SearchHit", "SearchHits", "map_hit", "map_hits"]
