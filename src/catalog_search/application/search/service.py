"""Application search – CatalogSearchService façade.

Every operation is one compile → engine round-trip → decode cycle; the
service keeps no state between calls and is safe to share between
concurrent tasks as long as its backend is.

Usage::

    backend = ElasticsearchBackend.from_settings(settings)
    service = CatalogSearchService.from_settings(backend, settings)
    page = await service.page(
        MatchText(ProductField.NAME, "apple"),
        OffsetRequest(page_index=0, size=20),
        sort=SortSpec.by(ProductField.PRICE),
    )
"""
from __future__ import annotations

import dataclasses
from typing import Any, AsyncIterator, Generic, Mapping, TypeVar

from catalog_search.application.aggregation.decoder import decode_aggregations
from catalog_search.application.aggregation.results import AggregationResults
from catalog_search.application.aggregation.spec import Aggregation
from catalog_search.application.pagination.page import CursorPage, Page
from catalog_search.application.pagination.page_request import CursorRequest, OffsetRequest
from catalog_search.application.search.backend import SearchBackend
from catalog_search.application.search.compiler import QueryCompiler
from catalog_search.application.expressions.nodes import Expression
from catalog_search.application.search.query import SearchQuery
from catalog_search.application.results.hits import SearchHit, SearchHits, map_hits
from catalog_search.application.expressions.sort import SortSpec
from catalog_search.application.suggest.completion import decode_suggestions
from catalog_search.application.suggest.request import SuggestionRequest
from catalog_search.catalog.codec import DocumentCodec, ProductCodec
from catalog_search.catalog.document import Product
from catalog_search.catalog.fields import PRODUCT_SCHEMA, IndexSchema
from catalog_search.config.settings import SearchSettings
from catalog_search.observability.logging import get_logger
from catalog_search.resilience.timeouts import Deadline, run_with_deadline

T = TypeVar("T")

logger = get_logger(__name__)


@dataclasses.dataclass
class SearchResponse(Generic[T]):
    hits: SearchHits[T]
    aggregations: AggregationResults = dataclasses.field(default_factory=AggregationResults)
    suggestions: list[SearchHit[T]] = dataclasses.field(default_factory=list)


class CatalogSearchService(Generic[T]):
    """Typed search over one index."""

    def __init__(
        self,
        backend: SearchBackend,
        *,
        codec: DocumentCodec[T] | None = None,
        schema: IndexSchema = PRODUCT_SCHEMA,
        index: str | None = None,
        compiler: QueryCompiler | None = None,
    ) -> None:
        self._backend = backend
        self._codec: DocumentCodec[T] = codec or ProductCodec()  # type: ignore[assignment]
        self._schema = schema
        self._index = index or schema.index
        self._compiler = compiler or QueryCompiler(schema)

    @classmethod
    def from_settings(cls, backend: SearchBackend, settings: SearchSettings) -> "CatalogSearchService[Product]":
        """Product search over the index named by *settings*."""
        return cls(backend, index=settings.index)

    @property
    def index(self) -> str:
        return self._index

    async def search(self, query: SearchQuery, *, deadline: Deadline | None = None) -> SearchResponse[T]:
        raw = await self._execute(query, deadline)
        return SearchResponse(
            hits=map_hits(raw, self._codec),
            aggregations=decode_aggregations(query.aggregations, raw.get("aggregations")),
            suggestions=(
                decode_suggestions(query.suggestion, raw, self._codec)
                if query.suggestion is not None
                else []
            ),
        )

    async def find(
        self,
        expression: Expression | None = None,
        *,
        sort: SortSpec | None = None,
        limit: int | None = None,
        deadline: Deadline | None = None,
    ) -> SearchHits[T]:
        query = SearchQuery(expression=expression, sort=sort or SortSpec(), max_results=limit)
        return (await self.search(query, deadline=deadline)).hits

    async def page(
        self,
        expression: Expression | None,
        request: OffsetRequest,
        *,
        sort: SortSpec | None = None,
        deadline: Deadline | None = None,
    ) -> Page[SearchHit[T]]:
        query = SearchQuery(expression=expression, sort=sort or SortSpec(), page=request)
        hits = (await self.search(query, deadline=deadline)).hits
        return Page.of(hits.hits, hits.total, request)

    async def search_after(
        self,
        expression: Expression | None,
        sort: SortSpec,
        request: CursorRequest,
        *,
        deadline: Deadline | None = None,
    ) -> CursorPage[SearchHit[T]]:
        query = SearchQuery(expression=expression, sort=sort, page=request, track_total_hits=False)
        hits = (await self.search(query, deadline=deadline)).hits.hits
        next_cursor = CursorRequest.after(hits[-1].sort_values, request.size) if hits else None
        return CursorPage(items=hits, size=request.size, next_cursor=next_cursor)

    async def scroll_all(
        self,
        expression: Expression | None,
        sort: SortSpec,
        *,
        size: int = 100,
        deadline: Deadline | None = None,
    ) -> AsyncIterator[SearchHit[T]]:
        """Yield every match in sort order, one cursor page at a time."""
        request = CursorRequest.first(size)
        while True:
            page = await self.search_after(expression, sort, request, deadline=deadline)
            for hit in page.items:
                yield hit
            if not page.has_more or page.next_cursor is None:
                return
            request = page.next_cursor

    async def count(self, expression: Expression | None = None, *, deadline: Deadline | None = None) -> int:
        query = SearchQuery(expression=expression, max_results=0)
        return (await self.search(query, deadline=deadline)).hits.total

    async def aggregate(
        self,
        aggregations: Mapping[str, Aggregation],
        expression: Expression | None = None,
        *,
        deadline: Deadline | None = None,
    ) -> AggregationResults:
        query = SearchQuery(expression=expression, aggregations=aggregations, max_results=0)
        return (await self.search(query, deadline=deadline)).aggregations

    async def suggest(self, request: SuggestionRequest, *, deadline: Deadline | None = None) -> list[SearchHit[T]]:
        query = SearchQuery(suggestion=request, max_results=0, track_total_hits=False)
        return (await self.search(query, deadline=deadline)).suggestions

    async def _execute(self, query: SearchQuery, deadline: Deadline | None) -> dict[str, Any]:
        body = self._compiler.compile(query)
        timeout = deadline.remaining_seconds if deadline is not None else None
        raw = await run_with_deadline(self._backend.search(self._index, body, timeout=timeout), deadline)
        logger.debug(
            "search.executed",
            index=self._index,
            took_ms=raw.get("took"),
            total=(raw.get("hits") or {}).get("total"),
            hits=len((raw.get("hits") or {}).get("hits") or []),
        )
        return raw


__all__ = ["CatalogSearchService", "SearchResponse"]
