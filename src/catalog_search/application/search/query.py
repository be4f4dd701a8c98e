"""Application search – SearchQuery value object."""
from __future__ import annotations

import dataclasses
from typing import Mapping

from catalog_search.application.aggregation.spec import Aggregation
from catalog_search.application.pagination.page_request import CursorRequest, OffsetRequest
from catalog_search.application.expressions.nodes import Expression
from catalog_search.application.expressions.sort import SortSpec
from catalog_search.application.suggest.request import SuggestionRequest
from catalog_search.kernel.errors import InvalidExpressionError


@dataclasses.dataclass(frozen=True)
class SearchQuery:
    """Everything one engine round-trip asks for.

    ``expression=None`` matches every document.  ``max_results`` overrides
    the page size; ``0`` fetches aggregations or suggestions only.
    """

    expression: Expression | None = None
    sort: SortSpec = dataclasses.field(default_factory=SortSpec)
    page: OffsetRequest | CursorRequest | None = None
    aggregations: Mapping[str, Aggregation] = dataclasses.field(default_factory=dict)
    suggestion: SuggestionRequest | None = None
    max_results: int | None = None
    track_total_hits: bool = True

    def __post_init__(self) -> None:
        if isinstance(self.page, CursorRequest) and not self.sort:
            raise InvalidExpressionError(
                "cursor pagination requires a sort spec", fragment=self.page
            )
        if self.max_results is not None and self.max_results < 0:
            raise InvalidExpressionError(
                f"max_results must be >= 0, got {self.max_results}", fragment=self
            )

    @property
    def is_cursor(self) -> bool:
        return isinstance(self.page, CursorRequest)


__all__ = ["SearchQuery"]
