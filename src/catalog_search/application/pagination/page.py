"""Application pagination – Page and CursorPage."""
from __future__ import annotations

import dataclasses
import math
from typing import Generic, Sequence, TypeVar

from catalog_search.application.pagination.page_request import (
    MAX_RESULT_WINDOW,
    CursorRequest,
    OffsetRequest,
)

T = TypeVar("T")


@dataclasses.dataclass
class Page(Generic[T]):
    """One offset page plus the hit total it was cut from."""

    items: list[T]
    total: int
    page_index: int
    size: int

    @classmethod
    def of(cls, items: Sequence[T], total: int, request: OffsetRequest) -> "Page[T]":
        return cls(items=list(items), total=total, page_index=request.page_index, size=request.size)

    @property
    def total_pages(self) -> int:
        if self.size <= 0 or self.total <= 0:
            return 0
        return math.ceil(self.total / self.size)

    @property
    def reachable_pages(self) -> int:
        """Pages an offset request can still address inside the result window."""
        return min(self.total_pages, MAX_RESULT_WINDOW // self.size) if self.size > 0 else 0

    @property
    def has_next(self) -> bool:
        return self.page_index + 1 < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.page_index > 0

    def next_request(self) -> OffsetRequest | None:
        # None past the window too: the caller has to switch to a cursor
        if self.page_index + 1 >= self.reachable_pages:
            return None
        return OffsetRequest(self.page_index + 1, self.size)


@dataclasses.dataclass(frozen=True)
class CursorPage(Generic[T]):
    """Cursor-based page of results.

    ``has_more`` is false once a page comes back shorter than requested.
    ``next_cursor`` resumes after the last item and is ``None`` for an
    empty page.
    """

    items: list[T]
    size: int
    next_cursor: CursorRequest | None = None

    @property
    def has_more(self) -> bool:
        return self.next_cursor is not None and len(self.items) >= self.size


__all__ = ["CursorPage", "Page"]
