"""Application pagination – OffsetRequest and CursorRequest."""
from __future__ import annotations

import dataclasses
from typing import Any, Sequence

from catalog_search.kernel.errors import InvalidExpressionError

MAX_RESULT_WINDOW = 10_000


def _check_size(size: int, request: object) -> None:
    if size < 1:
        raise InvalidExpressionError(f"page size must be > 0, got {size}", fragment=request)


@dataclasses.dataclass(frozen=True)
class OffsetRequest:
    """Zero-based offset pagination.

    The engine still walks every preceding hit, so deep pages get slower and
    windows past :data:`MAX_RESULT_WINDOW` are refused; use cursors instead.
    """
    page_index: int = 0
    size: int = 20

    def __post_init__(self) -> None:
        if self.page_index < 0:
            raise InvalidExpressionError(
                f"page_index must be >= 0, got {self.page_index}", fragment=self
            )
        _check_size(self.size, self)
        if self.offset + self.size > MAX_RESULT_WINDOW:
            raise InvalidExpressionError(
                f"offset window {self.offset}+{self.size} exceeds {MAX_RESULT_WINDOW}; "
                "use cursor pagination for deep pages",
                fragment=self,
            )

    @property
    def offset(self) -> int:
        return self.page_index * self.size

    def next(self) -> "OffsetRequest":
        return OffsetRequest(self.page_index + 1, self.size)


@dataclasses.dataclass(frozen=True)
class CursorRequest:
    """Search-after pagination: resume strictly after ``search_after``.

    ``search_after`` holds the sort values of the last hit of the previous
    page; ``None`` requests the first page.
    """
    search_after: tuple[Any, ...] | None = None
    size: int = 20

    def __post_init__(self) -> None:
        if self.search_after is not None:
            object.__setattr__(self, "search_after", tuple(self.search_after))
            if not self.search_after:
                raise InvalidExpressionError("search_after must not be empty", fragment=self)
        _check_size(self.size, self)

    @classmethod
    def first(cls, size: int = 20) -> "CursorRequest":
        return cls(None, size)

    @classmethod
    def after(cls, sort_values: Sequence[Any], size: int = 20) -> "CursorRequest":
        return cls(tuple(sort_values), size)

    @property
    def is_first(self) -> bool:
        return self.search_after is None


PageSpec = OffsetRequest | CursorRequest

__all__ = ["MAX_RESULT_WINDOW", "CursorRequest", "OffsetRequest", "PageSpec"]
