"""Application pagination – offset and cursor primitives."""
from catalog_search.application.pagination.page_request import (
    MAX_RESULT_WINDOW,
    CursorRequest,
    OffsetRequest,
    PageSpec,
)
from catalog_search.application.pagination.page import CursorPage, Page

__all__ = ["MAX_RESULT_WINDOW", "CursorPage", "CursorRequest", "OffsetRequest", "Page", "PageSpec"]
