"""Unit tests for pagination primitives: OffsetRequest, CursorRequest, Page, CursorPage."""

from __future__ import annotations

import pytest

from catalog_search.application.pagination import (
    MAX_RESULT_WINDOW,
    CursorPage,
    CursorRequest,
    OffsetRequest,
    Page,
)
from catalog_search.kernel.errors import InvalidExpressionError


class TestOffsetRequest:
    def test_offset(self) -> None:
        assert OffsetRequest(page_index=3, size=25).offset == 75

    def test_defaults(self) -> None:
        request = OffsetRequest()
        assert (request.page_index, request.size) == (0, 20)

    def test_next(self) -> None:
        assert OffsetRequest(1, 5).next() == OffsetRequest(2, 5)

    @pytest.mark.parametrize("page_index,size", [(-1, 10), (0, 0), (0, -5)])
    def test_invalid_values(self, page_index: int, size: int) -> None:
        with pytest.raises(InvalidExpressionError):
            OffsetRequest(page_index, size)

    def test_window_limit(self) -> None:
        OffsetRequest(page_index=(MAX_RESULT_WINDOW // 100) - 1, size=100)
        with pytest.raises(InvalidExpressionError):
            OffsetRequest(page_index=MAX_RESULT_WINDOW // 100, size=100)


class TestCursorRequest:
    def test_first(self) -> None:
        request = CursorRequest.first(5)
        assert request.is_first
        assert request.size == 5

    def test_after_freezes_values(self) -> None:
        request = CursorRequest.after([999, "abc"], 5)
        assert request.search_after == (999, "abc")
        assert not request.is_first

    def test_empty_search_after_rejected(self) -> None:
        with pytest.raises(InvalidExpressionError):
            CursorRequest(search_after=())

    def test_size_checked(self) -> None:
        with pytest.raises(InvalidExpressionError):
            CursorRequest.first(0)


class TestPage:
    def test_total_pages(self) -> None:
        assert Page(items=[], total=5, page_index=0, size=2).total_pages == 3
        assert Page(items=[], total=4, page_index=0, size=2).total_pages == 2
        assert Page(items=[], total=0, page_index=0, size=2).total_pages == 0

    def test_navigation(self) -> None:
        first = Page(items=[1, 2], total=5, page_index=0, size=2)
        last = Page(items=[5], total=5, page_index=2, size=2)
        assert first.has_next and not first.has_previous
        assert not last.has_next and last.has_previous

    def test_of_copies_request_coordinates(self) -> None:
        page = Page.of((1, 2), 7, OffsetRequest(page_index=1, size=2))
        assert page.items == [1, 2]
        assert (page.total, page.page_index, page.size) == (7, 1, 2)

    def test_next_request(self) -> None:
        page = Page(items=[1, 2], total=5, page_index=0, size=2)
        assert page.next_request() == OffsetRequest(1, 2)
        assert Page(items=[5], total=5, page_index=2, size=2).next_request() is None

    def test_next_request_stops_at_result_window(self) -> None:
        size = 100
        last_index = MAX_RESULT_WINDOW // size - 1
        page = Page(items=[], total=50_000, page_index=last_index, size=size)
        assert page.has_next
        assert page.reachable_pages == MAX_RESULT_WINDOW // size
        assert page.next_request() is None


class TestCursorPage:
    def test_full_page_has_more(self) -> None:
        page = CursorPage(items=[1, 2], size=2, next_cursor=CursorRequest.after((2,), 2))
        assert page.has_more

    def test_short_page_is_last(self) -> None:
        page = CursorPage(items=[1], size=2, next_cursor=CursorRequest.after((1,), 2))
        assert not page.has_more

    def test_empty_page_is_last(self) -> None:
        assert not CursorPage(items=[], size=2).has_more
