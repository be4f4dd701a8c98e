"""Kernel errors – query: malformed specs and response shape drift."""

from __future__ import annotations

from typing import Any

from catalog_search.kernel.errors.base import BaseError


class QueryError(BaseError):
    """A query, aggregation or suggestion spec could not be handled."""

    default_code = "query_error"


class InvalidExpressionError(QueryError):
    """A filter, sort, pagination or aggregation spec is malformed.

    Raised before any engine call is made.  ``field`` names the offending
    document field (when there is one) and ``fragment`` carries the expression
    or aggregation node that failed validation.
    """

    default_code = "invalid_expression"

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        fragment: Any = None,
        **kwargs: Any,
    ) -> None:
        detail = kwargs.pop("detail", None) or {}
        if field is not None:
            detail.setdefault("field", field)
        if fragment is not None:
            detail.setdefault("fragment", repr(fragment))
        super().__init__(message, detail=detail, **kwargs)
        self.field = field
        self.fragment = fragment


class DecodeMismatchError(QueryError):
    """The engine response does not have the shape the request asked for."""

    default_code = "decode_mismatch"

    def __init__(
        self,
        path: str,
        expected: str,
        message: str | None = None,
        **kwargs: Any,
    ) -> None:
        detail = kwargs.pop("detail", None) or {}
        detail.setdefault("path", path)
        detail.setdefault("expected", expected)
        super().__init__(message or f"Response node '{path}' is not a {expected}", detail=detail, **kwargs)
        self.path = path
        self.expected = expected


__all__ = ["DecodeMismatchError", "InvalidExpressionError", "QueryError"]
