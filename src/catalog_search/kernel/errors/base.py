"""Kernel errors – BaseError, root of every catalog-search failure."""

from __future__ import annotations

import json
from typing import Any, ClassVar


class BaseError(Exception):
    """Root of the error hierarchy.

    ``code`` is a stable slug for callers that branch on failures without
    importing the classes, ``detail`` carries JSON-safe context (offending
    field, response path, engine status).  ``retryable`` tells a caller's
    resilience layer whether sending the same request again can succeed;
    nothing in this package retries on its own.

    Args:
        message: Human-readable description.
        code: Overrides ``default_code``.
        detail: Extra context, copied.
        cause: Underlying exception; also set as ``__cause__``.
    """

    default_code: ClassVar[str] = "catalog_search_error"
    retryable: bool = False

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        detail: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.detail: dict[str, Any] = dict(detail or {})
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, default=str)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.code}: {self.message}>"

    def to_dict(self) -> dict[str, Any]:
        """Plain-dict form for structured logs; empty ``detail`` is omitted."""
        payload: dict[str, Any] = {
            "error": type(self).__name__,
            "code": self.code,
            "message": self.message,
            "retryable": self.retryable,
        }
        if self.detail:
            payload["detail"] = self.detail
        if self.cause is not None:
            payload["cause"] = type(self.cause).__name__
        return payload


__all__ = ["BaseError"]
