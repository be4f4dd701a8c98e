"""Kernel errors – engine: failures talking to, or reported by, the search engine."""

from __future__ import annotations

from typing import Any

from catalog_search.kernel.errors.base import BaseError


class EngineError(BaseError):
    """Search engine round-trip failed."""

    default_code = "engine_error"


class EngineUnavailableError(EngineError):
    """The engine could not be reached (connection refused, DNS, TLS, …)."""

    default_code = "engine_unavailable"
    retryable = True

    def __init__(
        self,
        resource: str,
        message: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message or f"Could not reach search engine at '{resource}'", **kwargs)
        self.resource = resource


class EngineRejectedError(EngineError):
    """The engine refused the compiled request.

    ``reason`` is the engine's own diagnostic message, ``error_type`` its
    error class (e.g. ``search_phase_execution_exception``).  Throttling
    (429) and server-side (5xx) rejections are retryable.
    """

    default_code = "engine_rejected"

    def __init__(
        self,
        reason: str,
        *,
        status_code: int | None = None,
        error_type: str | None = None,
        **kwargs: Any,
    ) -> None:
        detail = kwargs.pop("detail", None) or {}
        detail.setdefault("status_code", status_code)
        detail.setdefault("error_type", error_type)
        super().__init__(f"Search engine rejected the request: {reason}", detail=detail, **kwargs)
        self.reason = reason
        self.status_code = status_code
        self.error_type = error_type
        self.retryable = status_code is not None and (status_code == 429 or status_code >= 500)


class EngineTimeoutError(EngineError):
    """The deadline passed before the engine answered."""

    default_code = "engine_timeout"
    retryable = True


__all__ = [
    "EngineError",
    "EngineRejectedError",
    "EngineTimeoutError",
    "EngineUnavailableError",
]
