"""Kernel – framework-agnostic building blocks (errors, clocks)."""

from catalog_search.kernel.errors import (
    BaseError,
    DecodeMismatchError,
    EngineError,
    EngineRejectedError,
    EngineTimeoutError,
    EngineUnavailableError,
    InvalidExpressionError,
    InvariantViolationError,
    QueryError,
)

__all__ = [
    "BaseError",
    "DecodeMismatchError",
    "EngineError",
    "EngineRejectedError",
    "EngineTimeoutError",
    "EngineUnavailableError",
    "InvalidExpressionError",
    "InvariantViolationError",
    "QueryError",
]
