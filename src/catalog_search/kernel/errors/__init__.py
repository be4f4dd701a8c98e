"""Kernel errors – public re-export surface.

Hierarchy::

    BaseError
    ├── QueryError               (query.py)
    │   ├── InvalidExpressionError
    │   └── DecodeMismatchError
    ├── InvariantViolationError  (domain.py)
    └── EngineError              (engine.py)
        ├── EngineUnavailableError
        ├── EngineRejectedError
        └── EngineTimeoutError
"""

from catalog_search.kernel.errors.base import BaseError
from catalog_search.kernel.errors.domain import InvariantViolationError
from catalog_search.kernel.errors.engine import (
    EngineError,
    EngineRejectedError,
    EngineTimeoutError,
    EngineUnavailableError,
)
from catalog_search.kernel.errors.query import (
    DecodeMismatchError,
    InvalidExpressionError,
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
