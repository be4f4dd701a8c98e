"""Kernel errors – domain: document invariant violations."""

from __future__ import annotations

from catalog_search.kernel.errors.base import BaseError


class InvariantViolationError(BaseError):
    """A document invariant was violated."""

    default_code = "invariant_violation"


__all__ = ["InvariantViolationError"]
