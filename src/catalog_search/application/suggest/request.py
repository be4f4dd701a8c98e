"""Application suggest – completion request."""
from __future__ import annotations

import dataclasses

from catalog_search.catalog.fields import FieldRef, ProductField, field_name
from catalog_search.kernel.errors import InvalidExpressionError


@dataclasses.dataclass(frozen=True)
class SuggestionRequest:
    """Prefix completion against a completion field.

    With ``fuzzy`` enabled the engine tolerates a bounded edit distance
    (``fuzziness``, ``AUTO`` by default) and, with ``transpositions``,
    counts swapped adjacent characters as one edit, so ``qld`` still
    reaches ``qled``.  ``skip_duplicates`` is enforced by the engine.
    """

    prefix: str
    field: FieldRef = ProductField.SUGGESTS
    size: int = 5
    skip_duplicates: bool = True
    fuzzy: bool = True
    transpositions: bool = True
    fuzziness: str | int = "AUTO"
    name: str = "prod-suggest"

    def __post_init__(self) -> None:
        if not self.prefix.strip():
            raise InvalidExpressionError("suggestion prefix must not be blank", field=field_name(self.field), fragment=self)
        if self.size < 1:
            raise InvalidExpressionError(f"suggestion size must be > 0, got {self.size}", fragment=self)
        if not self.name:
            raise InvalidExpressionError("suggestion name must not be empty", fragment=self)


__all__ = ["SuggestionRequest"]
