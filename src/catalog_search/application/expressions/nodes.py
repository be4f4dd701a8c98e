"""Application expressions – filter expression model.

Predicates form a tree of frozen dataclasses; they carry no execution
logic.  :class:`BoolGroup` combines them with Elasticsearch bool
semantics:

* ``must`` – every clause matches; clauses contribute to the score.
* ``filter`` – every clause matches; no score contribution.
* ``should`` – score boosters; at least one must match only when ``must``
  and ``filter`` are both empty (or ``minimum_should_match`` says so).
* ``must_not`` – any matching clause excludes the document.

Example::

    BoolGroup(
        must=[Range(ProductField.PRICE, min=950)],
        should=[ExactTerm(ProductField.CATEGORY, "Computers")],
    )
"""
from __future__ import annotations

import dataclasses
from datetime import date, datetime
from typing import Any, Iterable, Literal, Union

from catalog_search.application.expressions.dates import DateMath
from catalog_search.catalog.fields import FieldRef, field_name
from catalog_search.kernel.errors import InvalidExpressionError

ScalarValue = str | int | float | bool
RangeBound = int | float | datetime | date | DateMath | str


@dataclasses.dataclass(frozen=True)
class MatchAll:
    """Matches every document."""


@dataclasses.dataclass(frozen=True)
class MatchText:
    """Tokenized comparison against a text field."""

    field: FieldRef
    value: str
    operator: Literal["or", "and"] = "or"

    def __post_init__(self) -> None:
        if not self.value.strip():
            raise InvalidExpressionError(
                "MatchText requires a non-blank value", field=field_name(self.field), fragment=self
            )


@dataclasses.dataclass(frozen=True)
class ExactTerm:
    """Untokenized comparison; on a text field it only ever matches single indexed tokens."""

    field: FieldRef
    value: ScalarValue | datetime


@dataclasses.dataclass(frozen=True)
class Range:
    """Bounded comparison; at least one of ``min`` / ``max`` is required."""

    field: FieldRef
    min: RangeBound | None = None
    max: RangeBound | None = None
    min_inclusive: bool = True
    max_inclusive: bool = True

    def __post_init__(self) -> None:
        if self.min is None and self.max is None:
            raise InvalidExpressionError(
                "Range needs at least one bound", field=field_name(self.field), fragment=self
            )


@dataclasses.dataclass(frozen=True)
class InSet:
    """Matches when the field equals any of ``values``."""

    field: FieldRef
    values: tuple[ScalarValue, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", tuple(self.values))
        if not self.values:
            raise InvalidExpressionError(
                "InSet needs at least one value", field=field_name(self.field), fragment=self
            )


@dataclasses.dataclass(frozen=True)
class BoolGroup:
    must: tuple["Expression", ...] = ()
    should: tuple["Expression", ...] = ()
    must_not: tuple["Expression", ...] = ()
    filter: tuple["Expression", ...] = ()
    minimum_should_match: int | None = None

    def __post_init__(self) -> None:
        for name in ("must", "should", "must_not", "filter"):
            object.__setattr__(self, name, tuple(getattr(self, name)))
        if not (self.must or self.should or self.must_not or self.filter):
            raise InvalidExpressionError("BoolGroup needs at least one clause", fragment=self)
        if self.minimum_should_match is not None:
            if self.minimum_should_match < 0 or self.minimum_should_match > len(self.should):
                raise InvalidExpressionError(
                    f"minimum_should_match must be between 0 and {len(self.should)}",
                    fragment=self,
                )

    @property
    def requires_should(self) -> bool:
        """Whether at least one ``should`` clause has to match."""
        if self.minimum_should_match is not None:
            return self.minimum_should_match > 0
        return bool(self.should) and not (self.must or self.filter)


Expression = Union[MatchAll, MatchText, ExactTerm, Range, InSet, BoolGroup]


def all_of(*clauses: Expression) -> BoolGroup:
    return BoolGroup(must=clauses)


def any_of(*clauses: Expression) -> BoolGroup:
    return BoolGroup(should=clauses)


def none_of(*clauses: Expression) -> BoolGroup:
    return BoolGroup(must_not=clauses)


def filtered(*clauses: Expression) -> BoolGroup:
    return BoolGroup(filter=clauses)


def in_set(field: FieldRef, values: Iterable[Any]) -> InSet:
    return InSet(field, tuple(values))


__all__ = [
    "BoolGroup",
    "ExactTerm",
    "Expression",
    "InSet",
    "MatchAll",
    "MatchText",
    "Range",
    "RangeBound",
    "ScalarValue",
    "all_of",
    "any_of",
    "filtered",
    "in_set",
    "none_of",
]
