"""Application aggregation – request spec nodes.

Each bucket node names one engine aggregation and may nest named
sub-aggregations that are computed per bucket (or, for :class:`Filter`,
over the filtered subset).  Metric nodes (:class:`Stats`, :class:`Avg`)
are leaves::

    {
        "category_avg_price": Terms(ProductField.CATEGORY).sub(
            avg_price=Avg(ProductField.PRICE),
        ),
    }

Ranges in :class:`RangeBuckets` are ``[from_, to)`` and are not checked for
overlap; overlapping ranges count a document once per range.
"""
from __future__ import annotations

import dataclasses
from enum import Enum
from typing import Mapping, Union

from catalog_search.application.expressions.nodes import Expression
from catalog_search.catalog.fields import FieldRef
from catalog_search.kernel.errors import InvalidExpressionError


class CalendarInterval(str, Enum):
    MINUTE = "minute"
    HOUR = "hour"
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"


def _check_names(node: object, aggregations: Mapping[str, object]) -> None:
    for name in aggregations:
        if not name or not isinstance(name, str):
            raise InvalidExpressionError("aggregation names must be non-empty strings", fragment=node)


@dataclasses.dataclass(frozen=True)
class _Node:
    def sub(self, **aggregations: "Aggregation") -> "Aggregation":
        """Return a copy with *aggregations* nested under this node."""
        merged = {**self.aggregations, **aggregations}  # type: ignore[attr-defined]
        return dataclasses.replace(self, aggregations=merged)  # type: ignore[return-value]

    def __post_init__(self) -> None:
        _check_names(self, self.aggregations)  # type: ignore[attr-defined]


@dataclasses.dataclass(frozen=True)
class Terms(_Node):
    field: FieldRef
    size: int = 10
    aggregations: Mapping[str, "Aggregation"] = dataclasses.field(default_factory=dict)

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.size < 1:
            raise InvalidExpressionError("Terms size must be > 0", fragment=self)


@dataclasses.dataclass(frozen=True)
class _MetricNode(_Node):
    """Single-value metric; the engine refuses sub-aggregations under it."""

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.aggregations:  # type: ignore[attr-defined]
            raise InvalidExpressionError(
                f"{type(self).__name__} is a metric and cannot nest sub-aggregations",
                fragment=self,
            )


@dataclasses.dataclass(frozen=True)
class Stats(_MetricNode):
    field: FieldRef
    aggregations: Mapping[str, "Aggregation"] = dataclasses.field(default_factory=dict)


@dataclasses.dataclass(frozen=True)
class Avg(_MetricNode):
    field: FieldRef
    aggregations: Mapping[str, "Aggregation"] = dataclasses.field(default_factory=dict)


@dataclasses.dataclass(frozen=True)
class AggregationRange:
    """Half-open bucket ``[from_, to)``; one side may be omitted, never both."""

    from_: float | None = None
    to: float | None = None
    key: str | None = None

    def __post_init__(self) -> None:
        if self.from_ is None and self.to is None:
            raise InvalidExpressionError("range bucket needs 'from_' or 'to'", fragment=self)
        if self.from_ is not None and self.to is not None and self.from_ > self.to:
            raise InvalidExpressionError("range bucket 'from_' is greater than 'to'", fragment=self)


@dataclasses.dataclass(frozen=True)
class RangeBuckets(_Node):
    field: FieldRef
    ranges: tuple[AggregationRange, ...]
    aggregations: Mapping[str, "Aggregation"] = dataclasses.field(default_factory=dict)

    def __post_init__(self) -> None:
        super().__post_init__()
        object.__setattr__(self, "ranges", tuple(self.ranges))
        if not self.ranges:
            raise InvalidExpressionError("RangeBuckets needs at least one range", fragment=self)


@dataclasses.dataclass(frozen=True)
class Filter(_Node):
    predicate: Expression
    aggregations: Mapping[str, "Aggregation"] = dataclasses.field(default_factory=dict)


@dataclasses.dataclass(frozen=True)
class DateHistogram(_Node):
    field: FieldRef
    interval: CalendarInterval = CalendarInterval.DAY
    aggregations: Mapping[str, "Aggregation"] = dataclasses.field(default_factory=dict)


Aggregation = Union[Terms, Stats, Avg, RangeBuckets, Filter, DateHistogram]

__all__ = [
    "Aggregation",
    "AggregationRange",
    "Avg",
    "CalendarInterval",
    "DateHistogram",
    "Filter",
    "RangeBuckets",
    "Stats",
    "Terms",
]
