"""Application aggregation – typed results mirroring the request tree."""
from __future__ import annotations

import dataclasses
from typing import Any, Iterator, Mapping, TypeVar, Union

from catalog_search.kernel.errors import DecodeMismatchError

R = TypeVar("R")


class AggregationResults(Mapping[str, "AggregationResult"]):
    """Read-only mapping of aggregation name to decoded result."""

    def __init__(self, results: Mapping[str, "AggregationResult"] | None = None, path: str = "") -> None:
        self._results = dict(results or {})
        self._path = path

    def __getitem__(self, name: str) -> "AggregationResult":
        return self._results[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._results)

    def __len__(self) -> int:
        return len(self._results)

    def __repr__(self) -> str:
        return f"AggregationResults({self._results!r})"

    def _typed(self, name: str, kind: type[R]) -> R:
        path = f"{self._path}>{name}" if self._path else name
        try:
            result = self._results[name]
        except KeyError:
            raise DecodeMismatchError(path, kind.__name__, f"No aggregation named '{path}'") from None
        if not isinstance(result, kind):
            raise DecodeMismatchError(path, kind.__name__)
        return result

    def terms(self, name: str) -> "TermsResult":
        return self._typed(name, TermsResult)

    def range(self, name: str) -> "RangeResult":
        return self._typed(name, RangeResult)

    def date_histogram(self, name: str) -> "DateHistogramResult":
        return self._typed(name, DateHistogramResult)

    def stats(self, name: str) -> "StatsResult":
        return self._typed(name, StatsResult)

    def avg(self, name: str) -> "AvgResult":
        return self._typed(name, AvgResult)

    def filter(self, name: str) -> "FilterResult":
        return self._typed(name, FilterResult)


@dataclasses.dataclass(frozen=True)
class Bucket:
    key: Any
    doc_count: int
    aggregations: AggregationResults = dataclasses.field(default_factory=AggregationResults)
    key_as_string: str | None = None
    from_: float | None = None
    to: float | None = None


@dataclasses.dataclass(frozen=True)
class _BucketsResult:
    name: str
    buckets: tuple[Bucket, ...]

    def __iter__(self) -> Iterator[Bucket]:
        return iter(self.buckets)

    def __len__(self) -> int:
        return len(self.buckets)

    def keys(self) -> list[Any]:
        return [b.key for b in self.buckets]

    def bucket(self, key: Any) -> Bucket:
        for b in self.buckets:
            if b.key == key or (b.key_as_string is not None and b.key_as_string == key):
                return b
        raise KeyError(key)

    def counts(self) -> dict[Any, int]:
        return {b.key: b.doc_count for b in self.buckets}


@dataclasses.dataclass(frozen=True)
class TermsResult(_BucketsResult):
    sum_other_doc_count: int = 0
    doc_count_error_upper_bound: int = 0

    @property
    def total_doc_count(self) -> int:
        """Documents in the returned buckets plus those beyond ``size``."""
        return sum(b.doc_count for b in self.buckets) + self.sum_other_doc_count


@dataclasses.dataclass(frozen=True)
class RangeResult(_BucketsResult):
    pass


@dataclasses.dataclass(frozen=True)
class DateHistogramResult(_BucketsResult):
    pass


@dataclasses.dataclass(frozen=True)
class StatsResult:
    """All values are floats, integer fields included.

    ``min``, ``max`` and ``avg`` are ``None`` when ``count`` is 0.
    """

    name: str
    count: float
    min: float | None
    max: float | None
    avg: float | None
    sum: float


@dataclasses.dataclass(frozen=True)
class AvgResult:
    name: str
    value: float | None


@dataclasses.dataclass(frozen=True)
class FilterResult:
    name: str
    doc_count: int
    aggregations: AggregationResults = dataclasses.field(default_factory=AggregationResults)


AggregationResult = Union[TermsResult, RangeResult, DateHistogramResult, StatsResult, AvgResult, FilterResult]

__all__ = [
    "AggregationResult",
    "AggregationResults",
    "AvgResult",
    "Bucket",
    "DateHistogramResult",
    "FilterResult",
    "RangeResult",
    "StatsResult",
    "TermsResult",
]
