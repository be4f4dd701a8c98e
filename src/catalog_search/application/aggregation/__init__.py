"""Application aggregation – spec tree, request builder, response decoder."""
from catalog_search.application.aggregation.builder import AggregationBuilder
from catalog_search.application.aggregation.decoder import decode_aggregations
from catalog_search.application.aggregation.results import (
    AggregationResult,
    AggregationResults,
    AvgResult,
    Bucket,
    DateHistogramResult,
    FilterResult,
    RangeResult,
    StatsResult,
    TermsResult,
)
from catalog_search.application.aggregation.spec import (
    Aggregation,
    AggregationRange,
    Avg,
    CalendarInterval,
    DateHistogram,
    Filter,
    RangeBuckets,
    Stats,
    Terms,
)

__all__ = [
    "Aggregation",
    "AggregationBuilder",
    "AggregationRange",
    "AggregationResult",
    "AggregationResults",
    "Avg",
    "AvgResult",
    "Bucket",
    "CalendarInterval",
    "DateHistogram",
    "DateHistogramResult",
    "Filter",
    "FilterResult",
    "RangeBuckets",
    "RangeResult",
    "Stats",
    "StatsResult",
    "Terms",
    "TermsResult",
    "decode_aggregations",
]
