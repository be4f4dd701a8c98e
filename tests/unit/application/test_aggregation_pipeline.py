"""Unit tests for the aggregation pipeline: spec nodes, request builder, response decoder."""

from __future__ import annotations

import pytest

from catalog_search.application.aggregation import (
    Aggregation,
    AggregationBuilder,
    AggregationRange,
    AggregationResults,
    Avg,
    CalendarInterval,
    DateHistogram,
    Filter,
    RangeBuckets,
    Stats,
    Terms,
    decode_aggregations,
)
from catalog_search.application.expressions import ExactTerm, MatchText
from catalog_search.application.search import QueryCompiler
from catalog_search.catalog import PRODUCT_SCHEMA, ProductField
from catalog_search.kernel.errors import DecodeMismatchError, InvalidExpressionError


def _build(specs: dict[str, Aggregation]) -> dict[str, object]:
    return AggregationBuilder(PRODUCT_SCHEMA, QueryCompiler().compile_expression).build(specs)


# ---------------------------------------------------------------------------
# Spec nodes
# ---------------------------------------------------------------------------


class TestAggregationSpecs:
    def test_range_bucket_needs_a_bound(self) -> None:
        with pytest.raises(InvalidExpressionError):
            AggregationRange()

    def test_range_bucket_order(self) -> None:
        with pytest.raises(InvalidExpressionError):
            AggregationRange(from_=10, to=5)

    def test_range_buckets_need_ranges(self) -> None:
        with pytest.raises(InvalidExpressionError):
            RangeBuckets(ProductField.PRICE, ())

    def test_terms_size_positive(self) -> None:
        with pytest.raises(InvalidExpressionError):
            Terms(ProductField.CATEGORY, size=0)

    def test_sub_returns_copy(self) -> None:
        base = Terms(ProductField.CATEGORY)
        nested = base.sub(avg_price=Avg(ProductField.PRICE))
        assert base.aggregations == {}
        assert set(nested.aggregations) == {"avg_price"}

    def test_stats_cannot_nest(self) -> None:
        with pytest.raises(InvalidExpressionError):
            Stats(ProductField.PRICE).sub(by=Terms(ProductField.CATEGORY))

    def test_avg_cannot_nest(self) -> None:
        with pytest.raises(InvalidExpressionError):
            Avg(ProductField.PRICE, aggregations={"s": Stats(ProductField.STOCK)})

    def test_metric_leaf_under_bucket_still_allowed(self) -> None:
        spec = Filter(ExactTerm(ProductField.AVAILABLE, True)).sub(price=Stats(ProductField.PRICE))
        assert _build({"f": spec})["f"]["aggs"] == {"price": {"stats": {"field": "price"}}}


# ---------------------------------------------------------------------------
# Builder
# ---------------------------------------------------------------------------


class TestAggregationBuilder:
    def test_nested_terms_avg(self) -> None:
        specs = {"by_category": Terms(ProductField.CATEGORY, size=5).sub(avg_price=Avg(ProductField.PRICE))}
        assert _build(specs) == {
            "by_category": {
                "terms": {"field": "category", "size": 5},
                "aggs": {"avg_price": {"avg": {"field": "price"}}},
            }
        }

    def test_stats(self) -> None:
        assert _build({"price_stats": Stats(ProductField.PRICE)}) == {"price_stats": {"stats": {"field": "price"}}}

    def test_range_buckets(self) -> None:
        specs = {
            "price_bands": RangeBuckets(
                ProductField.PRICE,
                (AggregationRange(to=1000), AggregationRange(from_=1000, to=2000, key="mid"), AggregationRange(from_=2000)),
            )
        }
        assert _build(specs)["price_bands"] == {
            "range": {
                "field": "price",
                "ranges": [{"to": 1000}, {"key": "mid", "from": 1000, "to": 2000}, {"from": 2000}],
            }
        }

    def test_filter_lowers_predicate(self) -> None:
        specs = {"in_stock": Filter(ExactTerm(ProductField.AVAILABLE, True)).sub(stats=Stats(ProductField.STOCK))}
        assert _build(specs) == {
            "in_stock": {
                "filter": {"term": {"available": {"value": True}}},
                "aggs": {"stats": {"stats": {"field": "stock"}}},
            }
        }

    def test_date_histogram(self) -> None:
        specs = {"per_month": DateHistogram(ProductField.CREATED_AT, CalendarInterval.MONTH)}
        assert _build(specs) == {"per_month": {"date_histogram": {"field": "createdAt", "calendar_interval": "month"}}}

    def test_terms_on_text_rejected(self) -> None:
        with pytest.raises(InvalidExpressionError) as exc_info:
            _build({"x": Terms(ProductField.NAME)})
        assert exc_info.value.field == "name"

    def test_stats_needs_numeric_field(self) -> None:
        with pytest.raises(InvalidExpressionError):
            _build({"x": Stats(ProductField.CATEGORY)})

    def test_date_histogram_needs_date_field(self) -> None:
        with pytest.raises(InvalidExpressionError):
            _build({"x": DateHistogram(ProductField.PRICE)})

    def test_terms_on_unique_field_rejected(self) -> None:
        with pytest.raises(InvalidExpressionError):
            _build({"x": Terms(ProductField.ID)})

    def test_invalid_nested_predicate_surfaces(self) -> None:
        with pytest.raises(InvalidExpressionError):
            _build({"x": Filter(MatchText(ProductField.CATEGORY, "tv"))})


# ---------------------------------------------------------------------------
# Decoder
# ---------------------------------------------------------------------------


class TestDecodeAggregations:
    def test_terms_with_sub_aggregation(self) -> None:
        specs = {"by_category": Terms(ProductField.CATEGORY).sub(avg_price=Avg(ProductField.PRICE))}
        raw = {
            "by_category": {
                "doc_count_error_upper_bound": 0,
                "sum_other_doc_count": 3,
                "buckets": [
                    {"key": "TV", "doc_count": 2, "avg_price": {"value": 1500.0}},
                    {"key": "Audio", "doc_count": 1, "avg_price": {"value": 99.0}},
                ],
            }
        }
        results = decode_aggregations(specs, raw)
        terms = results.terms("by_category")
        assert terms.keys() == ["TV", "Audio"]
        assert terms.counts() == {"TV": 2, "Audio": 1}
        assert terms.total_doc_count == 6
        assert terms.bucket("TV").aggregations.avg("avg_price").value == 1500.0

    def test_stats_empty(self) -> None:
        raw = {"s": {"count": 0, "min": None, "max": None, "avg": None, "sum": 0.0}}
        stats = decode_aggregations({"s": Stats(ProductField.PRICE)}, raw).stats("s")
        assert stats.count == 0
        assert stats.min is None and stats.avg is None
        assert stats.sum == 0.0

    def test_stats_values_are_floats(self) -> None:
        raw = {"s": {"count": 2, "min": 1, "max": 3, "avg": 2, "sum": 4}}
        stats = decode_aggregations({"s": Stats(ProductField.PRICE)}, raw).stats("s")
        assert stats.count == 2.0 and isinstance(stats.count, float)
        assert stats.min == 1.0 and isinstance(stats.min, float)

    def test_range_buckets_keep_bounds(self) -> None:
        spec = RangeBuckets(ProductField.PRICE, (AggregationRange(to=100),))
        raw = {"r": {"buckets": [{"key": "*-100.0", "to": 100.0, "doc_count": 4}]}}
        bucket = decode_aggregations({"r": spec}, raw).range("r").buckets[0]
        assert bucket.from_ is None
        assert bucket.to == 100.0
        assert bucket.doc_count == 4

    def test_filter_with_children(self) -> None:
        spec = Filter(ExactTerm(ProductField.AVAILABLE, True)).sub(avg=Avg(ProductField.PRICE))
        raw = {"f": {"doc_count": 3, "avg": {"value": None}}}
        result = decode_aggregations({"f": spec}, raw).filter("f")
        assert result.doc_count == 3
        assert result.aggregations.avg("avg").value is None

    def test_date_histogram_key_as_string_lookup(self) -> None:
        spec = DateHistogram(ProductField.CREATED_AT)
        raw = {"d": {"buckets": [{"key": 1767225600000, "key_as_string": "2026-01-01T00:00:00", "doc_count": 2}]}}
        histogram = decode_aggregations({"d": spec}, raw).date_histogram("d")
        assert histogram.bucket("2026-01-01T00:00:00").doc_count == 2

    def test_missing_node_names_path(self) -> None:
        with pytest.raises(DecodeMismatchError) as exc_info:
            decode_aggregations({"a": Avg(ProductField.PRICE)}, {})
        assert exc_info.value.path == "a"

    def test_missing_nested_node_names_bucket_path(self) -> None:
        specs = {"by_category": Terms(ProductField.CATEGORY).sub(avg_price=Avg(ProductField.PRICE))}
        raw = {"by_category": {"buckets": [{"key": "TV", "doc_count": 1}]}}
        with pytest.raises(DecodeMismatchError) as exc_info:
            decode_aggregations(specs, raw)
        assert exc_info.value.path == "by_category[TV]>avg_price"

    def test_node_without_required_fields(self) -> None:
        with pytest.raises(DecodeMismatchError):
            decode_aggregations({"a": Avg(ProductField.PRICE)}, {"a": {}})
        with pytest.raises(DecodeMismatchError):
            decode_aggregations({"t": Terms(ProductField.CATEGORY)}, {"t": {"value": 1}})

    def test_missing_container(self) -> None:
        with pytest.raises(DecodeMismatchError):
            decode_aggregations({"a": Avg(ProductField.PRICE)}, None)

    def test_no_specs_gives_empty_results(self) -> None:
        assert len(decode_aggregations({}, None)) == 0

    def test_typed_accessor_kind_mismatch(self) -> None:
        results = decode_aggregations({"a": Avg(ProductField.PRICE)}, {"a": {"value": 1.0}})
        with pytest.raises(DecodeMismatchError):
            results.stats("a")
        with pytest.raises(DecodeMismatchError):
            results.avg("missing")

    def test_results_are_a_mapping(self) -> None:
        results = AggregationResults({})
        assert list(results) == []
