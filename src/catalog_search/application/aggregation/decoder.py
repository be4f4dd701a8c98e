"""Application aggregation – decode engine responses into typed results.

The walk is driven by the request spec, not by the response: every
requested node must be present with the fields its kind produces, or a
:class:`DecodeMismatchError` names the path that drifted.
"""
from __future__ import annotations

from typing import Any, Mapping

from catalog_search.application.aggregation.results import (
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
    Avg,
    DateHistogram,
    Filter,
    RangeBuckets,
    Stats,
    Terms,
)
from catalog_search.kernel.errors import DecodeMismatchError


def decode_aggregations(
    specs: Mapping[str, Aggregation],
    raw: Mapping[str, Any] | None,
    path: str = "",
) -> AggregationResults:
    if not specs:
        return AggregationResults(path=path)
    if not isinstance(raw, Mapping):
        raise DecodeMismatchError(path or "aggregations", "aggregation container")
    results = {}
    for name, spec in specs.items():
        node_path = f"{path}>{name}" if path else name
        node = raw.get(name)
        if not isinstance(node, Mapping):
            raise DecodeMismatchError(node_path, type(spec).__name__, f"Aggregation '{node_path}' missing from response")
        results[name] = _decode_node(name, spec, node, node_path)
    return AggregationResults(results, path)


def _decode_node(name: str, spec: Aggregation, node: Mapping[str, Any], path: str):  # noqa: ANN202
    match spec:
        case Terms():
            return TermsResult(
                name=name,
                buckets=_buckets(spec, node, path),
                sum_other_doc_count=int(node.get("sum_other_doc_count", 0)),
                doc_count_error_upper_bound=int(node.get("doc_count_error_upper_bound", 0)),
            )
        case RangeBuckets():
            return RangeResult(name=name, buckets=_buckets(spec, node, path))
        case DateHistogram():
            return DateHistogramResult(name=name, buckets=_buckets(spec, node, path))
        case Stats():
            if "count" not in node:
                raise DecodeMismatchError(path, "Stats")
            return StatsResult(
                name=name,
                count=float(node["count"]),
                min=_float(node.get("min")),
                max=_float(node.get("max")),
                avg=_float(node.get("avg")),
                sum=float(node.get("sum") or 0.0),
            )
        case Avg():
            if "value" not in node:
                raise DecodeMismatchError(path, "Avg")
            return AvgResult(name=name, value=_float(node["value"]))
        case Filter():
            if "doc_count" not in node:
                raise DecodeMismatchError(path, "Filter")
            return FilterResult(
                name=name,
                doc_count=int(node["doc_count"]),
                aggregations=decode_aggregations(spec.aggregations, node, path),
            )
    raise DecodeMismatchError(path, type(spec).__name__, f"Unsupported aggregation kind at '{path}'")


def _buckets(spec: Aggregation, node: Mapping[str, Any], path: str) -> tuple[Bucket, ...]:
    raw_buckets = node.get("buckets")
    if not isinstance(raw_buckets, list):
        raise DecodeMismatchError(path, f"{type(spec).__name__} bucket list")
    buckets = []
    for raw in raw_buckets:
        if not isinstance(raw, Mapping) or "doc_count" not in raw or "key" not in raw:
            raise DecodeMismatchError(path, "bucket")
        bucket_path = f"{path}[{raw['key']}]"
        buckets.append(
            Bucket(
                key=raw["key"],
                doc_count=int(raw["doc_count"]),
                aggregations=decode_aggregations(spec.aggregations, raw, bucket_path),
                key_as_string=raw.get("key_as_string"),
                from_=_float(raw.get("from")),
                to=_float(raw.get("to")),
            )
        )
    return tuple(buckets)


def _float(value: Any) -> float | None:
    return None if value is None else float(value)


__all__ = ["decode_aggregations"]
