"""Application aggregation – lower spec nodes to engine ``aggs`` JSON."""
from __future__ import annotations

from typing import Any, Callable, Mapping

from catalog_search.application.aggregation.spec import (
    Aggregation,
    AggregationRange,
    Avg,
    DateHistogram,
    Filter,
    RangeBuckets,
    Stats,
    Terms,
)
from catalog_search.application.expressions.nodes import Expression
from catalog_search.catalog.fields import FieldRef, FieldType, IndexSchema
from catalog_search.kernel.errors import InvalidExpressionError

LowerFn = Callable[[Expression], dict[str, Any]]


class AggregationBuilder:
    """Builds one engine aggregation node per spec node, recursively."""

    def __init__(self, schema: IndexSchema, lower: LowerFn) -> None:
        self._schema = schema
        self._lower = lower

    def build(self, specs: Mapping[str, Aggregation]) -> dict[str, Any]:
        return {name: self._node(name, spec) for name, spec in specs.items()}

    def _node(self, name: str, spec: Aggregation) -> dict[str, Any]:
        node: dict[str, Any]
        match spec:
            case Terms():
                node = {"terms": {"field": self._field(spec.field, spec, bucketable=True), "size": spec.size}}
            case Stats():
                node = {"stats": {"field": self._field(spec.field, spec, orderable=True)}}
            case Avg():
                node = {"avg": {"field": self._field(spec.field, spec, orderable=True)}}
            case RangeBuckets():
                node = {
                    "range": {
                        "field": self._field(spec.field, spec, orderable=True),
                        "ranges": [self._range(r) for r in spec.ranges],
                    }
                }
            case Filter():
                node = {"filter": self._lower(spec.predicate)}
            case DateHistogram():
                field = self._field(spec.field, spec)
                if self._schema.resolve(spec.field).type is not FieldType.DATE:
                    raise InvalidExpressionError(
                        f"date histogram '{name}' needs a date field", field=field, fragment=spec
                    )
                node = {"date_histogram": {"field": field, "calendar_interval": spec.interval.value}}
            case _:
                raise InvalidExpressionError(f"Unsupported aggregation '{name}'", fragment=spec)
        if spec.aggregations:
            node["aggs"] = self.build(spec.aggregations)
        return node

    def _field(
        self,
        field: FieldRef,
        spec: Aggregation,
        *,
        bucketable: bool = False,
        orderable: bool = False,
    ) -> str:
        definition = self._schema.resolve(field)
        if definition.type in (FieldType.TEXT, FieldType.COMPLETION):
            raise InvalidExpressionError(
                f"cannot aggregate on {definition.type.value} field '{definition.name}'",
                field=definition.name,
                fragment=spec,
            )
        if orderable and not definition.type.is_orderable:
            raise InvalidExpressionError(
                f"field '{definition.name}' is not numeric or date",
                field=definition.name,
                fragment=spec,
            )
        if bucketable and definition.unique:
            raise InvalidExpressionError(
                f"terms on unique field '{definition.name}' yields one bucket per document",
                field=definition.name,
                fragment=spec,
            )
        return definition.name

    @staticmethod
    def _range(r: AggregationRange) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if r.key is not None:
            out["key"] = r.key
        if r.from_ is not None:
            out["from"] = r.from_
        if r.to is not None:
            out["to"] = r.to
        return out


__all__ = ["AggregationBuilder"]
