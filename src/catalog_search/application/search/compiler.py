"""Application search – QueryCompiler.

Lowers a :class:`SearchQuery` into an Elasticsearch request body.  The
compiler is pure: it validates every field against the :class:`IndexSchema`
and fails with :class:`InvalidExpressionError` before anything reaches the
engine.

Range bounds on date fields may be absolute (``datetime``/``date``,
formatted ``yyyy-MM-dd'T'HH:mm:ss``) or relative (:class:`DateMath`,
``now-3d``); both go through the same ``gte``/``gt``/``lte``/``lt`` path.
"""
from __future__ import annotations

from datetime import date, datetime, time
from typing import Any

from catalog_search.application.aggregation.builder import AggregationBuilder
from catalog_search.application.pagination.page_request import CursorRequest, OffsetRequest
from catalog_search.application.expressions.dates import DateMath
from catalog_search.application.expressions.nodes import (
    BoolGroup,
    ExactTerm,
    Expression,
    InSet,
    MatchAll,
    MatchText,
    Range,
)
from catalog_search.application.search.query import SearchQuery
from catalog_search.application.expressions.sort import SortSpec
from catalog_search.application.suggest.completion import build_suggest
from catalog_search.catalog.fields import (
    PRODUCT_SCHEMA,
    FieldDef,
    FieldType,
    IndexSchema,
    format_timestamp,
    parse_timestamp,
)
from catalog_search.kernel.errors import InvalidExpressionError
from catalog_search.observability.logging import get_logger

logger = get_logger(__name__)

_BOOL_CLAUSES = ("must", "should", "must_not", "filter")


class QueryCompiler:
    """Compile queries for one index schema."""

    def __init__(self, schema: IndexSchema = PRODUCT_SCHEMA) -> None:
        self._schema = schema
        self._aggregations = AggregationBuilder(schema, self.compile_expression)

    @property
    def schema(self) -> IndexSchema:
        return self._schema

    # ------------------------------------------------------------------
    # Whole request
    # ------------------------------------------------------------------

    def compile(self, query: SearchQuery) -> dict[str, Any]:
        body: dict[str, Any] = {
            "query": self.compile_expression(query.expression or MatchAll()),
            "track_total_hits": query.track_total_hits,
        }
        sort = self.effective_sort(query)
        if sort:
            body["sort"] = self.compile_sort(sort)
        match query.page:
            case OffsetRequest():
                body["from"] = query.page.offset
                body["size"] = query.page.size
            case CursorRequest():
                body["size"] = query.page.size
                if query.page.search_after is not None:
                    if len(query.page.search_after) != len(sort):
                        raise InvalidExpressionError(
                            f"cursor has {len(query.page.search_after)} sort values, "
                            f"sort spec has {len(sort)}",
                            fragment=query.page,
                        )
                    body["search_after"] = list(query.page.search_after)
        if query.max_results is not None:
            body["size"] = query.max_results
        if query.aggregations:
            body["aggs"] = self._aggregations.build(query.aggregations)
        if query.suggestion is not None:
            body["suggest"] = build_suggest(query.suggestion, self._schema)
        return body

    def effective_sort(self, query: SearchQuery) -> SortSpec:
        """The sort sent to the engine; cursor queries get a unique tiebreaker."""
        if query.is_cursor:
            return query.sort.with_tiebreaker(self._schema)
        return query.sort

    def compile_sort(self, sort: SortSpec) -> list[dict[str, Any]]:
        clauses = []
        for criterion in sort:
            definition = self._schema.resolve(criterion.field)
            if definition.type in (FieldType.TEXT, FieldType.COMPLETION):
                raise InvalidExpressionError(
                    f"cannot sort on {definition.type.value} field '{definition.name}'",
                    field=definition.name,
                    fragment=criterion,
                )
            clauses.append({definition.name: {"order": criterion.direction.value}})
        return clauses

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def compile_expression(self, expression: Expression) -> dict[str, Any]:
        match expression:
            case MatchAll():
                return {"match_all": {}}
            case MatchText():
                return self._match(expression)
            case ExactTerm():
                definition = self._comparable(expression.field, expression)
                return {"term": {definition.name: {"value": self._value(definition, expression.value, expression)}}}
            case InSet():
                definition = self._comparable(expression.field, expression)
                return {"terms": {definition.name: [self._value(definition, v, expression) for v in expression.values]}}
            case Range():
                return self._range(expression)
            case BoolGroup():
                return self._bool(expression)
        raise InvalidExpressionError(f"Unsupported expression {type(expression).__name__}", fragment=expression)

    def _match(self, expression: MatchText) -> dict[str, Any]:
        definition = self._schema.resolve(expression.field)
        if not definition.type.is_tokenized:
            raise InvalidExpressionError(
                f"MatchText needs a tokenized field; '{definition.name}' is {definition.type.value}",
                field=definition.name,
                fragment=expression,
            )
        return {"match": {definition.name: {"query": expression.value, "operator": expression.operator}}}

    def _bool(self, group: BoolGroup) -> dict[str, Any]:
        body: dict[str, Any] = {}
        for clause in _BOOL_CLAUSES:
            children = getattr(group, clause)
            if children:
                body[clause] = [self.compile_expression(child) for child in children]
        if group.minimum_should_match is not None:
            body["minimum_should_match"] = group.minimum_should_match
        return {"bool": body}

    def _range(self, expression: Range) -> dict[str, Any]:
        definition = self._comparable(expression.field, expression)
        if definition.type is FieldType.BOOLEAN:
            raise InvalidExpressionError(
                f"Range is meaningless on boolean field '{definition.name}'",
                field=definition.name,
                fragment=expression,
            )
        bounds: dict[str, Any] = {}
        if expression.min is not None:
            key = "gte" if expression.min_inclusive else "gt"
            bounds[key] = self._bound(definition, expression.min, expression)
        if expression.max is not None:
            key = "lte" if expression.max_inclusive else "lt"
            bounds[key] = self._bound(definition, expression.max, expression)
        return {"range": {definition.name: bounds}}

    # ------------------------------------------------------------------
    # Field and value checks
    # ------------------------------------------------------------------

    def _comparable(self, field: Any, expression: Expression) -> FieldDef:
        definition = self._schema.resolve(field)
        if definition.type is FieldType.COMPLETION:
            raise InvalidExpressionError(
                f"completion field '{definition.name}' only supports suggestions",
                field=definition.name,
                fragment=expression,
            )
        if definition.type.is_tokenized:
            logger.warning(
                "query.exact_term_on_text",
                field=definition.name,
                expression=type(expression).__name__,
            )
        return definition

    def _value(self, definition: FieldDef, value: Any, expression: Expression) -> Any:
        kind = definition.type
        if kind is FieldType.BOOLEAN:
            if isinstance(value, bool):
                return value
        elif kind.is_numeric:
            if isinstance(value, (int, float)) and not isinstance(value, bool):
                return value
        elif kind is FieldType.DATE:
            return self._date(definition, value, expression)
        elif isinstance(value, str):
            return value
        raise InvalidExpressionError(
            f"value {value!r} does not fit {kind.value} field '{definition.name}'",
            field=definition.name,
            fragment=expression,
        )

    def _bound(self, definition: FieldDef, value: Any, expression: Expression) -> Any:
        if definition.type is FieldType.DATE:
            return self._date(definition, value, expression)
        return self._value(definition, value, expression)

    def _date(self, definition: FieldDef, value: Any, expression: Expression) -> str:
        if isinstance(value, DateMath):
            return value.expression
        if isinstance(value, datetime):
            return format_timestamp(value)
        if isinstance(value, date):
            return format_timestamp(datetime.combine(value, time.min))
        if isinstance(value, str):
            if DateMath.is_expression(value):
                return value
            try:
                parse_timestamp(value)
            except ValueError:
                pass
            else:
                return value
        raise InvalidExpressionError(
            f"value {value!r} is neither a timestamp nor date math for field '{definition.name}'",
            field=definition.name,
            fragment=expression,
        )


__all__ = ["QueryCompiler"]
