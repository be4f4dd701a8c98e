"""Testing fakes – field access and value normalisation for the in-memory engine.

Dates are compared as epoch milliseconds (what the engine returns as sort
values and histogram keys).  Text is analysed by lower-casing and
splitting on word characters; nothing more.
"""
from __future__ import annotations

import calendar
import re
from datetime import UTC, datetime, timedelta
from typing import Any, Mapping

from catalog_search.application.expressions.dates import DateMath
from catalog_search.catalog.fields import FieldDef, FieldType, IndexSchema, parse_timestamp
from catalog_search.kernel.time import Clock

_TOKEN_RE = re.compile(r"\w+")

Doc = tuple[str, Mapping[str, Any]]


def analyze(text: Any) -> list[str]:
    if isinstance(text, list):
        return [token for item in text for token in analyze(item)]
    if text is None:
        return []
    return [t.lower() for t in _TOKEN_RE.findall(str(text))]


def as_list(raw: Any) -> list[Any]:
    if raw is None:
        return []
    return list(raw) if isinstance(raw, list) else [raw]


def epoch_millis(value: datetime) -> int:
    if value.tzinfo is not None:
        value = value.astimezone(UTC).replace(tzinfo=None)
    return calendar.timegm(value.timetuple()) * 1000 + value.microsecond // 1000


def from_epoch_millis(value: int) -> datetime:
    return datetime(1970, 1, 1) + timedelta(milliseconds=value)


class FieldReader:
    """Reads and normalises document values according to an :class:`IndexSchema`."""

    def __init__(self, schema: IndexSchema, clock: Clock) -> None:
        self._schema = schema
        self._clock = clock

    def definition(self, field: str) -> FieldDef | None:
        if field not in self._schema:
            return None
        return self._schema.resolve(field)

    def raw(self, doc: Doc, field: str) -> Any:
        id, source = doc
        if field == "_id":
            return id
        value: Any = source
        for part in field.split("."):
            if not isinstance(value, Mapping):
                return None
            value = value.get(part)
        return value

    def comparable(self, definition: FieldDef, raw: Any) -> Any:
        """Normalise a stored value for comparison."""
        if definition.type is FieldType.DATE:
            return self._millis(raw)
        if definition.type is FieldType.BOOLEAN:
            return raw if isinstance(raw, bool) else str(raw).lower() == "true"
        return raw

    def bound(self, definition: FieldDef, value: Any) -> Any:
        """Normalise a query-side value (term, range bound, ``search_after``)."""
        kind = definition.type
        if kind is FieldType.DATE:
            if isinstance(value, str) and DateMath.is_expression(value):
                return epoch_millis(DateMath(value).resolve(self._clock.now()))
            return self._millis(value)
        if kind is FieldType.BOOLEAN:
            return value if isinstance(value, bool) else str(value).lower() == "true"
        if kind.is_numeric and isinstance(value, str):
            return float(value)
        return value

    @staticmethod
    def _millis(value: Any) -> int:
        if isinstance(value, datetime):
            return epoch_millis(value)
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return int(value)
        return epoch_millis(parse_timestamp(str(value)))


__all__ = ["Doc", "FieldReader", "analyze", "as_list", "epoch_millis", "from_epoch_millis"]
