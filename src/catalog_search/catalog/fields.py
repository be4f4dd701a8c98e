"""Catalog – field schema.

Field names are a closed set: every expression, sort, aggregation and
suggestion is resolved against an :class:`IndexSchema` before it is
compiled, so a typo fails locally instead of as an engine rejection::

    PRODUCT_SCHEMA.resolve(ProductField.PRICE).type  # FieldType.LONG
    PRODUCT_SCHEMA.resolve("prce")                   # InvalidExpressionError

Dual representations of one attribute (a tokenized ``name`` plus an exact
``name.keyword``) exist only if the index mapping defines them; a schema
declares such sub-fields explicitly and never derives them.
"""
from __future__ import annotations

import dataclasses
from datetime import UTC, datetime
from enum import Enum
from typing import Iterable

from catalog_search.kernel.errors import InvalidExpressionError

DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"


class FieldType(str, Enum):
    TEXT = "text"
    KEYWORD = "keyword"
    LONG = "long"
    INTEGER = "integer"
    DATE = "date"
    BOOLEAN = "boolean"
    COMPLETION = "completion"

    @property
    def is_tokenized(self) -> bool:
        return self is FieldType.TEXT

    @property
    def is_numeric(self) -> bool:
        return self in (FieldType.LONG, FieldType.INTEGER)

    @property
    def is_orderable(self) -> bool:
        """Numeric and date fields support ranges, stats and histograms."""
        return self.is_numeric or self is FieldType.DATE


class ProductField(str, Enum):
    """Wire names of the ``products`` index."""

    NAME = "name"
    DESCRIPTION = "description"
    CATEGORY = "category"
    PRICE = "price"
    STOCK = "stock"
    CREATED_AT = "createdAt"
    AVAILABLE = "available"
    SUGGESTS = "suggests"
    ID = "_id"


FieldRef = str | Enum


def field_name(field: FieldRef) -> str:
    """Return the wire name of *field*."""
    if isinstance(field, Enum):
        return str(field.value)
    return field


@dataclasses.dataclass(frozen=True)
class FieldDef:
    name: str
    type: FieldType
    unique: bool = False


class IndexSchema:
    """Known fields of one index plus its guaranteed-unique tiebreaker."""

    def __init__(self, index: str, fields: Iterable[FieldDef], tiebreaker: str) -> None:
        self.index = index
        self._fields: dict[str, FieldDef] = {f.name: f for f in fields}
        if tiebreaker not in self._fields:
            raise ValueError(f"tiebreaker '{tiebreaker}' is not a field of '{index}'")
        if not self._fields[tiebreaker].unique:
            raise ValueError(f"tiebreaker '{tiebreaker}' must be declared unique")
        self._tiebreaker = tiebreaker

    @property
    def tiebreaker(self) -> FieldDef:
        return self._fields[self._tiebreaker]

    @property
    def field_names(self) -> frozenset[str]:
        return frozenset(self._fields)

    def __contains__(self, field: object) -> bool:
        if not isinstance(field, (str, Enum)):
            return False
        return field_name(field) in self._fields

    def resolve(self, field: FieldRef) -> FieldDef:
        name = field_name(field)
        try:
            return self._fields[name]
        except KeyError:
            raise InvalidExpressionError(
                f"Unknown field '{name}' for index '{self.index}'",
                field=name,
            ) from None

    def is_unique(self, field: FieldRef) -> bool:
        return self.resolve(field).unique


PRODUCT_SCHEMA = IndexSchema(
    "products",
    [
        FieldDef(ProductField.NAME.value, FieldType.TEXT),
        FieldDef(ProductField.DESCRIPTION.value, FieldType.TEXT),
        FieldDef(ProductField.CATEGORY.value, FieldType.KEYWORD),
        FieldDef(ProductField.PRICE.value, FieldType.LONG),
        FieldDef(ProductField.STOCK.value, FieldType.INTEGER),
        FieldDef(ProductField.CREATED_AT.value, FieldType.DATE),
        FieldDef(ProductField.AVAILABLE.value, FieldType.BOOLEAN),
        FieldDef(ProductField.SUGGESTS.value, FieldType.COMPLETION),
        FieldDef(ProductField.ID.value, FieldType.KEYWORD, unique=True),
    ],
    tiebreaker=ProductField.ID.value,
)


def format_timestamp(value: datetime) -> str:
    """Format *value* as ``yyyy-MM-dd'T'HH:mm:ss``; aware values are shifted to UTC."""
    if value.tzinfo is not None:
        value = value.astimezone(UTC)
    return value.strftime(DATE_FORMAT)


def parse_timestamp(value: str) -> datetime:
    return datetime.strptime(value, DATE_FORMAT)


__all__ = [
    "DATE_FORMAT",
    "PRODUCT_SCHEMA",
    "FieldDef",
    "FieldRef",
    "FieldType",
    "IndexSchema",
    "ProductField",
    "field_name",
    "format_timestamp",
    "parse_timestamp",
]
