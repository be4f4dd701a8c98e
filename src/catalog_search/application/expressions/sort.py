"""Application expressions – SortSpec, SortField, SortDirection."""
from __future__ import annotations

import dataclasses
from enum import Enum
from typing import Iterator

from catalog_search.catalog.fields import FieldRef, IndexSchema, field_name


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclasses.dataclass(frozen=True)
class SortField:
    """Single sort criterion."""
    field: FieldRef
    direction: SortDirection = SortDirection.ASC

    @property
    def name(self) -> str:
        return field_name(self.field)


@dataclasses.dataclass(frozen=True)
class SortSpec:
    """Ordered sort criteria; earlier fields take tie-break precedence."""

    fields: tuple[SortField, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", tuple(self.fields))

    @classmethod
    def by(cls, field: FieldRef, direction: SortDirection = SortDirection.ASC) -> "SortSpec":
        return cls((SortField(field, direction),))

    def and_(self, field: FieldRef, direction: SortDirection = SortDirection.ASC) -> "SortSpec":
        return SortSpec(self.fields + (SortField(field, direction),))

    def __bool__(self) -> bool:
        return bool(self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    def __iter__(self) -> Iterator[SortField]:
        return iter(self.fields)

    def is_total(self, schema: IndexSchema) -> bool:
        """True when some sort field is unique, so no two hits share a sort key."""
        return any(schema.is_unique(f.field) for f in self.fields)

    def with_tiebreaker(self, schema: IndexSchema) -> "SortSpec":
        """Append the schema's unique tiebreaker unless the ordering is already total."""
        if self.is_total(schema):
            return self
        return self.and_(schema.tiebreaker.name)


__all__ = ["SortDirection", "SortField", "SortSpec"]
