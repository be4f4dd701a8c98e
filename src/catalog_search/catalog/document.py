"""Catalog – Product document and its completion inputs."""
from __future__ import annotations

import dataclasses
from datetime import datetime
from typing import Iterable

from catalog_search.kernel.errors import InvariantViolationError


@dataclasses.dataclass(frozen=True)
class Completion:
    """Ordered, duplicate-free inputs of a completion field."""

    inputs: tuple[str, ...]
    weight: int | None = None

    @classmethod
    def of(cls, *inputs: str, weight: int | None = None) -> "Completion":
        return cls(tuple(dict.fromkeys(inputs)), weight)

    @classmethod
    def from_wire(cls, raw: object) -> "Completion":
        if isinstance(raw, dict):
            values = raw.get("input", [])
            if isinstance(values, str):
                values = [values]
            return cls.of(*values, weight=raw.get("weight"))
        if isinstance(raw, str):
            return cls.of(raw)
        if isinstance(raw, Iterable):
            return cls.of(*raw)
        return cls(())

    def to_wire(self) -> dict[str, object]:
        payload: dict[str, object] = {"input": list(self.inputs)}
        if self.weight is not None:
            payload["weight"] = self.weight
        return payload


@dataclasses.dataclass(frozen=True)
class Product:
    """A catalog item.

    ``id`` is ``None`` until the engine assigns one on first save and never
    changes afterwards.  ``suggests`` defaults to the lower-cased name.
    """

    name: str
    description: str
    category: str
    price: int
    stock: int
    created_at: datetime
    available: bool
    suggests: Completion | None = None
    id: str | None = None

    def __post_init__(self) -> None:
        if self.stock < 0:
            raise InvariantViolationError(
                f"stock must be >= 0, got {self.stock}",
                detail={"field": "stock"},
            )
        if self.suggests is None:
            object.__setattr__(self, "suggests", Completion.of(self.name.lower()))

    @property
    def is_new(self) -> bool:
        return self.id is None

    def with_id(self, id: str) -> "Product":
        """Return a copy carrying the engine-assigned *id*."""
        if self.id is not None and self.id != id:
            raise InvariantViolationError(
                f"Product id is immutable: '{self.id}' cannot become '{id}'",
                detail={"field": "id"},
            )
        if self.id == id:
            return self
        return dataclasses.replace(self, id=id)


__all__ = ["Completion", "Product"]
