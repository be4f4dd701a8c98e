"""Catalog – DocumentCodec port and the Product codec."""
from __future__ import annotations

from typing import Any, Protocol, TypeVar

from catalog_search.catalog.document import Completion, Product
from catalog_search.catalog.fields import ProductField, format_timestamp, parse_timestamp
from catalog_search.kernel.errors import DecodeMismatchError

T = TypeVar("T")


class DocumentCodec(Protocol[T]):
    """Port: translate between a typed document and its engine ``_source``."""

    def encode(self, document: T) -> dict[str, Any]: ...
    def decode(self, source: dict[str, Any], id: str | None) -> T: ...
    def identity(self, document: T) -> str | None: ...
    def with_identity(self, document: T, id: str) -> T: ...


class ProductCodec:
    """Serialise :class:`Product` to and from the ``products`` mapping.

    Every mapped field except ``suggests`` is required on decode.
    """

    def encode(self, document: Product) -> dict[str, Any]:
        source: dict[str, Any] = {
            ProductField.NAME.value: document.name,
            ProductField.DESCRIPTION.value: document.description,
            ProductField.CATEGORY.value: document.category,
            ProductField.PRICE.value: document.price,
            ProductField.STOCK.value: document.stock,
            ProductField.CREATED_AT.value: format_timestamp(document.created_at),
            ProductField.AVAILABLE.value: document.available,
        }
        if document.suggests is not None:
            source[ProductField.SUGGESTS.value] = document.suggests.to_wire()
        return source

    def decode(self, source: dict[str, Any], id: str | None) -> Product:
        try:
            return self._decode(source, id)
        except KeyError as exc:
            raise DecodeMismatchError(
                f"_source.{exc.args[0]}", "product field", f"Product source is missing '{exc.args[0]}'"
            ) from exc
        except (TypeError, ValueError) as exc:
            raise DecodeMismatchError("_source", "product document", f"Malformed product source: {exc}") from exc

    def _decode(self, source: dict[str, Any], id: str | None) -> Product:
        raw_suggests = source.get(ProductField.SUGGESTS.value)
        return Product(
            name=source[ProductField.NAME.value],
            description=source[ProductField.DESCRIPTION.value],
            category=source[ProductField.CATEGORY.value],
            price=int(source[ProductField.PRICE.value]),
            stock=int(source[ProductField.STOCK.value]),
            created_at=parse_timestamp(source[ProductField.CREATED_AT.value]),
            available=bool(source[ProductField.AVAILABLE.value]),
            suggests=Completion.from_wire(raw_suggests) if raw_suggests is not None else None,
            id=id,
        )

    def identity(self, document: Product) -> str | None:
        return document.id

    def with_identity(self, document: Product, id: str) -> Product:
        return document.with_id(id)


__all__ = ["DocumentCodec", "ProductCodec"]
