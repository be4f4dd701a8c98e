"""Unit tests for the catalog model: schema, Product, Completion, ProductCodec."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from catalog_search.catalog import (
    PRODUCT_SCHEMA,
    Completion,
    FieldDef,
    FieldType,
    IndexSchema,
    Product,
    ProductCodec,
    ProductField,
    field_name,
)
from catalog_search.catalog.fields import format_timestamp, parse_timestamp
from catalog_search.kernel.errors import DecodeMismatchError, InvalidExpressionError, InvariantViolationError


def _product(**overrides) -> Product:  # type: ignore[no-untyped-def]
    attrs = {
        "name": "Apple iPhone 13",
        "description": "Smartphone",
        "category": "Phones",
        "price": 999,
        "stock": 5,
        "created_at": datetime(2026, 1, 1, 9, 30, 0),
        "available": True,
    }
    attrs.update(overrides)
    return Product(**attrs)


# ---------------------------------------------------------------------------
# Field schema
# ---------------------------------------------------------------------------


class TestIndexSchema:
    def test_resolve_enum_member(self) -> None:
        assert PRODUCT_SCHEMA.resolve(ProductField.PRICE).type is FieldType.LONG

    def test_resolve_wire_name(self) -> None:
        assert PRODUCT_SCHEMA.resolve("createdAt").type is FieldType.DATE

    def test_unknown_field_raises(self) -> None:
        with pytest.raises(InvalidExpressionError) as exc_info:
            PRODUCT_SCHEMA.resolve("prce")
        assert exc_info.value.field == "prce"

    def test_tiebreaker_is_unique_id(self) -> None:
        assert PRODUCT_SCHEMA.tiebreaker.name == "_id"
        assert PRODUCT_SCHEMA.is_unique(ProductField.ID)
        assert not PRODUCT_SCHEMA.is_unique(ProductField.PRICE)

    def test_contains(self) -> None:
        assert ProductField.NAME in PRODUCT_SCHEMA
        assert "nope" not in PRODUCT_SCHEMA
        assert 42 not in PRODUCT_SCHEMA

    def test_tiebreaker_must_be_unique(self) -> None:
        with pytest.raises(ValueError):
            IndexSchema("x", [FieldDef("code", FieldType.KEYWORD)], tiebreaker="code")

    def test_tiebreaker_must_exist(self) -> None:
        with pytest.raises(ValueError):
            IndexSchema("x", [FieldDef("code", FieldType.KEYWORD, unique=True)], tiebreaker="id")

    def test_field_name(self) -> None:
        assert field_name(ProductField.CREATED_AT) == "createdAt"
        assert field_name("price") == "price"

    def test_field_type_flags(self) -> None:
        assert FieldType.TEXT.is_tokenized
        assert not FieldType.KEYWORD.is_tokenized
        assert FieldType.INTEGER.is_numeric
        assert FieldType.DATE.is_orderable
        assert not FieldType.BOOLEAN.is_orderable


class TestTimestamps:
    def test_naive_formatting(self) -> None:
        assert format_timestamp(datetime(2026, 3, 4, 5, 6, 7)) == "2026-03-04T05:06:07"

    def test_aware_value_shifted_to_utc(self) -> None:
        seoul = timezone(timedelta(hours=9))
        assert format_timestamp(datetime(2026, 1, 1, 12, 0, tzinfo=seoul)) == "2026-01-01T03:00:00"

    def test_parse(self) -> None:
        assert parse_timestamp("2026-03-04T05:06:07") == datetime(2026, 3, 4, 5, 6, 7)


# ---------------------------------------------------------------------------
# Product and Completion
# ---------------------------------------------------------------------------


class TestProduct:
    def test_negative_stock_rejected(self) -> None:
        with pytest.raises(InvariantViolationError):
            _product(stock=-1)

    def test_suggests_default_to_lower_name(self) -> None:
        assert _product().suggests == Completion(("apple iphone 13",))

    def test_explicit_suggests_kept(self) -> None:
        product = _product(suggests=Completion.of("iphone", "apple"))
        assert product.suggests.inputs == ("iphone", "apple")

    def test_new_until_id_assigned(self) -> None:
        product = _product()
        assert product.is_new
        saved = product.with_id("abc")
        assert saved.id == "abc"
        assert not saved.is_new
        assert product.id is None

    def test_id_is_immutable_once_set(self) -> None:
        saved = _product().with_id("abc")
        with pytest.raises(InvariantViolationError):
            saved.with_id("other")

    def test_same_id_is_noop(self) -> None:
        saved = _product().with_id("abc")
        assert saved.with_id("abc") is saved


class TestCompletion:
    def test_of_deduplicates_preserving_order(self) -> None:
        assert Completion.of("b", "a", "b").inputs == ("b", "a")

    def test_to_wire(self) -> None:
        assert Completion.of("qled").to_wire() == {"input": ["qled"]}
        assert Completion.of("qled", weight=3).to_wire() == {"input": ["qled"], "weight": 3}

    def test_from_wire_variants(self) -> None:
        assert Completion.from_wire({"input": "tv", "weight": 2}) == Completion(("tv",), 2)
        assert Completion.from_wire("tv") == Completion(("tv",))
        assert Completion.from_wire(["a", "b"]) == Completion(("a", "b"))


# ---------------------------------------------------------------------------
# ProductCodec
# ---------------------------------------------------------------------------


class TestProductCodec:
    def test_encode_uses_wire_names(self) -> None:
        source = ProductCodec().encode(_product())
        assert source == {
            "name": "Apple iPhone 13",
            "description": "Smartphone",
            "category": "Phones",
            "price": 999,
            "stock": 5,
            "createdAt": "2026-01-01T09:30:00",
            "available": True,
            "suggests": {"input": ["apple iphone 13"]},
        }

    def test_decode_attaches_id(self) -> None:
        codec = ProductCodec()
        decoded = codec.decode(codec.encode(_product()), "doc-1")
        assert decoded == _product(id="doc-1")

    def test_decode_missing_field_raises(self) -> None:
        with pytest.raises(DecodeMismatchError) as exc_info:
            ProductCodec().decode({"category": "x"}, "1")
        assert exc_info.value.path == "_source.name"

    @pytest.mark.parametrize("field", ["description", "stock", "available"])
    def test_decode_requires_every_mapped_field(self, field: str) -> None:
        source = ProductCodec().encode(_product())
        del source[field]
        with pytest.raises(DecodeMismatchError) as exc_info:
            ProductCodec().decode(source, "1")
        assert exc_info.value.path == f"_source.{field}"

    def test_decode_without_suggests(self) -> None:
        codec = ProductCodec()
        source = codec.encode(_product())
        del source["suggests"]
        assert codec.decode(source, "1").suggests is None

    def test_decode_bad_timestamp_raises(self) -> None:
        source = ProductCodec().encode(_product())
        source["createdAt"] = "yesterday"
        with pytest.raises(DecodeMismatchError):
            ProductCodec().decode(source, "1")

    def test_identity(self) -> None:
        codec = ProductCodec()
        assert codec.identity(_product()) is None
        assert codec.with_identity(_product(), "7").id == "7"
