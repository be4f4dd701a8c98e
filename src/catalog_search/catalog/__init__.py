"""Catalog – Product document, field schema and codec."""
from catalog_search.catalog.codec import DocumentCodec, ProductCodec
from catalog_search.catalog.document import Completion, Product
from catalog_search.catalog.fields import (
    PRODUCT_SCHEMA,
    FieldDef,
    FieldRef,
    FieldType,
    IndexSchema,
    ProductField,
    field_name,
)

__all__ = [
    "PRODUCT_SCHEMA",
    "Completion",
    "DocumentCodec",
    "FieldDef",
    "FieldRef",
    "FieldType",
    "IndexSchema",
    "Product",
    "ProductCodec",
    "ProductField",
    "field_name",
]
