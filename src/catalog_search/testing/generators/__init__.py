"""Testing generators – fluent builders and Hypothesis strategies."""
from catalog_search.testing.generators.builder import Builder, ProductBuilder
from catalog_search.testing.generators.strategies import product_strategy

__all__ = ["Builder", "ProductBuilder", "product_strategy"]
