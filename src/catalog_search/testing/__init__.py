"""Testing support – in-memory engine, builders, strategies and fixtures.

Import in your ``conftest.py``::

    pytest_plugins = ["catalog_search.testing.fixtures"]
"""

from catalog_search.testing.fakes import FakeClock, InMemorySearchBackend
from catalog_search.testing.generators import Builder, ProductBuilder, product_strategy

__all__ = ["Builder", "FakeClock", "InMemorySearchBackend", "ProductBuilder", "product_strategy"]
