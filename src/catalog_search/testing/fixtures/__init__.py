"""Testing fixtures – pytest plugin exposing the in-memory catalog.

Enable in ``conftest.py``::

    pytest_plugins = ["catalog_search.testing.fixtures"]
"""
from catalog_search.testing.fixtures.catalog import CatalogHarness, catalog, memory_backend
from catalog_search.testing.fixtures.clock import fake_clock

__all__ = ["CatalogHarness", "catalog", "fake_clock", "memory_backend"]
