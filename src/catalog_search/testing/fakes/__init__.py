"""Testing fakes – in-memory engine and clock doubles."""
from catalog_search.testing.fakes.clock import FakeClock
from catalog_search.testing.fakes.completion import prefix_distance
from catalog_search.testing.fakes.engine import InMemorySearchBackend

__all__ = ["FakeClock", "InMemorySearchBackend", "prefix_distance"]
