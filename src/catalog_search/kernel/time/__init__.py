"""Kernel time – Clock port + implementations."""
from catalog_search.kernel.time.clock import Clock, FrozenClock, SystemClock

__all__ = ["Clock", "FrozenClock", "SystemClock"]
