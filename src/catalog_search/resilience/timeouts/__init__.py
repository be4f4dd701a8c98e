"""Resilience – deadlines for engine calls."""
from catalog_search.resilience.timeouts.deadline import Deadline, run_with_deadline

__all__ = ["Deadline", "run_with_deadline"]
