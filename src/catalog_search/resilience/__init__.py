"""Resilience – deadlines; retries are left to callers."""
from catalog_search.resilience.timeouts import Deadline, run_with_deadline

__all__ = ["Deadline", "run_with_deadline"]
