"""Reusable predicates over capability-based records."""

from .older_than import HasAge, OlderThan, count_matching

__all__ = ["HasAge", "OlderThan", "count_matching"]
