"""Counting core and supporting predicates."""
