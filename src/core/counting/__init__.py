"""Newline counting for single files and ordered batches of files."""

from .batch import BatchLineCounter
from .line_counter import LineCounter, count_lines, count_lines_in_files

__all__ = ["BatchLineCounter", "LineCounter", "count_lines", "count_lines_in_files"]
