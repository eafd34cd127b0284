"""Chunked newline counting with bounded memory usage."""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, Sequence, Union

from common.errors import LineCountError
from common.models import DEFAULT_CHUNK_SIZE, MIN_CHUNK_SIZE

logger = logging.getLogger(__name__)

FilePath = Union[str, "os.PathLike[str]"]

NEWLINE = b"\n"


class LineCounter:
    """Counts ``\\n`` bytes in a file without materializing its contents.

    Only the newline byte is counted: ``\\r`` is ordinary data and a final
    line without a trailing newline does not add to the total. A file that
    cannot be opened counts as empty unless ``raise_on_open_error`` is set.
    """

    def __init__(self, *, chunk_size: int = DEFAULT_CHUNK_SIZE, raise_on_open_error: bool = False) -> None:
        self.chunk_size = max(MIN_CHUNK_SIZE, chunk_size)
        self.raise_on_open_error = raise_on_open_error

    def count(self, path: FilePath) -> int:
        target = Path(path)
        try:
            handle = target.open("rb")
        except (OSError, ValueError) as exc:
            # NUL bytes and lone surrogates in the path surface as ValueError
            if self.raise_on_open_error:
                raise LineCountError(str(target), _reason(exc)) from exc
            logger.debug("Treating unopenable file %s as empty: %s", target, exc)
            return 0

        line_count = 0
        with handle:
            while True:
                try:
                    chunk = handle.read(self.chunk_size)
                except OSError as exc:
                    raise LineCountError(str(target), _reason(exc)) from exc
                if not chunk:
                    break
                line_count += chunk.count(NEWLINE)
        return line_count

    def count_many(self, paths: Sequence[FilePath]) -> List[int]:
        """Count every path in order; a failing file contributes 0."""

        results: List[int] = []
        for path in paths:
            try:
                results.append(self.count(path))
            except LineCountError as exc:
                logger.warning("%s", exc)
                results.append(0)
        return results


_default_counter = LineCounter()


def count_lines(path: FilePath) -> int:
    """Return the number of newline bytes in ``path`` (0 if it cannot be opened)."""

    return _default_counter.count(path)


def count_lines_in_files(paths: Sequence[FilePath]) -> List[int]:
    return _default_counter.count_many(paths)


def _reason(exc: Exception) -> str:
    return getattr(exc, "strerror", None) or str(exc)
