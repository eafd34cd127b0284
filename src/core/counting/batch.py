"""Batch counting across many files with optional parallel workers."""
from __future__ import annotations

import logging
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from pathlib import Path
from typing import Callable, Dict, Iterator, List, Optional, Sequence, Tuple

from common.config import DEFAULT_PROFILE, Overrides, load_runtime_config, raises_on_open_error
from common.errors import LineCountError
from common.models import FileLineCount, FileProgress, RuntimeConfig
from common.progress import ProgressLogger
from .line_counter import FilePath, LineCounter

logger = logging.getLogger(__name__)

ProgressCallback = Optional[Callable[[FileProgress], None]]


def _count_one(counter: LineCounter, index: int, path: FilePath) -> FileLineCount:
    try:
        line_count = counter.count(path)
    except LineCountError as exc:
        logger.warning("%s", exc)
        return FileLineCount(index=index, file_path=Path(path), line_count=0, error=str(exc))
    return FileLineCount(index=index, file_path=Path(path), line_count=line_count)


class BatchLineCounter:
    """Coordinates line counting across multiple files.

    Results always come back in input order, one per path, duplicates
    included. Per-file failures are recorded on the result and never abort
    the batch.
    """

    def __init__(
        self,
        config: Optional[RuntimeConfig] = None,
        *,
        progress_log: Optional[Path] = None,
    ) -> None:
        self.config = config or RuntimeConfig()
        self.max_workers = max(1, self.config.profile.max_parallel_files)
        self.counter = LineCounter(
            chunk_size=self.config.profile.chunk_size,
            raise_on_open_error=raises_on_open_error(self.config.global_settings.open_error_policy),
        )
        self.progress_logger = ProgressLogger(progress_log) if progress_log else None

    @classmethod
    def from_profile(
        cls,
        profile: str = DEFAULT_PROFILE,
        *,
        config_path: Optional[Path] = None,
        overrides: Overrides = None,
        progress_log: Optional[Path] = None,
    ) -> "BatchLineCounter":
        """Build a counter from a named profile in the JSON config."""

        config = load_runtime_config(profile, config_path=config_path, overrides=overrides)
        return cls(config, progress_log=progress_log)

    def count_files(
        self,
        paths: Sequence[FilePath],
        *,
        progress_callback: ProgressCallback = None,
    ) -> List[FileLineCount]:
        if not paths:
            return []

        total = len(paths)
        if self.max_workers == 1 or total == 1:
            results = []
            for index, path in enumerate(paths):
                result = _count_one(self.counter, index, path)
                results.append(result)
                self._emit_progress(result, total, progress_callback)
            return results

        results = []
        task_iter: Iterator[Tuple[int, FilePath]] = iter(enumerate(paths))
        in_flight: Dict[Future, int] = {}

        def submit_next() -> bool:
            try:
                index, path = next(task_iter)
            except StopIteration:
                return False
            in_flight[pool.submit(_count_one, self.counter, index, path)] = index
            return True

        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            while len(in_flight) < self.max_workers and submit_next():
                pass

            while in_flight:
                done, _ = wait(in_flight.keys(), return_when=FIRST_COMPLETED)
                for future in done:
                    in_flight.pop(future)
                    result = future.result()
                    results.append(result)
                    self._emit_progress(result, total, progress_callback)
                while len(in_flight) < self.max_workers and submit_next():
                    pass

        results.sort(key=lambda item: item.index)
        return results

    def count_lines_in_files(self, paths: Sequence[FilePath]) -> List[int]:
        return [result.line_count for result in self.count_files(paths)]

    def _emit_progress(
        self,
        result: FileLineCount,
        total: int,
        progress_callback: ProgressCallback,
    ) -> None:
        progress = FileProgress(
            file_path=result.file_path,
            index=result.index,
            line_count=result.line_count,
            total_files=total,
            current_phase="count-complete" if result.ok else "count-failed",
            error=result.error,
        )
        if progress_callback:
            progress_callback(progress)
        if self.progress_logger:
            self.progress_logger.emit(progress)
