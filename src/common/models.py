"""Data models shared across the counting core and its callers."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

DEFAULT_CHUNK_SIZE = 1_048_576
MIN_CHUNK_SIZE = 1024


@dataclass(slots=True)
class FileLineCount:
    """Outcome of counting a single file inside a batch."""

    index: int
    file_path: Path
    line_count: int = 0
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(slots=True)
class FileProgress:
    """Progress payload reported once a file in a batch is done."""

    file_path: Path
    index: int
    line_count: int
    total_files: int
    current_phase: str = "count-complete"
    error: Optional[str] = None


@dataclass(slots=True)
class GlobalSettings:
    """Global knobs that apply across profiles."""

    open_error_policy: str = "empty"  # empty | fail-fast


@dataclass(slots=True)
class ProfileSettings:
    """Profile-specific read and parallelism limits."""

    description: str = ""
    chunk_size: int = DEFAULT_CHUNK_SIZE
    max_parallel_files: int = 1


@dataclass(slots=True)
class RuntimeConfig:
    """Resolved configuration for a single run."""

    global_settings: GlobalSettings = field(default_factory=GlobalSettings)
    profile: ProfileSettings = field(default_factory=ProfileSettings)
