"""Shared error codes and exceptions for line counting."""
from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(str, Enum):
    CONFIG_ERROR = "CONFIG_ERROR"
    IO_ERROR = "IO_ERROR"


class BackendError(RuntimeError):
    """Exception carrying a structured error code and the offending context."""

    def __init__(self, code: ErrorCode, message: str, *, context: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.code = code
        self.context = context or {}

    def __str__(self) -> str:  # pragma: no cover - formatting sugar
        base = super().__str__()
        return f"[{self.code.value}] {base}" if base else self.code.value


class LineCountError(BackendError):
    """Raised when a single file cannot be counted."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(
            ErrorCode.IO_ERROR,
            f"Cannot count lines in '{path}': {reason}",
            context={"file_path": path},
        )
        self.path = path
