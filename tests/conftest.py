from __future__ import annotations

import io
from pathlib import Path

import pytest


class _FailingReader(io.BytesIO):
    def read(self, size: int = -1) -> bytes:
        raise OSError(5, "Input/output error")


@pytest.fixture
def failing_reads(monkeypatch):
    """Make reads of the named file fail after a successful open."""

    original_open = Path.open

    def install(name: str) -> None:
        def fake_open(self, *args, **kwargs):
            handle = original_open(self, *args, **kwargs)
            if self.name != name:
                return handle
            handle.close()
            return _FailingReader()

        monkeypatch.setattr(Path, "open", fake_open)

    return install
