"""Clipboard targets the session can copy results into."""

from __future__ import annotations

from typing import Protocol


class Clipboard(Protocol):
    """Anything that can receive copied text."""

    def write(self, text: str) -> None: ...


class MemoryClipboard:
    """Keeps the last copied value in memory.

    Used when no presentation layer is attached, e.g. by the command line
    client and by tests.
    """

    def __init__(self) -> None:
        self.text: str | None = None
        self.writes = 0

    def write(self, text: str) -> None:
        self.text = text
        self.writes += 1
