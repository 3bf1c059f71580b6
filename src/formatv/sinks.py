"""Output sinks that formatted text can be streamed into."""

from __future__ import annotations

from typing import Any, List, Protocol

from rich.console import Console


class TextSink(Protocol):
    """Append-only text destination; any object with ``write(str)`` qualifies."""

    def write(self, text: str, /) -> Any: ...


class FixedBuffer:
    """
    Bounded text buffer.

    Keeps at most ``capacity`` characters. Writes past the limit are dropped and
    ``truncated`` is set so callers can tell the result is incomplete.
    """

    def __init__(self, capacity: int) -> None:
        if capacity < 0:
            raise ValueError("capacity must be >= 0")
        self.capacity = capacity
        self.truncated = False
        self._chunks: List[str] = []
        self._size = 0

    def write(self, text: str) -> int:
        room = self.capacity - self._size
        if len(text) > room:
            self.truncated = True
            text = text[:room]
        if text:
            self._chunks.append(text)
            self._size += len(text)
        return len(text)

    def getvalue(self) -> str:
        return "".join(self._chunks)

    def __len__(self) -> int:
        return self._size

    def __str__(self) -> str:
        return self.getvalue()


class ConsoleSink:
    """Write formatted text through a Rich console without markup or wrapping."""

    def __init__(self, console: Console) -> None:
        self.console = console

    def write(self, text: str) -> int:
        if text:
            self.console.out(text, end="", highlight=False)
        return len(text)
