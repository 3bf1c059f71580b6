"""Exception types raised by the formatting engine."""

from __future__ import annotations

from typing import Optional


class FormatvError(RuntimeError):
    """Base class for formatv failures."""


class FormatStringError(FormatvError, ValueError):
    """Raised in strict mode when a format string does not match the field grammar."""

    def __init__(self, message: str, *, format_string: str, position: Optional[int] = None) -> None:
        location = f" at offset {position}" if position is not None else ""
        super().__init__(f"{message}{location}: {format_string!r}")
        self.format_string = format_string
        self.position = position


class ProviderResolutionError(FormatvError, TypeError):
    """Raised when an argument type has neither ``__formatv__`` nor a registered provider."""

    def __init__(self, cls: type) -> None:
        super().__init__(
            f"No formatter available for type {cls.__module__}.{cls.__qualname__}; "
            "define __formatv__(stream, options) or register a provider"
        )
        self.cls = cls
