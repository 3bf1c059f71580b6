"""Public shim exposing the formatv CLI and library surface."""

from __future__ import annotations

from typing import Callable, cast

import src.formatv.cli_entry as _cli_entry
from src.config_loader import ConfigError, fresh_config, load_config
from src.datatypes import FormatvConfig
from src.formatv import (
    AlignStyle,
    ConsoleSink,
    FixedBuffer,
    FormatStringError,
    FormatvError,
    FormatvObject,
    ProviderRegistry,
    ProviderResolutionError,
    default_registry,
    fmt_align,
    fmt_pad,
    fmt_repeat,
    formatv,
    parse_format_string,
)

__all__ = (
    "AlignStyle",
    "ConfigError",
    "ConsoleSink",
    "FixedBuffer",
    "FormatStringError",
    "FormatvConfig",
    "FormatvError",
    "FormatvObject",
    "ProviderRegistry",
    "ProviderResolutionError",
    "default_registry",
    "fmt_align",
    "fmt_pad",
    "fmt_repeat",
    "formatv",
    "fresh_config",
    "load_config",
    "main",
    "parse_format_string",
)

main = _cli_entry.main
cli = getattr(_cli_entry, "cli", main)


if __name__ == "__main__":
    _entry_point = cast(Callable[[], None], main)
    _entry_point()
