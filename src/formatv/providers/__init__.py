"""Formatter providers and the registry that resolves them."""

from .builtin import (
    SequenceProvider,
    format_bool,
    format_float,
    format_integer,
    format_string,
    parse_range_options,
    register_builtin_providers,
)
from .registry import (
    BoundRenderer,
    Provider,
    ProviderRegistry,
    SupportsFormatv,
    default_registry,
)

__all__ = [
    "BoundRenderer",
    "Provider",
    "ProviderRegistry",
    "SequenceProvider",
    "SupportsFormatv",
    "default_registry",
    "format_bool",
    "format_float",
    "format_integer",
    "format_string",
    "parse_range_options",
    "register_builtin_providers",
]
