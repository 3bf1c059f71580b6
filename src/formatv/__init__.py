"""Type-checked variadic text formatting."""

from .adapters import fmt_align, fmt_pad, fmt_repeat
from .align import AlignStyle, FmtAlign
from .errors import FormatStringError, FormatvError, ProviderResolutionError
from .providers import ProviderRegistry, SupportsFormatv, default_registry
from .replacement import (
    FieldLayout,
    ReplacementItem,
    ReplacementType,
    consume_field_layout,
    parse_format_string,
)
from .session import FormatvObject, formatv
from .sinks import ConsoleSink, FixedBuffer, TextSink
from .wrappers import FormatWrapper, build_format_wrapper, create_wrappers

__all__ = [
    "AlignStyle",
    "ConsoleSink",
    "FieldLayout",
    "FixedBuffer",
    "FmtAlign",
    "FormatStringError",
    "FormatWrapper",
    "FormatvError",
    "FormatvObject",
    "ProviderRegistry",
    "ProviderResolutionError",
    "ReplacementItem",
    "ReplacementType",
    "SupportsFormatv",
    "TextSink",
    "build_format_wrapper",
    "consume_field_layout",
    "create_wrappers",
    "default_registry",
    "fmt_align",
    "fmt_pad",
    "fmt_repeat",
    "formatv",
    "parse_format_string",
]
