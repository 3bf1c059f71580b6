"""Providers for built-in Python types."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, Optional, Sequence, Set, Tuple

from .registry import BoundRenderer, ProviderRegistry, default_registry

if TYPE_CHECKING:
    from src.formatv.sinks import TextSink

logger = logging.getLogger(__name__)

_DEFAULT_FIXED_PRECISION = 2
_DEFAULT_EXPONENT_PRECISION = 6
_DEFAULT_RANGE_SEPARATOR = ", "
_RANGE_DELIMITERS: Dict[str, str] = {"[": "]", "<": ">", "(": ")"}

_BOOL_STYLES: Dict[str, Tuple[str, str]] = {
    "Y": ("YES", "NO"),
    "y": ("yes", "no"),
    "D": ("1", "0"),
    "d": ("1", "0"),
    "T": ("TRUE", "FALSE"),
    "t": ("true", "false"),
    "": ("true", "false"),
}


def _parse_count(text: str, default: int, *, kind: str) -> int:
    """Parse a trailing digit count from an options string, falling back to ``default``."""

    stripped = text.strip()
    if not stripped:
        return default
    if stripped.isascii() and stripped.isdigit():
        return int(stripped)
    logger.debug("Ignoring unrecognised %s options %r", kind, text)
    return default


def _group_digits(digits: str) -> str:
    head = len(digits) % 3 or 3
    groups = [digits[:head]]
    groups.extend(digits[index : index + 3] for index in range(head, len(digits), 3))
    return ",".join(groups)


def _consume_hex_style(style: str) -> Optional[Tuple[bool, bool, str]]:
    """Return ``(upper, prefixed, remainder)`` for a hex style, or ``None``."""

    if not style or style[0] not in "xX":
        return None
    upper = style[0] == "X"
    marker = style[1:2]
    if marker == "-":
        return upper, False, style[2:]
    if marker == "+":
        return upper, True, style[2:]
    return upper, True, style[1:]


def format_integer(value: int, stream: TextSink, options: str) -> None:
    """
    Render an integer.

    Options: ``x-``/``X-`` hex without prefix, ``x``/``x+``/``X``/``X+`` hex with a
    ``0x`` prefix, ``N``/``n`` decimal with ``,`` grouping, ``D``/``d`` plain decimal.
    A trailing number sets the minimum digit count (zero padded).
    """
    style = options.strip()
    sign = "-" if value < 0 else ""
    magnitude = abs(value)

    hex_style = _consume_hex_style(style)
    if hex_style is not None:
        upper, prefixed, rest = hex_style
        digits = format(magnitude, "X" if upper else "x").rjust(_parse_count(rest, 0, kind="integer"), "0")
        stream.write(f"{sign}{'0x' if prefixed else ''}{digits}")
        return

    grouped = False
    if style[:1] in ("N", "n"):
        grouped = True
        style = style[1:]
    elif style[:1] in ("D", "d"):
        style = style[1:]
    digits = str(magnitude).rjust(_parse_count(style, 0, kind="integer"), "0")
    if grouped:
        digits = _group_digits(digits)
    stream.write(sign + digits)


def format_float(value: float, stream: TextSink, options: str) -> None:
    """
    Render a float.

    Options: ``F``/``f`` fixed point (default, 2 digits), ``E``/``e`` exponent
    (6 digits), ``P``/``p`` percent (2 digits). A trailing number overrides the
    precision.
    """
    style = options.strip()
    kind = style[:1]
    if kind in ("P", "p"):
        precision = _parse_count(style[1:], _DEFAULT_FIXED_PRECISION, kind="float")
        stream.write(f"{value * 100:.{precision}f}%")
        return
    if kind in ("E", "e"):
        precision = _parse_count(style[1:], _DEFAULT_EXPONENT_PRECISION, kind="float")
        stream.write(format(value, f".{precision}{kind}"))
        return
    rest = style[1:] if kind in ("F", "f") else style
    precision = _parse_count(rest, _DEFAULT_FIXED_PRECISION, kind="float")
    stream.write(f"{value:.{precision}f}")


def format_bool(value: bool, stream: TextSink, options: str) -> None:
    """Render a bool as ``Y`` YES/NO, ``y`` yes/no, ``D``/``d`` 1/0, ``T`` TRUE/FALSE or ``t`` true/false."""

    style = options.strip()
    words = _BOOL_STYLES.get(style)
    if words is None:
        logger.debug("Ignoring unrecognised bool options %r", options)
        words = _BOOL_STYLES[""]
    stream.write(words[0] if value else words[1])


def format_string(value: str, stream: TextSink, options: str) -> None:
    """Render a string; a numeric option caps the number of characters written."""

    limit = _parse_count(options, -1, kind="string")
    stream.write(value if limit < 0 else value[:limit])


def _consume_range_option(style: str, indicator: str, default: str) -> Tuple[str, str]:
    if not style.startswith(indicator):
        return default, style
    body = style[1:]
    closer = _RANGE_DELIMITERS.get(body[:1])
    if closer is None:
        logger.debug("Range option %r has no delimited value", indicator)
        return default, body
    end = body.find(closer, 1)
    if end < 0:
        logger.debug("Range option %r is missing its closing %r", indicator, closer)
        return default, ""
    return body[1:end], body[end + 1 :]


def parse_range_options(options: str) -> Tuple[str, str]:
    """
    Split range options of the form ``$[separator]@[element options]``.

    Either part may be omitted, and each value may be delimited by ``[]``, ``<>``
    or ``()``. The separator defaults to ``", "`` and element options to ``""``.

    Returns:
        Tuple[str, str]: ``(separator, element_options)``.
    """
    separator, rest = _consume_range_option(options, "$", _DEFAULT_RANGE_SEPARATOR)
    element_options, rest = _consume_range_option(rest, "@", "")
    if rest.strip():
        logger.debug("Ignoring unexpected range options %r", rest)
    return separator, element_options


class SequenceProvider:
    """
    Render the items of a list, tuple or range joined by a separator.

    A container reached again while its own elements are being bound renders
    as a ``[...]`` (or ``(...)`` for tuples) placeholder.
    """

    def __init__(self) -> None:
        self._binding: Set[int] = set()

    def prepare(self, value: Sequence[Any], registry: ProviderRegistry) -> BoundRenderer:
        key = id(value)
        if key in self._binding:
            logger.debug("Recursive %s reference; rendering a placeholder", type(value).__name__)
            placeholder = "(...)" if isinstance(value, tuple) else "[...]"

            def render_placeholder(stream: TextSink, options: str) -> None:
                stream.write(placeholder)

            return render_placeholder

        self._binding.add(key)
        try:
            elements = tuple(registry.bind(item) for item in value)
        finally:
            self._binding.discard(key)

        def render(stream: TextSink, options: str) -> None:
            separator, element_options = parse_range_options(options)
            for position, element in enumerate(elements):
                if position:
                    stream.write(separator)
                element(stream, element_options)

        return render

    def __call__(self, value: Sequence[Any], stream: TextSink, options: str) -> None:
        self.prepare(value, default_registry)(stream, options)


def register_builtin_providers(registry: ProviderRegistry) -> ProviderRegistry:
    """Install the built-in providers on ``registry`` and return it."""

    sequence_provider = SequenceProvider()
    registry.register(str, format_string)
    registry.register(bool, format_bool)
    registry.register(int, format_integer)
    registry.register(float, format_float)
    for cls in (list, tuple, range):
        registry.register(cls, sequence_provider)
    return registry


register_builtin_providers(default_registry)
