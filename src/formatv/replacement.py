"""Format string parsing into literal spans and replacement fields."""

from __future__ import annotations

import logging
import re
import sys
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import List, NamedTuple, Optional, Tuple

from .align import AlignStyle, translate_align_char
from .errors import FormatStringError

logger = logging.getLogger(__name__)

_BRACE_RE = re.compile(r"[{}]")
_DIGITS_RE = re.compile(r"[0-9]+")
_FIELD_SEPARATORS = ",:"


class ReplacementType(Enum):
    """Kinds of items a format string is split into."""

    EMPTY = "empty"
    FORMAT = "format"
    LITERAL = "literal"


@dataclass(frozen=True)
class ReplacementItem:
    """
    One parsed piece of a format string.

    ``spec`` holds the literal text for LITERAL items and the raw field text,
    braces included, for FORMAT and EMPTY items.
    """

    type: ReplacementType = ReplacementType.EMPTY
    spec: str = ""
    index: int = 0
    align: int = 0
    where: AlignStyle = AlignStyle.RIGHT
    pad: str = " "
    options: str = ""

    @classmethod
    def literal(cls, text: str) -> "ReplacementItem":
        return cls(type=ReplacementType.LITERAL, spec=text)


class FieldLayout(NamedTuple):
    """Alignment settings taken from a field's layout segment."""

    where: AlignStyle
    align: int
    pad: str


DEFAULT_LAYOUT = FieldLayout(AlignStyle.RIGHT, 0, " ")


def _report(message: str, source: str, position: int, strict: bool) -> None:
    """Raise in strict mode, otherwise note the recovery at debug level."""

    if strict:
        raise FormatStringError(message, format_string=source, position=position)
    logger.debug("%s at offset %d in %r; recovering", message, position, source)


def _match_layout(text: str) -> Tuple[Optional[FieldLayout], str]:
    """
    Consume ``[[pad]align]width`` from the front of ``text``.

    Returns the matched layout (or ``None`` when no usable width follows the
    optional pad/align prefix) and the unconsumed remainder.
    """
    where = AlignStyle.RIGHT
    pad = " "
    rest = text
    # Only the first two characters can be something other than the width.
    second = translate_align_char(rest[1]) if len(rest) > 1 else None
    first = translate_align_char(rest[0]) if rest else None
    if second is not None:
        pad = rest[0]
        where = second
        rest = rest[2:]
    elif first is not None:
        where = first
        rest = rest[1:]
    else:
        rest = rest.lstrip()
    match = _DIGITS_RE.match(rest)
    if match is None:
        return None, text
    try:
        width = int(match.group())
    except ValueError:
        # Past the interpreter's int conversion limit.
        return None, text
    return FieldLayout(where, width, pad), rest[match.end():]


def consume_field_layout(text: str) -> Optional[FieldLayout]:
    """
    Parse a complete layout segment (the text after a field's comma).

    Parameters:
        text (str): Layout text such as ``"10"``, ``"-10"`` or ``"*=8"``.

    Returns:
        Optional[FieldLayout]: The parsed layout, ``DEFAULT_LAYOUT`` for blank text,
        or ``None`` when the text is not a valid layout. Callers treat ``None`` as
        "no padding".
    """
    if not text.strip():
        return DEFAULT_LAYOUT
    layout, rest = _match_layout(text)
    if layout is None or rest.strip():
        return None
    return layout


def parse_replacement_item(
    spec: str,
    *,
    raw: Optional[str] = None,
    strict: bool = False,
    source: Optional[str] = None,
    offset: int = 0,
) -> ReplacementItem:
    """
    Parse the body of a replacement field (the text between the braces).

    The body follows ``index[,layout][:options]``. A body whose index is not a
    non-negative decimal integer yields an EMPTY item. A layout that does not match
    the grammar leaves the field unpadded; options after the first ``:`` are kept
    verbatim either way.

    Parameters:
        spec (str): Field body without braces.
        raw (Optional[str]): Original field text; defaults to ``"{" + spec + "}"``.
        strict (bool): Raise ``FormatStringError`` instead of recovering.
        source (Optional[str]): Whole format string, used for error reporting.
        offset (int): Offset of the field inside ``source``.

    Returns:
        ReplacementItem: A FORMAT item, or an EMPTY item for a malformed index.
    """
    raw_text = raw if raw is not None else "{" + spec + "}"
    source_text = source if source is not None else raw_text

    cut = len(spec)
    for separator in _FIELD_SEPARATORS:
        found = spec.find(separator)
        if 0 <= found < cut:
            cut = found
    index_text = spec[:cut].strip()
    if not _DIGITS_RE.fullmatch(index_text):
        _report("Invalid replacement field index", source_text, offset, strict)
        return ReplacementItem(type=ReplacementType.EMPTY, spec=raw_text)

    try:
        index = int(index_text)
    except ValueError:
        # Too many digits to convert; no argument list can reach it, so it echoes.
        logger.debug("Replacement field index in %r is too large; clamping", raw_text)
        index = sys.maxsize

    rest = spec[cut:]
    layout = DEFAULT_LAYOUT
    if rest.startswith(","):
        segment = rest[1:]
        # A ':' pad is only possible as the first character, right before an align char.
        skip = 1 if len(segment) > 1 and translate_align_char(segment[1]) is not None else 0
        colon = segment.find(":", skip)
        layout_text = segment if colon < 0 else segment[:colon]
        consumed = consume_field_layout(layout_text)
        if consumed is None:
            _report("Invalid replacement field layout", source_text, offset, strict)
        else:
            layout = consumed
        rest = "" if colon < 0 else segment[colon:]

    options = rest[1:] if rest.startswith(":") else ""
    return ReplacementItem(
        type=ReplacementType.FORMAT,
        spec=raw_text,
        index=index,
        align=layout.align,
        where=layout.where,
        pad=layout.pad,
        options=options,
    )


def split_literal_and_replacement(
    fmt: str, start: int = 0, *, strict: bool = False
) -> Tuple[ReplacementItem, int]:
    """
    Split the next item off ``fmt`` beginning at ``start``.

    The item is a literal run up to the next brace, a single escaped brace, or a
    replacement field. An unterminated field turns the rest of the string into a
    literal; a ``{`` followed by another ``{`` before its ``}`` makes the text up to
    the second brace literal.

    Returns:
        Tuple[ReplacementItem, int]: The item and the offset just past it.
    """
    match = _BRACE_RE.search(fmt, start)
    if match is None:
        return ReplacementItem.literal(fmt[start:]), len(fmt)
    brace = match.start()
    if brace > start:
        return ReplacementItem.literal(fmt[start:brace]), brace

    char = fmt[brace]
    if fmt.startswith(char * 2, brace):
        return ReplacementItem.literal(char), brace + 2
    if char == "}":
        _report("Unmatched closing brace", fmt, brace, strict)
        return ReplacementItem.literal(char), brace + 1

    close = fmt.find("}", brace + 1)
    if close < 0:
        _report("Unterminated replacement field; escape with {{ for a literal brace", fmt, brace, strict)
        return ReplacementItem.literal(fmt[brace:]), len(fmt)
    reopen = fmt.find("{", brace + 1, close)
    if reopen >= 0:
        _report("Nested brace inside replacement field", fmt, brace, strict)
        return ReplacementItem.literal(fmt[brace:reopen]), reopen

    item = parse_replacement_item(
        fmt[brace + 1 : close],
        raw=fmt[brace : close + 1],
        strict=strict,
        source=fmt,
        offset=brace,
    )
    return item, close + 1


@lru_cache(maxsize=256)
def parse_format_string(fmt: str, *, strict: bool = False) -> Tuple[ReplacementItem, ...]:
    """
    Parse ``fmt`` into an immutable sequence of replacement items.

    Adjacent literal text (including un-escaped ``{{``/``}}``) is merged into a
    single LITERAL item and empty literals are dropped. Results are memoized, so
    repeated sessions over one format string share the parsed tuple.

    Raises:
        FormatStringError: In strict mode, for any input that would otherwise be
            recovered from.
    """
    items: List[ReplacementItem] = []
    pending: List[str] = []
    position = 0
    while position < len(fmt):
        item, position = split_literal_and_replacement(fmt, position, strict=strict)
        if item.type is ReplacementType.LITERAL:
            pending.append(item.spec)
            continue
        if pending:
            items.append(ReplacementItem.literal("".join(pending)))
            pending.clear()
        items.append(item)
    if pending:
        items.append(ReplacementItem.literal("".join(pending)))
    return tuple(items)
