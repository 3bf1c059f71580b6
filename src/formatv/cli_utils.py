"""Helpers shared by the CLI commands."""

from __future__ import annotations

import re
from typing import Any, Dict, List, Optional, Sequence

from .replacement import ReplacementItem, ReplacementType

_INT_RE = re.compile(r"[+-]?[0-9]+")


def coerce_bool(value: str) -> Optional[bool]:
    """
    Coerce common truthy and falsy spellings into a boolean.

    Recognised truthy strings are "true", "yes" and "on"; falsy strings are "false",
    "no" and "off". Whitespace and case are ignored.

    Returns:
        `True` or `False` for a recognised spelling, `None` otherwise.
    """
    lowered = value.strip().lower()
    if lowered in {"true", "yes", "on"}:
        return True
    if lowered in {"false", "no", "off"}:
        return False
    return None


def to_number(value: str) -> Optional[int | float]:
    """
    Convert a numeric string to an int or float when possible.

    Integer literals become ints so that integer options (hex, grouping) apply to them;
    other numeric strings, commas allowed, become floats.

    Returns:
        The numeric value, or `None` if the string is not a number.
    """
    text = value.strip()
    if not any(char.isdigit() for char in text):
        return None
    if _INT_RE.fullmatch(text):
        return int(text)
    try:
        return float(text.replace(",", ""))
    except ValueError:
        return None


def coerce_argument(value: str) -> Any:
    """Return ``value`` as a bool, int or float when it spells one, otherwise unchanged."""

    flag = coerce_bool(value)
    if flag is not None:
        return flag
    number = to_number(value)
    if number is not None:
        return number
    return value


def coerce_arguments(values: Sequence[str], *, enabled: bool = True) -> List[Any]:
    if not enabled:
        return list(values)
    return [coerce_argument(value) for value in values]


def describe_item(position: int, item: ReplacementItem) -> Dict[str, Any]:
    """Summarise a parsed item as a JSON-friendly mapping."""

    entry: Dict[str, Any] = {"position": position, "type": item.type.value, "spec": item.spec}
    if item.type is ReplacementType.FORMAT:
        entry.update(
            {
                "index": item.index,
                "width": item.align,
                "align": item.where.value,
                "pad": item.pad,
                "options": item.options,
            }
        )
    return entry
