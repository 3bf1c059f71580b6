"""Adapters that change how a wrapped value is laid out."""

from __future__ import annotations

import io
from typing import TYPE_CHECKING, Any, Optional

from src.datatypes import MeasureMode

from .align import AlignStyle, FmtAlign, fill, resolve_measure
from .providers import ProviderRegistry
from .wrappers import build_format_wrapper

if TYPE_CHECKING:
    from .sinks import TextSink


class FormatAdapter:
    """Base class for adapters; the wrapped item is resolved on construction."""

    def __init__(self, item: Any, registry: Optional[ProviderRegistry] = None) -> None:
        self.item = build_format_wrapper(item, registry)

    def __formatv__(self, stream: TextSink, options: str) -> None:
        raise NotImplementedError


class AlignAdapter(FormatAdapter):
    def __init__(
        self,
        item: Any,
        where: AlignStyle,
        amount: int,
        pad: str = " ",
        registry: Optional[ProviderRegistry] = None,
        *,
        measure: MeasureMode | str = MeasureMode.CHARS,
    ) -> None:
        super().__init__(item, registry)
        self.where = AlignStyle(where)
        self.amount = amount
        self.pad = pad
        self.measure = resolve_measure(measure)

    def __formatv__(self, stream: TextSink, options: str) -> None:
        FmtAlign(self.item, self.where, self.amount, self.pad, measure=self.measure).format(stream, options)


class PadAdapter(FormatAdapter):
    def __init__(self, item: Any, left: int, right: int, registry: Optional[ProviderRegistry] = None) -> None:
        super().__init__(item, registry)
        self.left = left
        self.right = right

    def __formatv__(self, stream: TextSink, options: str) -> None:
        fill(stream, self.left, " ")
        self.item.render(stream, options)
        fill(stream, self.right, " ")


class RepeatAdapter(FormatAdapter):
    def __init__(self, item: Any, count: int, registry: Optional[ProviderRegistry] = None) -> None:
        super().__init__(item, registry)
        self.count = count

    def __formatv__(self, stream: TextSink, options: str) -> None:
        if self.count <= 0:
            return
        scratch = io.StringIO()
        self.item.render(scratch, options)
        stream.write(scratch.getvalue() * self.count)


def fmt_align(
    item: Any,
    where: AlignStyle,
    amount: int,
    pad: str = " ",
    *,
    measure: MeasureMode | str = MeasureMode.CHARS,
) -> AlignAdapter:
    """
    Align ``item`` within ``amount`` columns regardless of the field's own layout.

    ``measure`` selects how the rendered width is counted (``"chars"`` or
    ``"cells"``), matching the ``[render] measure`` setting.
    """
    return AlignAdapter(item, where, amount, pad, measure=measure)


def fmt_pad(item: Any, left: int, right: int) -> PadAdapter:
    """Surround ``item`` with ``left`` and ``right`` spaces."""

    return PadAdapter(item, left, right)


def fmt_repeat(item: Any, count: int) -> RepeatAdapter:
    """Render ``item`` ``count`` times back to back."""

    return RepeatAdapter(item, count)
