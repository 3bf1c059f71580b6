"""Field alignment: pad a rendered field to a requested width."""

from __future__ import annotations

import io
from enum import Enum
from typing import TYPE_CHECKING, Callable, Dict, Final, Optional

from rich.cells import cell_len

from src.datatypes import MeasureMode

if TYPE_CHECKING:
    from .sinks import TextSink
    from .wrappers import FormatWrapper

Measure = Callable[[str], int]


class AlignStyle(str, Enum):
    """Where rendered text sits inside a padded field."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


ALIGN_CHARS: Final[Dict[str, AlignStyle]] = {
    "-": AlignStyle.LEFT,
    "=": AlignStyle.CENTER,
    "+": AlignStyle.RIGHT,
}


def translate_align_char(char: str) -> Optional[AlignStyle]:
    """Map a layout alignment character to its style, or ``None`` when it is not one."""

    return ALIGN_CHARS.get(char)


def resolve_measure(mode: MeasureMode | str) -> Measure:
    """Return the width function for a measure mode (``chars`` or ``cells``)."""

    if MeasureMode(mode) is MeasureMode.CELLS:
        return cell_len
    return len


def fill(stream: TextSink, count: int, pad: str) -> None:
    """Write ``count`` copies of ``pad`` to ``stream``."""

    if count > 0:
        stream.write(pad * count)


class FmtAlign:
    """Render a wrapped argument, padding it to ``amount`` columns."""

    def __init__(
        self,
        wrapper: FormatWrapper,
        where: AlignStyle,
        amount: int,
        pad: str = " ",
        *,
        measure: Measure = len,
    ) -> None:
        self.wrapper = wrapper
        self.where = where
        self.amount = amount
        self.pad = pad
        self.measure = measure

    def format(self, stream: TextSink, options: str) -> None:
        """
        Write the aligned field to ``stream``.

        Without a width the wrapper renders straight into ``stream``. Otherwise the
        field renders into a temporary sized to itself so its width can be measured;
        content wider than ``amount`` is written unpadded and never truncated. Centered
        content puts the extra pad character on the right when the remainder is odd.
        """
        if self.amount == 0:
            self.wrapper.render(stream, options)
            return

        scratch = io.StringIO()
        self.wrapper.render(scratch, options)
        item = scratch.getvalue()
        width = self.measure(item)
        if self.amount <= width:
            stream.write(item)
            return

        pad_amount = self.amount - width
        if self.where is AlignStyle.LEFT:
            stream.write(item)
            fill(stream, pad_amount, self.pad)
        elif self.where is AlignStyle.CENTER:
            left = pad_amount // 2
            fill(stream, left, self.pad)
            stream.write(item)
            fill(stream, pad_amount - left, self.pad)
        else:
            fill(stream, pad_amount, self.pad)
            stream.write(item)
