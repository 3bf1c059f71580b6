from __future__ import annotations

import io

import pytest

from src.datatypes import MeasureMode
from src.formatv.align import AlignStyle, FmtAlign, resolve_measure, translate_align_char
from src.formatv.wrappers import build_format_wrapper
from tests.helpers.sinks import RecordingSink


def _aligned(value: object, where: AlignStyle, amount: int, pad: str = " ", options: str = "", **kwargs) -> str:
    stream = io.StringIO()
    FmtAlign(build_format_wrapper(value), where, amount, pad, **kwargs).format(stream, options)
    return stream.getvalue()


@pytest.mark.parametrize(
    ("char", "expected"),
    [("-", AlignStyle.LEFT), ("=", AlignStyle.CENTER), ("+", AlignStyle.RIGHT), ("x", None), ("", None)],
)
def test_translate_align_char(char: str, expected: AlignStyle | None) -> None:
    assert translate_align_char(char) is expected


@pytest.mark.parametrize(
    ("where", "expected"),
    [
        (AlignStyle.LEFT, "ab     "),
        (AlignStyle.RIGHT, "     ab"),
        (AlignStyle.CENTER, "  ab   "),
    ],
)
def test_alignment_positions(where: AlignStyle, expected: str) -> None:
    assert _aligned("ab", where, 7) == expected


def test_center_with_even_remainder() -> None:
    assert _aligned("ab", AlignStyle.CENTER, 6, "*") == "**ab**"


def test_wider_content_is_never_truncated() -> None:
    assert _aligned("abcdef", AlignStyle.RIGHT, 3) == "abcdef"


def test_exact_width_is_unpadded() -> None:
    assert _aligned("abc", AlignStyle.CENTER, 3, "-") == "abc"


def test_options_reach_the_renderer() -> None:
    assert _aligned(255, AlignStyle.LEFT, 6, ".", "x") == "0xff.."


def test_zero_width_streams_directly() -> None:
    sink = RecordingSink()
    FmtAlign(build_format_wrapper("hello"), AlignStyle.LEFT, 0).format(sink, "")
    assert sink.chunks == ["hello"]


def test_padding_is_measured_after_rendering() -> None:
    sink = RecordingSink()
    FmtAlign(build_format_wrapper("ab"), AlignStyle.LEFT, 4, "_").format(sink, "")
    assert sink.getvalue() == "ab__"


def test_cell_measure_accounts_for_wide_characters() -> None:
    measure = resolve_measure(MeasureMode.CELLS)
    assert _aligned("日本", AlignStyle.RIGHT, 6, measure=measure) == "  日本"
    assert _aligned("日本", AlignStyle.RIGHT, 6) == "    日本"


def test_resolve_measure_accepts_strings() -> None:
    assert resolve_measure("chars") is len
    assert resolve_measure("cells")("日") == 2
