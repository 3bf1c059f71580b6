from __future__ import annotations

import pytest

from src.formatv import ConsoleSink, FixedBuffer, formatv


def test_fixed_buffer_keeps_writes_within_capacity() -> None:
    buffer = FixedBuffer(10)
    assert buffer.write("hello") == 5
    assert buffer.write(" you") == 4
    assert buffer.getvalue() == "hello you"
    assert len(buffer) == 9
    assert not buffer.truncated


def test_fixed_buffer_truncates_and_flags() -> None:
    buffer = FixedBuffer(5)
    assert buffer.write("hello world") == 5
    assert buffer.write("!") == 0
    assert str(buffer) == "hello"
    assert buffer.truncated


def test_fixed_buffer_zero_capacity() -> None:
    buffer = FixedBuffer(0)
    formatv("{0}", "x").format(buffer)
    assert buffer.getvalue() == ""
    assert buffer.truncated


def test_fixed_buffer_rejects_negative_capacity() -> None:
    with pytest.raises(ValueError):
        FixedBuffer(-1)


def test_console_sink_writes_without_markup_or_newline(recording_console) -> None:
    console, output = recording_console()
    sink = ConsoleSink(console)
    formatv("[{0,-4}] [bold]{1}[/bold]", "ab", 1).format(sink)
    assert output.getvalue() == "[ab  ] [bold]1[/bold]"
