"""End-to-end rendering through format sessions."""

from __future__ import annotations

import io
import logging

import pytest

from src.datatypes import FormatvConfig, MeasureMode
from src.formatv import FormatvObject, formatv
from src.formatv.errors import FormatStringError, ProviderResolutionError
from src.formatv.providers import ProviderRegistry
from tests.helpers.sinks import RecordingSink


@pytest.mark.parametrize(
    ("fmt", "values", "expected"),
    [
        ("{0} {1} {0}", ("a", "bb"), "a bb a"),
        ("{0,10}", ("x",), "         x"),
        ("{0,-10}", ("x",), "x         "),
        ("{0,=6}", ("ab",), "  ab  "),
        ("{0,1}", ("hello",), "hello"),
        ("{5}", ("only one arg",), "{5}"),
        ("[{0,5}]", ("ab",), "[   ab]"),
        ("[{0,-5}]", ("ab",), "[ab   ]"),
        ("[{0,=6}]", ("ab",), "[  ab  ]"),
        ("[{0,*=8}]", ("ab",), "[***ab***]"),
        ("[{0,-6:x}]", (255,), "[0xff  ]"),
        ("{0:N} items", (1234567,), "1,234,567 items"),
        ("{{{0}}}", (7,), "{7}"),
        ("{0:$[+]}", ([1, 2, 3],), "1+2+3"),
        ("no fields", ("unused",), "no fields"),
        ("", (), ""),
    ],
)
def test_rendering(fmt: str, values: tuple, expected: str) -> None:
    assert str(formatv(fmt, *values)) == expected


def test_out_of_range_index_is_echoed(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.DEBUG, logger="src.formatv.session"):
        assert formatv("{0} {3,-4:x}", "a").to_string() == "a {3,-4:x}"
    assert any("out of range" in record.getMessage() for record in caplog.records)


def test_empty_items_render_nothing() -> None:
    assert formatv("a{}b{x}c", 1).to_string() == "abc"


def test_malformed_text_is_recovered_as_literal() -> None:
    assert formatv("{0}}{1", "x").to_string() == "x}{1"


def test_rendering_is_repeatable() -> None:
    session = formatv("{0,-3}|{1:x}", "a", 16)
    assert session.to_string() == session.to_string() == "a  |0x10"


def test_streams_into_any_sink() -> None:
    sink = RecordingSink()
    formatv("x={0}, y={1}", 1, 2).format(sink)
    assert sink.getvalue() == "x=1, y=2"


def test_unformattable_argument_fails_before_rendering() -> None:
    with pytest.raises(ProviderResolutionError):
        formatv("{0}", object())


def test_unformattable_argument_fails_even_when_unreferenced() -> None:
    with pytest.raises(ProviderResolutionError):
        formatv("static", 1, object())


def test_strict_config_rejects_malformed_input(strict_config: FormatvConfig) -> None:
    with pytest.raises(FormatStringError):
        formatv("{x}", 1, config=strict_config)


def test_strict_mode_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FORMATV_STRICT", "1")
    with pytest.raises(FormatStringError):
        formatv("oops {", 1)


def test_cell_measurement(config: FormatvConfig) -> None:
    config.render.measure = MeasureMode.CELLS
    assert formatv("[{0,-4}]", "日本", config=config).to_string() == "[日本]"
    assert formatv("[{0,-4}]", "日本").to_string() == "[日本  ]"


def test_sessions_nest() -> None:
    inner = formatv("<{0,3}>", 5)
    assert formatv("[{0}] [{0,-7}]", inner).to_string() == "[<  5>] [<  5>  ]"


def test_custom_registry_is_used_for_arguments(registry: ProviderRegistry) -> None:
    registry.register(int, lambda value, stream, options: stream.write("#" * value))
    assert formatv("{0}", 3, registry=registry).to_string() == "###"
    assert formatv("{0}", 3).to_string() == "3"


def test_with_arguments_reuses_parsed_items() -> None:
    session = formatv("{0}-{1}", "a", "b")
    rebound = session.with_arguments(1, 2)
    assert rebound.replacements is session.replacements
    assert rebound.to_string() == "1-2"
    assert session.to_string() == "a-b"


def test_to_buffer_truncates() -> None:
    buffer = formatv("{0}", "hello world").to_buffer(5)
    assert str(buffer) == "hello"
    assert buffer.truncated


def test_repr() -> None:
    assert repr(formatv("{0}", 1)) == "FormatvObject('{0}', <1 argument(s)>)"


def test_direct_construction_with_wrappers() -> None:
    from src.formatv.wrappers import create_wrappers

    session = FormatvObject("{1}{0}", create_wrappers(["a", "b"]))
    stream = io.StringIO()
    session.format(stream)
    assert stream.getvalue() == "ba"
