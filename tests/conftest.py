from __future__ import annotations

import io
from pathlib import Path
from typing import Callable, Iterator

import pytest
from click.testing import CliRunner
from rich.console import Console

from src.datatypes import FormatvConfig
from src.formatv.env_flags import CONFIG_ENV_VAR, STRICT_ENV_VAR
from src.formatv.providers import ProviderRegistry, register_builtin_providers
from src.formatv.replacement import parse_format_string
from tests.helpers.sinks import RecordingSink


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep host FORMATV_* variables and parse-cache state out of every test."""

    monkeypatch.delenv(STRICT_ENV_VAR, raising=False)
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    parse_format_string.cache_clear()
    yield
    parse_format_string.cache_clear()


@pytest.fixture
def config() -> FormatvConfig:
    """Provide a default configuration object that tests may mutate."""

    return FormatvConfig()


@pytest.fixture
def strict_config() -> FormatvConfig:
    cfg = FormatvConfig()
    cfg.parsing.strict = True
    return cfg


@pytest.fixture
def registry() -> ProviderRegistry:
    """Provide an isolated registry with the built-in providers installed."""

    return register_builtin_providers(ProviderRegistry())


@pytest.fixture
def recording_sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def recording_console() -> Callable[[], tuple[Console, io.StringIO]]:
    """Return a factory for plain (no colour, no terminal) Rich consoles backed by a buffer."""

    def _make() -> tuple[Console, io.StringIO]:
        buffer = io.StringIO()
        console = Console(file=buffer, force_terminal=False, color_system=None, width=120)
        return console, buffer

    return _make


@pytest.fixture
def runner() -> CliRunner:
    """Provide a Click runner configured for CLI smoke tests."""

    return CliRunner()


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[[str], Path]:
    """Return a helper that writes TOML text to a temporary config file."""

    def _write(text: str) -> Path:
        path = tmp_path / "formatv.toml"
        path.write_text(text, encoding="utf-8")
        return path

    return _write
