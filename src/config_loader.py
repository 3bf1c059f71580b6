"""Configuration loader that parses and validates user-provided TOML."""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import fields, is_dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from .datatypes import CLIConfig, FormatvConfig, ParsingConfig, RenderConfig
from .formatv.env_flags import STRICT_ENV_VAR, env_flag_enabled

logger = logging.getLogger(__name__)

_KNOWN_SECTIONS = ("parsing", "render", "cli")


class ConfigError(ValueError):
    """Raised when the configuration file is malformed or fails validation."""


def _coerce_bool(value: Any, dotted_key: str) -> bool:
    """Return a bool, coercing simple 0/1 representations when necessary."""

    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in {"0", "1"}:
            return normalized == "1"
        if normalized in {"true", "false"}:
            return normalized == "true"
    raise ConfigError(f"{dotted_key} must be a boolean (use true/false).")


def _coerce_enum(value: Any, dotted_key: str, enum_type: type[Enum]) -> Enum:
    """Return an enum member, coercing string values case-insensitively."""

    if isinstance(value, enum_type):
        return value
    if isinstance(value, str):
        normalized = value.strip().lower()
        for member in enum_type:
            if normalized == str(member.value).lower():
                return member
    raise ConfigError(
        f"{dotted_key} must be one of: {', '.join(str(member.value) for member in enum_type)}"
    )


def _sanitize_section(raw: Any, name: str, cls):
    """
    Coerce a raw TOML table into an instance of ``cls`` with cleaned booleans and enums.

    Parameters:
        raw (Any): Raw TOML section data.
        name (str): Section name used when reporting validation errors.
        cls: Dataclass type used to construct the section object.

    Returns:
        Any: Instantiated dataclass populated with values from ``raw``.

    Raises:
        ConfigError: If the section is not a table or contains invalid keys or values.
    """
    if not isinstance(raw, dict):
        raise ConfigError(f"[{name}] must be a table")
    cleaned: Dict[str, Any] = {}
    defaults = cls()
    cls_fields = {field.name for field in fields(cls)}
    for key, value in raw.items():
        if key not in cls_fields:
            raise ConfigError(f"Unknown key in [{name}]: {key}")
        default_value = getattr(defaults, key)
        dotted_key = f"{name}.{key}"
        if isinstance(default_value, bool):
            cleaned[key] = _coerce_bool(value, dotted_key)
        elif isinstance(default_value, Enum):
            cleaned[key] = _coerce_enum(value, dotted_key, type(default_value))
        elif is_dataclass(default_value):
            cleaned[key] = _sanitize_section(value, dotted_key, type(default_value))
        else:
            cleaned[key] = value
    return cls(**cleaned)


def apply_env_overrides(config: FormatvConfig, environ: Optional[Mapping[str, str]] = None) -> FormatvConfig:
    """Apply environment overrides (``FORMATV_STRICT``) to ``config`` in place and return it."""

    env = os.environ if environ is None else environ
    if env_flag_enabled(env.get(STRICT_ENV_VAR)):
        config.parsing.strict = True
    return config


def fresh_config(environ: Optional[Mapping[str, str]] = None) -> FormatvConfig:
    """Return default configuration with environment overrides applied."""

    return apply_env_overrides(FormatvConfig(), environ)


def load_config(path: str, environ: Optional[Mapping[str, str]] = None) -> FormatvConfig:
    """
    Load and validate formatv configuration from a TOML file.

    Reads the file at `path`, parses it as UTF-8 TOML (BOM is accepted), coerces each
    known section into its dataclass and applies environment overrides.

    Returns:
        FormatvConfig: The validated configuration.

    Raises:
        ConfigError: If the file is not UTF-8, TOML parsing fails, or a section
            contains unknown keys or invalid values.
    """

    with open(path, "rb") as handle:
        raw_bytes = handle.read()
    if raw_bytes.startswith(b"\xef\xbb\xbf"):
        raw_bytes = raw_bytes[3:]
    try:
        raw = tomllib.loads(raw_bytes.decode("utf-8"))
    except UnicodeDecodeError as exc:
        raise ConfigError("Configuration file must be UTF-8 encoded") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Failed to parse TOML: {exc}") from exc

    unknown = sorted(set(raw) - set(_KNOWN_SECTIONS))
    if unknown:
        raise ConfigError(f"Unknown configuration sections: {', '.join(unknown)}")

    config = FormatvConfig(
        parsing=_sanitize_section(raw.get("parsing", {}), "parsing", ParsingConfig),
        render=_sanitize_section(raw.get("render", {}), "render", RenderConfig),
        cli=_sanitize_section(raw.get("cli", {}), "cli", CLIConfig),
    )
    logger.debug("Loaded configuration from %s", path)
    return apply_env_overrides(config, environ)
