"""Environment flag helpers shared by the loader and CLI."""

from __future__ import annotations

from typing import Final, Optional

STRICT_ENV_VAR: Final[str] = "FORMATV_STRICT"
CONFIG_ENV_VAR: Final[str] = "FORMATV_CONFIG"

_FALSY_VALUES: Final[frozenset[str]] = frozenset({"0", "false", "no", "off"})


def env_flag_enabled(raw_value: Optional[str]) -> bool:
    """Return True when an environment-style flag requests enabling behavior."""

    if raw_value is None:
        return False
    normalized = raw_value.strip().lower()
    return bool(normalized) and normalized not in _FALSY_VALUES
