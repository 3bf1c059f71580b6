"""Configuration dataclasses for the formatv engine."""
from dataclasses import dataclass, field
from enum import Enum


class MeasureMode(str, Enum):
    """How the width of a rendered field is measured when padding it."""

    CHARS = "chars"
    CELLS = "cells"


@dataclass
class ParsingConfig:
    """Format string parsing behaviour."""

    strict: bool = False


@dataclass
class RenderConfig:
    """Options applied while rendering fields."""

    measure: MeasureMode = MeasureMode.CHARS


@dataclass
class CLIConfig:
    """Command-line presentation toggles."""

    coerce_arguments: bool = True
    no_color: bool = False


@dataclass
class FormatvConfig:
    """Top-level configuration grouping all formatv sections."""

    parsing: ParsingConfig = field(default_factory=ParsingConfig)
    render: RenderConfig = field(default_factory=RenderConfig)
    cli: CLIConfig = field(default_factory=CLIConfig)
