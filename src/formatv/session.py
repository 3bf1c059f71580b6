"""Format sessions: a parsed format string bound to its arguments."""

from __future__ import annotations

import io
import logging
from typing import Any, Optional, Sequence, Tuple

from src.datatypes import FormatvConfig

from .align import FmtAlign, resolve_measure
from .providers import ProviderRegistry
from .replacement import ReplacementItem, ReplacementType, parse_format_string
from .sinks import FixedBuffer, TextSink
from .wrappers import FormatWrapper, create_wrappers

logger = logging.getLogger(__name__)


def _default_config() -> FormatvConfig:
    from src.config_loader import fresh_config

    return fresh_config()


class FormatvObject:
    """
    A format string parsed once and bound to a fixed list of argument wrappers.

    Rendering is repeatable: every call to :meth:`format` walks the same parsed
    items and produces the same text. Fields whose index has no matching argument
    are echoed verbatim.
    """

    def __init__(
        self,
        fmt: str,
        wrappers: Sequence[FormatWrapper],
        *,
        config: Optional[FormatvConfig] = None,
        registry: Optional[ProviderRegistry] = None,
        replacements: Optional[Tuple[ReplacementItem, ...]] = None,
    ) -> None:
        self.config = config if config is not None else _default_config()
        self.registry = registry
        self.fmt = fmt
        self.replacements = (
            replacements
            if replacements is not None
            else parse_format_string(fmt, strict=self.config.parsing.strict)
        )
        self.wrappers: Tuple[FormatWrapper, ...] = tuple(wrappers)
        self._measure = resolve_measure(self.config.render.measure)

    def format(self, stream: TextSink) -> None:
        """Write the formatted text to ``stream``."""

        for item in self.replacements:
            if item.type is ReplacementType.EMPTY:
                continue
            if item.type is ReplacementType.LITERAL:
                stream.write(item.spec)
                continue
            if item.index >= len(self.wrappers):
                logger.debug(
                    "Replacement index %d out of range for %d argument(s); echoing %r",
                    item.index,
                    len(self.wrappers),
                    item.spec,
                )
                stream.write(item.spec)
                continue
            aligned = FmtAlign(
                self.wrappers[item.index],
                item.where,
                item.align,
                item.pad,
                measure=self._measure,
            )
            aligned.format(stream, item.options)

    def __formatv__(self, stream: TextSink, options: str) -> None:
        self.format(stream)

    def to_string(self) -> str:
        buffer = io.StringIO()
        self.format(buffer)
        return buffer.getvalue()

    def to_buffer(self, capacity: int) -> FixedBuffer:
        """Render into a :class:`FixedBuffer` holding at most ``capacity`` characters."""

        buffer = FixedBuffer(capacity)
        self.format(buffer)
        return buffer

    def with_arguments(self, *values: Any) -> "FormatvObject":
        """Return a session reusing this one's parsed items with a new argument list."""

        return FormatvObject(
            self.fmt,
            create_wrappers(values, self.registry),
            config=self.config,
            registry=self.registry,
            replacements=self.replacements,
        )

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.fmt!r}, <{len(self.wrappers)} argument(s)>)"


def formatv(
    fmt: str,
    *values: Any,
    config: Optional[FormatvConfig] = None,
    registry: Optional[ProviderRegistry] = None,
) -> FormatvObject:
    """
    Build a format session for ``fmt`` and ``values``.

    Each replacement field follows ``{index[,layout][:options]}`` where ``layout`` is
    ``[[pad]align]width`` with ``align`` one of ``-`` (left), ``=`` (center) or ``+``
    (right, the default). ``options`` are passed untouched to the argument's
    renderer. Use ``{{`` and ``}}`` for literal braces.

    Example:
        >>> str(formatv("{0} {1} {0}", "a", "bb"))
        'a bb a'

    Raises:
        ProviderResolutionError: If any value's type has no renderer.
        FormatStringError: In strict mode, if ``fmt`` is malformed.
    """
    wrappers = create_wrappers(values, registry)
    return FormatvObject(fmt, wrappers, config=config, registry=registry)
