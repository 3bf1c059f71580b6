"""Type-erased argument wrappers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Iterable, Optional, Tuple

from .providers import BoundRenderer, ProviderRegistry, default_registry

if TYPE_CHECKING:
    from .sinks import TextSink


@dataclass(frozen=True, eq=False)
class FormatWrapper:
    """A value paired with the renderer resolved for its type."""

    value: Any
    renderer: BoundRenderer

    def render(self, stream: TextSink, options: str = "") -> None:
        self.renderer(stream, options)


def build_format_wrapper(value: Any, registry: Optional[ProviderRegistry] = None) -> FormatWrapper:
    """
    Wrap ``value`` so it can be rendered without knowing its type.

    Existing wrappers are returned unchanged.

    Raises:
        ProviderResolutionError: If no renderer exists for the value's type.
    """
    if isinstance(value, FormatWrapper):
        return value
    active = registry if registry is not None else default_registry
    return FormatWrapper(value, active.bind(value))


def create_wrappers(
    values: Iterable[Any], registry: Optional[ProviderRegistry] = None
) -> Tuple[FormatWrapper, ...]:
    """Wrap each value in order; the result has the same length as ``values``."""

    return tuple(build_format_wrapper(value, registry) for value in values)
