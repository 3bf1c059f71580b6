"""Formatter resolution: pick the renderer an argument type uses."""

from __future__ import annotations

import functools
import logging
from typing import TYPE_CHECKING, Any, Callable, Dict, Mapping, Optional, Protocol, runtime_checkable

from src.formatv.errors import ProviderResolutionError

if TYPE_CHECKING:
    from src.formatv.sinks import TextSink

logger = logging.getLogger(__name__)

Provider = Callable[[Any, "TextSink", str], None]
BoundRenderer = Callable[["TextSink", str], None]


@runtime_checkable
class SupportsFormatv(Protocol):
    """Types that know how to render themselves with an options string."""

    def __formatv__(self, stream: TextSink, options: str) -> None: ...


class ProviderRegistry:
    """
    Map argument types to providers.

    Resolution order for a type is: its own ``__formatv__`` method, then the first
    registered provider found along its MRO. A type with neither is rejected with
    ``ProviderResolutionError`` when an argument is bound, so a missing renderer is
    reported before anything is written. Resolutions are cached per type and the
    cache is dropped whenever a provider is (un)registered.
    """

    def __init__(self, providers: Optional[Mapping[type, Provider]] = None) -> None:
        self._providers: Dict[type, Provider] = dict(providers or {})
        self._resolved: Dict[type, Provider] = {}

    def register(self, cls: type, provider: Optional[Provider] = None) -> Any:
        """
        Register ``provider`` for ``cls``; usable as a decorator when ``provider`` is omitted.

        Returns:
            The provider, or a decorator that registers and returns its argument.
        """
        if provider is None:

            def decorator(func: Provider) -> Provider:
                self.register(cls, func)
                return func

            return decorator
        self._providers[cls] = provider
        self._resolved.clear()
        logger.debug("Registered formatter provider for %s", cls.__qualname__)
        return provider

    def unregister(self, cls: type) -> None:
        self._providers.pop(cls, None)
        self._resolved.clear()

    def copy(self) -> "ProviderRegistry":
        return ProviderRegistry(self._providers)

    @property
    def providers(self) -> Mapping[type, Provider]:
        return dict(self._providers)

    def __contains__(self, cls: object) -> bool:
        return cls in self._providers

    def resolve(self, cls: type) -> Provider:
        """
        Return the provider used to render instances of ``cls``.

        Raises:
            ProviderResolutionError: If ``cls`` defines no ``__formatv__`` and no
                provider is registered for it or any of its bases.
        """
        cached = self._resolved.get(cls)
        if cached is not None:
            return cached

        method = getattr(cls, "__formatv__", None)
        if callable(method):
            resolved: Provider = method
        else:
            for base in cls.__mro__:
                provider = self._providers.get(base)
                if provider is not None:
                    resolved = provider
                    break
            else:
                raise ProviderResolutionError(cls)
        self._resolved[cls] = resolved
        return resolved

    def bind(self, value: Any) -> BoundRenderer:
        """
        Resolve the provider for ``value`` and bind it to the value.

        Providers exposing ``prepare(value, registry)`` build their own bound renderer,
        which lets container providers resolve their elements up front.
        """
        provider = self.resolve(type(value))
        prepare = getattr(provider, "prepare", None)
        if callable(prepare):
            return prepare(value, self)
        return functools.partial(provider, value)


default_registry = ProviderRegistry()
