"""
Name-keyed strategy registry.

Formatters and validators are plain functions keyed by the option name
that activates them. Each :class:`~mongo_querystring.parameter.Parameter`
owns its own registry, populated from the built-in sets at construction.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Generic, TypeVar

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

T = TypeVar("T")


class HandlerRegistry(Generic[T]):
    """
    Registry of handler functions keyed by option name.

    Usage::

        registry = HandlerRegistry()
        registry.register("trim", trim)

        fn = registry.get("trim")
    """

    def __init__(self, handlers: dict[str, Callable[..., T]] | None = None) -> None:
        self._handlers: dict[str, Callable[..., T]] = dict(handlers or {})

    # -- registration --------------------------------------------------------

    def register(self, name: str, fn: Callable[..., T]) -> None:
        """Register (or replace) the handler for *name*."""
        if not callable(fn):
            raise TypeError(f"Handler for {name!r} must be callable")
        self._handlers[name] = fn

    # -- look-up -------------------------------------------------------------

    def get(self, name: str) -> Callable[..., T] | None:
        """Return the registered handler or ``None``."""
        return self._handlers.get(name)

    def matching(self, options: dict[str, Any]) -> Iterator[tuple[str, Any, Callable[..., T]]]:
        """Yield ``(option, option_value, handler)`` for every option with a handler.

        Options are visited in their declaration order.
        """
        for option, option_value in list(options.items()):
            fn = self._handlers.get(option)
            if fn is not None:
                yield option, option_value, fn
