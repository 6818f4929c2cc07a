"""Built-in value formatters: ``default_value`` and ``trim``.

A formatter receives ``(option_value, value, parameter)`` and returns the
transformed value.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .registry import HandlerRegistry
from .types import is_nan

if TYPE_CHECKING:
    from .parameter import Parameter


def default_value(default: Any, value: Any, param: Parameter) -> Any:
    """Substitute *default* when the value is missing, ``NaN`` or empty."""
    if default is not None and (value is None or is_nan(value) or value == ""):
        return default
    return value


def trim(enabled: Any, value: Any, param: Parameter) -> Any:
    """Strip surrounding whitespace from string values."""
    if enabled and isinstance(value, str):
        return value.strip()
    return value


def build_default_formatters() -> HandlerRegistry[Any]:
    """Create a fresh registry holding the built-in formatters."""
    return HandlerRegistry({"default_value": default_value, "trim": trim})
