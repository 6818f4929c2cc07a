"""Built-in validators: ``required``, ``min`` and ``max``.

A validator receives ``(option_value, value, parameter)`` and returns a
:class:`~mongo_querystring.result.ValidationOutcome`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .registry import HandlerRegistry
from .result import ValidationOutcome
from .types import ValueType, coerce_value, is_nan

if TYPE_CHECKING:
    from .parameter import Parameter


def _as_number(value: Any) -> float:
    return float(coerce_value(value, ValueType.NUMBER))


def required(required: Any, value: Any, param: Parameter) -> ValidationOutcome:
    return ValidationOutcome(
        valid=not required or not (value is None or is_nan(value) or value == ""),
        message=f"{param.name} is required",
    )


def min_(bound: Any, value: Any, param: Parameter) -> ValidationOutcome:
    return ValidationOutcome(
        valid=value is None or _as_number(value) >= _as_number(bound),
        message=f"{param.name} must be greater than or equal to {bound}",
    )


def max_(bound: Any, value: Any, param: Parameter) -> ValidationOutcome:
    return ValidationOutcome(
        valid=value is None or _as_number(value) <= _as_number(bound),
        message=f"{param.name} must be lower than or equal to {bound}",
    )


def build_default_validators() -> HandlerRegistry[ValidationOutcome]:
    """Create a fresh registry holding the built-in validators."""
    return HandlerRegistry({"required": required, "min": min_, "max": max_})
