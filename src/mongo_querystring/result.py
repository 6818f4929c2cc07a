"""ValidationOutcome and ParameterError — structured validation results."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ValidationOutcome:
    """Result of a single validator.

    Usage::

        ValidationOutcome(valid=False, message="limit is required")
    """

    valid: bool
    message: str

    def __bool__(self) -> bool:
        return self.valid


@dataclass(frozen=True)
class ParameterError:
    """First failed validator of a parameter.

    Attributes:
        name: Option name of the failed validator (``required``, ``min``...).
        param: Parameter name.
        value: The offending value.
        bound: The configured option value (e.g. the ``max`` bound).
        message: Human-readable message.
    """

    name: str
    param: str
    value: Any
    bound: Any
    message: str
    valid: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Return the error as ``{name, param, value, <name>: bound, valid, message}``."""
        return {
            "name": self.name,
            "param": self.param,
            "value": self.value,
            self.name: self.bound,
            "valid": self.valid,
            "message": self.message,
        }
