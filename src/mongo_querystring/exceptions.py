"""Exceptions for mongo-querystring."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .result import ParameterError


class QueryStringError(Exception):
    """Root exception for the package."""


class ValidationError(QueryStringError):
    """Raised when query parameters fail validation.

    Carries structured errors: ``{field: [messages]}``.
    """

    def __init__(self, errors: dict[str, list[str]] | str | None = None) -> None:
        if isinstance(errors, str):
            self.errors: dict[str, list[str]] = {"__root__": [errors]}
        elif errors is None:
            self.errors = {}
        else:
            self.errors = errors
        super().__init__(str(self.errors))


class ParameterValidationError(ValidationError):
    """Raised by :meth:`Schema.ensure_valid` for the first invalid parameter."""

    def __init__(self, error: ParameterError) -> None:
        self.error = error
        super().__init__({error.param: [error.message]})

    def __str__(self) -> str:
        return self.error.message


class UnknownValueTypeError(QueryStringError):
    """Raised when a parameter descriptor names an unsupported ``type``."""

    def __init__(self, hint: Any) -> None:
        self.hint = hint
        super().__init__(f"Unsupported parameter type: {hint!r}")
