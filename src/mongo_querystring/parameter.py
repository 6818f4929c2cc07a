"""
Parameter — one named query-string value.

A parameter owns a private copy of its descriptor, resolves its raw input
immediately (defaults, formatting, type coercion), validates on demand and
turns its resolved value into an output fragment through the descriptor's
``parse`` option.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from .filters import split_operator
from .formatters import build_default_formatters
from .result import ParameterError, ValidationOutcome
from .types import ValueType, coerce_value, infer_type, to_value_type
from .validators import build_default_validators

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from .registry import HandlerRegistry

_UNSET: Any = object()


def _is_valid(error: ParameterError | None) -> bool:
    return error is None


def _outcome(result: Any) -> ValidationOutcome:
    """Accept validator results given as a ``ValidationOutcome`` or a mapping."""
    if isinstance(result, ValidationOutcome):
        return result
    if isinstance(result, Mapping):
        return ValidationOutcome(
            valid=bool(result.get("valid")), message=str(result.get("message", ""))
        )
    return ValidationOutcome(valid=bool(result), message="")


class Parameter:
    """A single query-string parameter.

    Usage::

        param = Parameter("limit", "10", {"type": "number", "max": 100})
        param.value        # 10
        param.validate()   # True
    """

    def __init__(
        self,
        name: str,
        value: Any = None,
        options: Mapping[str, Any] | None = None,
        *,
        separator: str = ",",
    ) -> None:
        self._name = name
        self._options: dict[str, Any] = dict(options or {})
        self._separator = separator
        self._formatters: HandlerRegistry[Any] = build_default_formatters()
        self._validators: HandlerRegistry[ValidationOutcome] = (
            build_default_validators()
        )
        if self._options.get("type") is not None:
            to_value_type(self._options["type"])
        self._raw = self._split(value)
        self._value = self.resolve(value)

    def __repr__(self) -> str:
        return f"Parameter(name={self._name!r}, value={self._value!r})"

    @property
    def name(self) -> str:
        return self._name

    @property
    def options(self) -> Mapping[str, Any]:
        return MappingProxyType(self._options)

    def option(self, name: str, value: Any = _UNSET) -> Any:
        """Get, or set and return, a single descriptor option."""
        if value is not _UNSET:
            self._options[name] = value
        return self._options.get(name)

    # -- value resolution ----------------------------------------------------

    @property
    def value(self) -> Any:
        return self._value

    @value.setter
    def value(self, raw: Any) -> None:
        self._raw = self._split(raw)
        self._value = self.resolve(raw)

    @property
    def raw(self) -> Any:
        """The input as received, split into a list for sequence values.

        With an ``operators`` option the resolved value holds only the
        operand (``>=18`` resolves to ``18``); the prefix is kept here.
        """
        return self._raw

    def _split(self, raw: Any) -> Any:
        if isinstance(raw, str) and self._separator in raw:
            return raw.split(self._separator)
        if isinstance(raw, list | tuple):
            return list(raw)
        return raw

    def resolve(self, raw: Any) -> Any:
        """Resolve *raw* without storing it.

        Strings containing the separator, lists and tuples resolve to a list.
        """
        split = self._split(raw)
        if isinstance(split, list):
            return self.resolve_sequence(split)
        return self.resolve_scalar(split)

    def resolve_sequence(self, raws: Iterable[Any]) -> list[Any]:
        return [self.resolve_scalar(raw) for raw in raws]

    def resolve_scalar(self, raw: Any) -> Any:
        return self.coerce(self._operand(self.format(raw)))

    def _operand(self, value: Any) -> Any:
        """Drop a recognised operator prefix; it stays readable in :attr:`raw`."""
        operators = self._options.get("operators")
        if not operators or not isinstance(value, str):
            return value
        return split_operator(value, operators)[2]

    def value_type(self, value: Any = _UNSET) -> ValueType:
        """Return the explicit ``type`` option, or infer one from *value*."""
        hint = self._options.get("type")
        if hint is not None:
            return to_value_type(hint)
        return infer_type(self._value if value is _UNSET else value)

    def coerce(self, raw: Any) -> Any:
        """Convert one scalar to this parameter's type, then format it."""
        return self.format(coerce_value(raw, self.value_type(raw)))

    def format(self, value: Any) -> Any:
        """Run every formatter whose option is present, in option order."""
        for _option, option_value, formatter in self._formatters.matching(
            self._options
        ):
            value = formatter(option_value, value, self)
        return value

    # -- handlers ------------------------------------------------------------

    def formatter(
        self, name: str, fn: Callable[[Any, Any, Parameter], Any] = _UNSET
    ) -> Callable[..., Any] | None:
        """Get, or register and return, a formatter."""
        if fn is not _UNSET:
            self._formatters.register(name, fn)
        return self._formatters.get(name)

    def validator(
        self, name: str, fn: Callable[[Any, Any, Parameter], Any] = _UNSET
    ) -> Callable[..., Any] | None:
        """Get, or register and return, a validator."""
        if fn is not _UNSET:
            self._validators.register(name, fn)
        return self._validators.get(name)

    # -- validation ----------------------------------------------------------

    def validate(
        self,
        callback: Callable[[ParameterError | None], Any] | None = None,
        value: Any = _UNSET,
    ) -> Any:
        """Validate and hand the first error (or ``None``) to *callback*.

        Without a callback, returns ``True`` when the value is valid.
        """
        return (callback or _is_valid)(self.error(value))

    def error(self, value: Any = _UNSET) -> ParameterError | None:
        """Return the first validation error, or ``None``."""
        value = self._value if value is _UNSET else value

        if isinstance(value, list):
            for item in value:
                error = self.error(item)
                if error is not None:
                    return error
            return None

        for option, option_value, validator in self._validators.matching(
            self._options
        ):
            outcome = _outcome(validator(option_value, value, self))
            if not outcome.valid:
                return ParameterError(
                    name=option,
                    param=self._name,
                    value=value,
                    bound=option_value,
                    message=outcome.message,
                )
        return None

    # -- parsing -------------------------------------------------------------

    def parse(self, siblings: Mapping[str, Parameter] | None = None) -> dict[str, Any]:
        """Return this parameter's output fragment.

        The ``parse`` option is called as ``parse(value, parameter, siblings)``
        where *siblings* is a read-only view of the owning schema's
        parameters. Parameters without a ``parse`` option contribute ``{}``.
        """
        parser = self._options.get("parse")
        if not callable(parser):
            return {}
        view = MappingProxyType(
            dict(siblings) if siblings is not None else {self._name: self}
        )
        return parser(self._value, self, view) or {}
