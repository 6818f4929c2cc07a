"""
Value types for query parameters.

A closed set of value kinds (:class:`ValueType`), one inference function
and one coercion function per kind. Coercion never raises: unparseable
numbers become ``NaN`` and unparseable dates become :data:`INVALID_DATE`.
"""

from __future__ import annotations

import datetime
import math
import re
from enum import Enum
from typing import TYPE_CHECKING, Any

from .exceptions import UnknownValueTypeError

if TYPE_CHECKING:
    from collections.abc import Callable

_NUMERIC_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")
_BOOLEAN_RE = re.compile(r"^(true|false|1|0)$")
_EPOCH_RE = re.compile(r"^\d{5,}$")


class ValueType(str, Enum):
    """Supported coercion targets."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"
    PATTERN = "pattern"


class Bucket(str, Enum):
    """Sections of the output document a parameter can bind to."""

    CURSOR = "cursor"
    SELECT = "select"
    FILTER = "filter"


class InvalidDate:
    """Sentinel for a date that could not be parsed."""

    _instance: InvalidDate | None = None

    def __new__(cls) -> InvalidDate:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "INVALID_DATE"

    def __str__(self) -> str:
        return "Invalid Date"


INVALID_DATE = InvalidDate()

_PYTHON_TYPES: dict[Any, ValueType] = {
    str: ValueType.STRING,
    int: ValueType.NUMBER,
    float: ValueType.NUMBER,
    bool: ValueType.BOOLEAN,
    datetime.datetime: ValueType.DATE,
    datetime.date: ValueType.DATE,
    re.Pattern: ValueType.PATTERN,
}


def to_value_type(hint: Any) -> ValueType:
    """Normalise a ``type`` option to a :class:`ValueType`."""
    if isinstance(hint, ValueType):
        return hint
    if isinstance(hint, str):
        try:
            return ValueType(hint.lower())
        except ValueError:
            raise UnknownValueTypeError(hint) from None
    if isinstance(hint, type) and hint in _PYTHON_TYPES:
        return _PYTHON_TYPES[hint]
    raise UnknownValueTypeError(hint)


# ---------------------------------------------------------------------------
# Inference
# ---------------------------------------------------------------------------


def is_nan(value: Any) -> bool:
    return isinstance(value, float) and math.isnan(value)


def is_number(value: Any) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)


def is_numeric_string(value: Any) -> bool:
    return isinstance(value, str) and _NUMERIC_RE.match(value) is not None


def infer_type(value: Any) -> ValueType:
    """
    Classify a raw or already-typed value.

    Order matters: nil, number, boolean, date, pattern, then string.
    Numeric-looking strings are numbers, so ``"1"`` is never a boolean.
    """
    if value is None:
        return ValueType.STRING
    if is_number(value) or is_numeric_string(value):
        return ValueType.NUMBER
    if isinstance(value, bool) or (
        isinstance(value, str) and _BOOLEAN_RE.match(value)
    ):
        return ValueType.BOOLEAN
    if isinstance(value, datetime.date):
        return ValueType.DATE
    if isinstance(value, re.Pattern):
        return ValueType.PATTERN
    return ValueType.STRING


# ---------------------------------------------------------------------------
# Coercion
# ---------------------------------------------------------------------------


def _integral(number: float) -> int | float:
    if math.isfinite(number) and number.is_integer():
        return int(number)
    return number


def _cast_number(value: Any) -> int | float:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, float):
        return _integral(value)
    if is_number(value):
        return value
    if isinstance(value, str):
        text = value.strip()
        if _NUMERIC_RE.match(text):
            if any(c in text for c in ".eE"):
                return _integral(float(text))
            try:
                return int(text)
            except ValueError:
                # past the interpreter's int digit limit
                return float(text)
    return math.nan


def _cast_boolean(value: Any) -> bool:
    return not (value in ("false", "0") or is_nan(value) or not value)


def _from_epoch_ms(ms: float) -> datetime.datetime | InvalidDate:
    try:
        return datetime.datetime.fromtimestamp(ms / 1000, tz=datetime.timezone.utc)
    except (OverflowError, OSError, ValueError):
        return INVALID_DATE


def _cast_date(value: Any) -> datetime.date | InvalidDate:
    if isinstance(value, datetime.date):
        return value
    if is_number(value):
        return INVALID_DATE if is_nan(value) else _from_epoch_ms(value)
    text = str(value).strip()
    if _EPOCH_RE.match(text):
        try:
            return _from_epoch_ms(int(text))
        except ValueError:
            return INVALID_DATE
    try:
        result = datetime.datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        return INVALID_DATE
    if result.tzinfo is not None:
        result = result.astimezone(datetime.timezone.utc)
    return result


def _cast_pattern(value: Any) -> re.Pattern[str]:
    if isinstance(value, re.Pattern):
        return value
    source = to_text(value)
    try:
        return re.compile(source, re.IGNORECASE)
    except re.error:
        return re.compile(re.escape(source), re.IGNORECASE)


def _cast_string(value: Any) -> str:
    return to_text(value)


_CASTS: dict[ValueType, Callable[[Any], Any]] = {
    ValueType.STRING: _cast_string,
    ValueType.NUMBER: _cast_number,
    ValueType.BOOLEAN: _cast_boolean,
    ValueType.DATE: _cast_date,
    ValueType.PATTERN: _cast_pattern,
}


def coerce_value(value: Any, value_type: ValueType) -> Any:
    """Convert *value* to *value_type*. ``None`` passes through untouched."""
    if value is None:
        return None
    return _CASTS[value_type](value)


def to_text(value: Any) -> str:
    """Render a resolved value back to its query-string form."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, re.Pattern):
        return value.pattern
    if isinstance(value, datetime.date):
        return value.isoformat()
    return str(value)
