"""Query-string parsing into MongoDB-style cursor, projection and filter documents."""

from __future__ import annotations

from .config import SchemaConfig
from .exceptions import (
    ParameterValidationError,
    QueryStringError,
    UnknownValueTypeError,
    ValidationError,
)
from .filters import FilterOperator, OperatorClause, parse_filter
from .formatters import build_default_formatters
from .parameter import Parameter
from .registry import HandlerRegistry
from .result import ParameterError, ValidationOutcome
from .schema import Schema
from .types import INVALID_DATE, Bucket, ValueType, infer_type
from .validators import build_default_validators

__all__ = [
    "INVALID_DATE",
    "Bucket",
    "FilterOperator",
    "HandlerRegistry",
    "OperatorClause",
    "Parameter",
    "ParameterError",
    "ParameterValidationError",
    "QueryStringError",
    "Schema",
    "SchemaConfig",
    "UnknownValueTypeError",
    "ValidationError",
    "ValidationOutcome",
    "ValueType",
    "build_default_formatters",
    "build_default_validators",
    "infer_type",
    "parse_filter",
]
