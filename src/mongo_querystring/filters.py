"""
Filter-operator parsing for free-form query parameters.

A value may start with a one-character operator prefix:

======  ===========================  =====================
prefix  meaning                      output
======  ===========================  =====================
``!``   not equal / not in           ``$ne`` / ``$nin``
``~``   contains (case-insensitive)  ``$regex``
``^``   starts with                  ``$regex`` ``^value``
``$``   ends with                    ``$regex`` ``value$``
``>``   greater than (``>=``)        ``$gt`` / ``$gte``
``<``   lower than (``<=``)          ``$lt`` / ``$lte``
======  ===========================  =====================

Comma-separated values become ``$in`` / ``$nin`` lists. Other prefixes
inside a list are recognised but do not contribute to the result.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

from .types import to_text

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from .parameter import Parameter

REGEX_OPTIONS = "i"


class FilterOperator(str, Enum):
    """MongoDB query operators produced by the filter parser."""

    EQ = "$eq"
    NE = "$ne"
    GT = "$gt"
    GTE = "$gte"
    LT = "$lt"
    LTE = "$lte"
    IN = "$in"
    NIN = "$nin"
    REGEX = "$regex"


_SEQUENCE_OPERATORS = (FilterOperator.IN, FilterOperator.NIN)


@dataclass(frozen=True)
class OperatorClause:
    """One operator application, e.g. ``{"$gte": 5}``."""

    operator: FilterOperator
    value: Any
    options: str | None = None

    def to_query(self) -> dict[str, Any]:
        query: dict[str, Any] = {self.operator.value: self.value}
        if self.options:
            query["$options"] = self.options
        return query


def split_operator(text: str, operators: Sequence[str]) -> tuple[str | None, bool, str]:
    """Split *text* into ``(prefix, inclusive, operand)``.

    ``inclusive`` is set when the prefix is followed by ``=``.
    """
    if text and text[0] in operators:
        inclusive = text[1:2] == "="
        return text[0], inclusive, text[2 if inclusive else 1 :]
    return None, False, text


def build_clause(
    prefix: str | None,
    inclusive: bool,
    operand: Any,
    *,
    in_sequence: bool = False,
) -> OperatorClause:
    """Map an operator prefix and its coerced operand to a clause."""
    if prefix in ("^", "$", "~"):
        text = to_text(operand)
        if prefix == "^":
            text = f"^{text}"
        elif prefix == "$":
            text = f"{text}$"
        return OperatorClause(FilterOperator.REGEX, text, REGEX_OPTIONS)
    if prefix == ">":
        return OperatorClause(
            FilterOperator.GTE if inclusive else FilterOperator.GT, operand
        )
    if prefix == "<":
        return OperatorClause(
            FilterOperator.LTE if inclusive else FilterOperator.LT, operand
        )
    if prefix == "!":
        return OperatorClause(
            FilterOperator.NIN if in_sequence else FilterOperator.NE, operand
        )
    return OperatorClause(
        FilterOperator.IN if in_sequence else FilterOperator.EQ, operand
    )


def _prefix(
    raw: Any, param: Parameter, operators: Sequence[str]
) -> tuple[str | None, bool]:
    """Read the operator prefix off the formatted raw input.

    Filter parameters resolve to the bare operand, so the prefix is only
    visible in the raw text.
    """
    if not isinstance(raw, str):
        return None, False
    text = param.format(raw)
    if not isinstance(text, str):
        return None, False
    prefix, inclusive, _operand = split_operator(text, operators)
    return prefix, inclusive


def _parse_sequence(
    values: list[Any], raws: list[Any], param: Parameter, operators: Sequence[str]
) -> dict[str, Any]:
    query: dict[str, Any] = {}
    for item, raw in zip(values, raws, strict=True):
        if item is None:
            continue
        prefix, inclusive = _prefix(raw, param, operators)
        clause = build_clause(prefix, inclusive, item, in_sequence=True)
        if clause.operator in _SEQUENCE_OPERATORS:
            query.setdefault(clause.operator.value, []).append(clause.value)
    return query


def parse_filter(
    value: Any,
    param: Parameter,
    siblings: Mapping[str, Parameter] | None = None,
) -> dict[str, Any] | None:
    """Turn a filter parameter's resolved value into ``{name: condition}``.

    The resolved value is already coerced through :meth:`Parameter.coerce`,
    so ``age=>=18`` compares against the number ``18``.
    """
    if value is None:
        return None

    operators = param.option("operators") or ()

    raw = param.raw
    if isinstance(value, list):
        raws = raw if isinstance(raw, list) and len(raw) == len(value) else value
        return {param.name: _parse_sequence(value, raws, param, operators)}

    prefix, inclusive = _prefix(raw, param, operators)
    if prefix is not None:
        return {param.name: build_clause(prefix, inclusive, value).to_query()}

    return {param.name: value}
