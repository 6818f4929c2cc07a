"""Built-in parameter descriptors: limit, page, sort, fields and the filter catch-all."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .filters import parse_filter
from .types import Bucket, ValueType, is_nan, to_text

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .config import SchemaConfig
    from .parameter import Parameter


def _first(value: Any) -> Any:
    if isinstance(value, list):
        return value[0] if value else None
    return value


def _directions(value: Any, descending: int, ascending: int) -> dict[str, int]:
    """Map ``-field`` / ``+field`` / ``field`` entries to their direction."""
    values = value if isinstance(value, list) else [value]
    out: dict[str, int] = {}
    for item in values:
        field = to_text(item)
        if not field:
            continue
        if field[0] == "-":
            out[field[1:]] = descending
        elif field[0] == "+":
            out[field[1:]] = ascending
        else:
            out[field] = ascending
    return out


def parse_limit(
    value: Any, param: Parameter, siblings: Mapping[str, Parameter]
) -> dict[str, Any]:
    return {"limit": _first(value)}


def parse_page(
    value: Any, param: Parameter, siblings: Mapping[str, Parameter]
) -> dict[str, Any]:
    """Translate the page number into ``skip`` using the sibling ``limit``."""
    limit = siblings.get("limit")
    per_page = _first(limit.value) if limit is not None else param.option("limit")
    page = _first(value)
    if per_page is None or page is None or is_nan(per_page) or is_nan(page):
        return {}
    return {"skip": per_page * (page - 1)}


def parse_sort(
    value: Any, param: Parameter, siblings: Mapping[str, Parameter]
) -> dict[str, Any]:
    return {"sort": _directions(value, -1, 1)}


def parse_fields(
    value: Any, param: Parameter, siblings: Mapping[str, Parameter]
) -> dict[str, Any]:
    return _directions(value, 0, 1)


def build_builtin_descriptors(config: SchemaConfig) -> dict[str, dict[str, Any]]:
    """Return the descriptors of the built-in parameters, in declaration order."""
    return {
        "limit": {
            "type": ValueType.NUMBER,
            "default_value": config.default_limit,
            "max": config.max_limit,
            "min": config.min_limit,
            "bind_to": Bucket.CURSOR,
            "parse": parse_limit,
        },
        "page": {
            "type": ValueType.NUMBER,
            "default_value": config.default_page,
            "max": config.max_page,
            "min": config.min_page,
            "limit": config.default_limit,
            "bind_to": Bucket.CURSOR,
            "parse": parse_page,
        },
        "sort": {
            "type": ValueType.STRING,
            "default_value": config.default_sort,
            "bind_to": Bucket.CURSOR,
            "parse": parse_sort,
        },
        "fields": {
            "bind_to": Bucket.SELECT,
            "parse": parse_fields,
        },
    }


def build_filter_descriptor(config: SchemaConfig) -> dict[str, Any]:
    """Descriptor used for every key that is not a built-in."""
    return {
        "bind_to": Bucket.FILTER,
        "operators": config.operators,
        "required": True,
        "parse": parse_filter,
    }
