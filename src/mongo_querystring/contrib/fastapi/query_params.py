"""Conversion of Starlette query parameters to a plain mapping."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ...schema import ARRAY_SUFFIX

if TYPE_CHECKING:
    from starlette.datastructures import QueryParams


def query_params_to_dict(query_params: QueryParams) -> dict[str, str | list[str]]:
    """Collapse a multi-dict into ``key -> value``.

    Repeated keys, and keys ending in ``[]``, become lists; everything else
    keeps its single string value.
    """
    out: dict[str, str | list[str]] = {}
    for key in query_params:
        values = query_params.getlist(key)
        if len(values) > 1 or key.endswith(ARRAY_SUFFIX):
            out[key] = list(values)
        else:
            out[key] = values[0]
    return out
