"""Recursive dictionary merge used to assemble output buckets."""

from __future__ import annotations

from copy import deepcopy
from typing import Any


def deep_merge(existing: dict[str, Any] | None, incoming: dict[str, Any]) -> dict[str, Any]:
    """
    Return a new dict with *incoming* merged into *existing*.

    - Dicts are merged recursively.
    - Everything else (lists included) is replaced by the incoming value.

    Neither argument is mutated.
    """
    result = deepcopy(existing) if existing else {}
    for key, value in incoming.items():
        current = result.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            result[key] = deep_merge(current, value)
        else:
            result[key] = deepcopy(value)
    return result
