"""FastAPI / Starlette integration.

Requires the ``fastapi`` extra: ``pip install mongo-querystring[fastapi]``.
"""

from __future__ import annotations

from .dependencies import get_querystring, querystring_dependency
from .middleware import QueryStringMiddleware
from .query_params import query_params_to_dict

__all__ = [
    "QueryStringMiddleware",
    "get_querystring",
    "query_params_to_dict",
    "querystring_dependency",
]
