"""FastAPI dependencies returning the parsed query document.

Use these instead of :class:`QueryStringMiddleware` when only some routes
take query-string filters.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from fastapi import HTTPException, Request

from ...schema import Schema
from .query_params import query_params_to_dict

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from ...config import SchemaConfig


def _parse_request(
    request: Request,
    params: Mapping[str, Mapping[str, Any]] | None,
    config: SchemaConfig | None,
) -> dict[str, Any]:
    schema = Schema(query_params_to_dict(request.query_params), params, config=config)
    error = schema.error()
    if error is not None:
        raise HTTPException(status_code=400, detail=error.message)
    return schema.parse()


def get_querystring(request: Request) -> dict[str, Any]:
    """Return the parsed query document or raise 400.

    Example:
        ```python
        @router.get("/users")
        def list_users(query: dict = Depends(get_querystring)):
            return repo.find(query.get("filter", {}), **query["cursor"])
        ```
    """
    return _parse_request(request, None, None)


def querystring_dependency(
    params: Mapping[str, Mapping[str, Any]] | None = None,
    config: SchemaConfig | None = None,
) -> Callable[[Request], dict[str, Any]]:
    """Create a dependency bound to extra descriptors and configuration.

    Args:
        params: Extra parameter descriptors, e.g. ``{"born": {"type": "date"}}``.
        config: Schema configuration.
    """

    def dependency(request: Request) -> dict[str, Any]:
        return _parse_request(request, params, config)

    return dependency
