"""QueryStringMiddleware — parse the query string of every request.

On success the output document is stored at ``request.state.querystring``;
on validation failure the request is answered with ``400``.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Any, cast

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse, Response

from ...schema import Schema
from .query_params import query_params_to_dict

if TYPE_CHECKING:
    from collections.abc import Mapping

    from starlette.requests import Request

    from ...config import SchemaConfig

logger = logging.getLogger(__name__)


class QueryStringMiddleware(BaseHTTPMiddleware):
    """Starlette middleware building a :class:`Schema` per request.

    Example:
        ```python
        from fastapi import FastAPI, Request
        from mongo_querystring.contrib.fastapi import QueryStringMiddleware

        app = FastAPI()
        app.add_middleware(QueryStringMiddleware, paths=["/api/"])

        @app.get("/api/users")
        async def list_users(request: Request):
            query = request.state.querystring
            return await users.find(query.get("filter", {})).to_list(None)
        ```
    """

    def __init__(
        self,
        app: Any,
        *,
        params: Mapping[str, Mapping[str, Any]] | None = None,
        config: SchemaConfig | None = None,
        paths: list[str] | None = None,
    ) -> None:
        """Initialize the middleware.

        Args:
            app: FastAPI/Starlette application.
            params: Extra parameter descriptors passed to every schema.
            config: Schema configuration.
            paths: Path prefixes to handle; all paths when ``None``.
        """
        super().__init__(app)
        self.params = params
        self.config = config
        self.paths = list(paths) if paths is not None else None

    def _applies_to(self, path: str) -> bool:
        if self.paths is None:
            return True
        return any(path.startswith(prefix) for prefix in self.paths)

    async def dispatch(self, request: Request, call_next: Any) -> Response:
        """Validate and parse the query string, then call the next handler."""
        if not self._applies_to(request.url.path):
            return cast("Response", await call_next(request))

        schema = Schema(
            query_params_to_dict(request.query_params),
            self.params,
            config=self.config,
        )
        error = schema.error()
        if error is not None:
            logger.info(
                "Rejected query string on %s: %s (%s)",
                request.url.path,
                error.message,
                error.param,
            )
            return JSONResponse(
                status_code=400,
                content={"detail": error.message, "error": _jsonable(error.to_dict())},
            )

        request.state.querystring = schema.parse()
        return cast("Response", await call_next(request))


def _jsonable(payload: dict[str, Any]) -> dict[str, Any]:
    """Replace values JSON cannot encode (NaN, dates, patterns) by strings."""
    out: dict[str, Any] = {}
    for key, value in payload.items():
        if isinstance(value, bool | int | str) or value is None:
            out[key] = value
        elif isinstance(value, float) and math.isfinite(value):
            out[key] = value
        else:
            out[key] = str(value)
    return out
