"""
Schema — the full parameter set of one request.

Built-in pagination/sort/projection parameters are merged with every key of
the incoming query string; each key becomes one
:class:`~mongo_querystring.parameter.Parameter`. ``parse()`` assembles the
output document::

    {
        "cursor": {"limit": 30, "skip": 0, "sort": {"createdAt": -1}},
        "select": {"name": 1},
        "filter": {"age": {"$gte": 18}},
    }

All parameters are constructed (and their values resolved) before any of
them is parsed, so ``page`` can read the resolved ``limit``.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from .builtins import build_builtin_descriptors, build_filter_descriptor
from .config import SchemaConfig
from .exceptions import ParameterValidationError
from .merge import deep_merge
from .parameter import Parameter

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from .result import ParameterError

_log = logging.getLogger(__name__)

ARRAY_SUFFIX = "[]"


def _stored_name(key: str) -> str:
    return key[: -len(ARRAY_SUFFIX)] if key.endswith(ARRAY_SUFFIX) else key


class Schema:
    """Query-string schema for one request.

    Args:
        raw: Incoming query parameters (``key -> str | list[str]``).
        params: Extra descriptors by parameter name. Each is layered over the
            descriptor the name would otherwise get, and the parameter is
            created even when the key is absent from *raw*.
        config: Tunables for the built-in parameters.

    Usage::

        schema = Schema({"page": "2", "age": ">=18"})
        if schema.validate():
            query = schema.parse()
    """

    def __init__(
        self,
        raw: Mapping[str, Any] | None = None,
        params: Mapping[str, Mapping[str, Any]] | None = None,
        *,
        config: SchemaConfig | None = None,
    ) -> None:
        self._config = config or SchemaConfig()
        self._builtins = build_builtin_descriptors(self._config)
        self._filter = build_filter_descriptor(self._config)
        self._declared = {name: dict(options) for name, options in (params or {}).items()}
        self._params: dict[str, Parameter] = {}

        values = dict(raw or {})
        keys = dict.fromkeys([*self._builtins, *self._declared, *values])
        for key in keys:
            self.add(key, values.get(key))

        _log.debug(
            "Built query schema with parameters: %s", ", ".join(self._params)
        )

    def __repr__(self) -> str:
        return f"Schema(params={list(self._params)!r})"

    @property
    def config(self) -> SchemaConfig:
        return self._config

    @property
    def params(self) -> Mapping[str, Parameter]:
        """Read-only view of the parameters in declaration order."""
        return MappingProxyType(self._params)

    def param(self, name: str) -> Parameter | None:
        """Return the parameter named *name*, or ``None``."""
        return self._params.get(name)

    def descriptor(self, key: str) -> dict[str, Any]:
        """Return a fresh copy of the descriptor used for *key*.

        Built-ins are matched on the key as given, so ``limit[]`` is a plain
        filter parameter.
        """
        options = dict(self._builtins.get(key, self._filter))
        declared = self._declared.get(key) or self._declared.get(_stored_name(key))
        if declared:
            options.update(declared)
        return options

    def add(
        self,
        key: str,
        value: Any = None,
        descriptor: Mapping[str, Any] | None = None,
    ) -> Parameter:
        """Create (or replace) the parameter for *key*.

        A trailing ``[]`` is dropped from the stored name.
        """
        options = self.descriptor(key)
        if descriptor:
            options.update(descriptor)
        name = _stored_name(key)
        param = Parameter(name, value, options, separator=self._config.separator)
        self._params[name] = param
        return param

    # -- validation ----------------------------------------------------------

    def error(self) -> ParameterError | None:
        """Return the first validation error in declaration order."""
        for param in self._params.values():
            error = param.error()
            if error is not None:
                _log.debug(
                    "Query parameter %r failed %r: %s",
                    error.param,
                    error.name,
                    error.message,
                )
                return error
        return None

    def validate(
        self, callback: Callable[[ParameterError | None], Any] | None = None
    ) -> Any:
        """Fail-fast validation; hands the first error (or ``None``) to *callback*.

        Without a callback, returns ``True`` when every parameter is valid.
        """
        error = self.error()
        if callback is None:
            return error is None
        return callback(error)

    def ensure_valid(self) -> None:
        """Raise :class:`ParameterValidationError` for the first invalid parameter."""
        error = self.error()
        if error is not None:
            raise ParameterValidationError(error)

    # -- parsing -------------------------------------------------------------

    def parse(self) -> dict[str, Any]:
        """Merge every parameter's fragment into its ``bind_to`` bucket."""
        document: dict[str, Any] = {}
        siblings = MappingProxyType(self._params)
        for param in self._params.values():
            bucket = param.option("bind_to")
            if bucket is None:
                continue
            fragment = param.parse(siblings)
            if not fragment:
                continue
            key = getattr(bucket, "value", bucket)
            document[key] = deep_merge(document.get(key), fragment)
        return document
