"""Shared fixtures for mongo-querystring tests."""

from __future__ import annotations

from typing import Any

import pytest

from mongo_querystring import Parameter, Schema


@pytest.fixture
def make_param():
    """Build a ``test`` parameter from a raw value and options."""

    def _make(value: Any = None, options: dict[str, Any] | None = None) -> Parameter:
        return Parameter("test", value, options)

    return _make


@pytest.fixture
def parse():
    """Parse a raw query mapping with a default schema."""

    def _parse(raw: dict[str, Any], **kwargs: Any) -> dict[str, Any]:
        return Schema(raw, **kwargs).parse()

    return _parse
