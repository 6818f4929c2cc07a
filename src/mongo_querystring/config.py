"""SchemaConfig — tunables for the built-in parameters."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, model_validator


class SchemaConfig(BaseModel):
    """Configuration for the built-in ``limit``/``page``/``sort`` parameters.

    The defaults reproduce the stock behaviour: 30 items per page (1..100),
    pages 1..30, newest first.
    """

    model_config = ConfigDict(frozen=True)

    default_limit: int = 30
    min_limit: int = 1
    max_limit: int = 100

    default_page: int = 1
    min_page: int = 1
    max_page: int = 30

    default_sort: str = "-createdAt"

    separator: str = ","
    operators: tuple[str, ...] = ("!", "~", "^", "$", ">", "<")

    @model_validator(mode="after")
    def _check_bounds(self) -> SchemaConfig:
        if not self.min_limit <= self.default_limit <= self.max_limit:
            raise ValueError("default_limit must lie within [min_limit, max_limit]")
        if not self.min_page <= self.default_page <= self.max_page:
            raise ValueError("default_page must lie within [min_page, max_page]")
        if not self.separator:
            raise ValueError("separator must not be empty")
        if any(len(op) != 1 for op in self.operators):
            raise ValueError("operators must be single characters")
        return self
