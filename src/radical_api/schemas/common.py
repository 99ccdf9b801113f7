"""Shared schema building blocks."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Model whose JSON keys are camelCase while attributes stay snake_case."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Pagination(CamelModel):
    """Paging metadata returned with list responses."""

    page: int
    limit: int
    total: int
    has_more: bool


class ErrorResponse(BaseModel):
    """Uniform error envelope."""

    error: str
    details: object | None = None
