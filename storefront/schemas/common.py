# storefront/schemas/common.py
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class ApiModel(BaseModel):
    """
    Base for request/response bodies.

    Wire names are camelCase (imageUrl, totalItems, ...); Python code uses
    snake_case. Both spellings are accepted on input.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class DataResponse(ApiModel, Generic[T]):
    """Uniform envelope: {success, message?, data?}."""

    success: bool = True
    message: str | None = None
    data: T | None = None


class MessageResponse(ApiModel):
    success: bool = True
    message: str


class Pagination(ApiModel):
    page: int
    limit: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool


class PageResponse(ApiModel, Generic[T]):
    success: bool = True
    data: list[T]
    pagination: Pagination
