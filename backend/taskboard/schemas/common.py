"""Shared Schemas: camelCase base model, error envelope, pagination envelope.

Invariants:
    - Every error body is {error, message, timestamp} (+ details for validation)
    - Every list body is {data: [...], pagination: {page, limit, total, totalPages}}
"""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from taskboard.core.pagination import PageInfo

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base model: camelCase on the wire, snake_case in Python."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ErrorResponse(BaseModel):
    error: str
    message: str
    timestamp: str
    details: list[str] | None = None


class PaginationInfo(CamelModel):
    page: int
    limit: int
    total: int
    total_pages: int

    @classmethod
    def from_page_info(cls, info: PageInfo) -> "PaginationInfo":
        return cls(
            page=info.page, limit=info.limit,
            total=info.total, total_pages=info.total_pages,
        )


class PaginatedResponse(CamelModel, Generic[T]):
    data: list[T]
    pagination: PaginationInfo


class HealthResponse(BaseModel):
    status: str
    service: str
    version: str
    timestamp: str
