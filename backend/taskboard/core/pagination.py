"""Pagination: pure limit/offset clamping and page metadata.

Invariants:
    - limit is clamped to [0, max_page_size]; offset is clamped to >= 0
    - page = offset // limit + 1 (1 when limit == 0)
    - total is the count of ALL matching items, not the length of this page
    - total_pages = ceil(total / limit) (0 when limit == 0)

Design Decisions:
    - Separate count query over reusing page length: page metadata stays
      truthful for clients walking the collection
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")

DEFAULT_PAGE_SIZE: int = 20
MAX_PAGE_SIZE: int = 100


def clamp_limit(limit: int | None, max_page_size: int = MAX_PAGE_SIZE) -> int:
    if limit is None:
        return min(DEFAULT_PAGE_SIZE, max_page_size)
    return max(0, min(limit, max_page_size))


def clamp_offset(offset: int | None) -> int:
    if offset is None:
        return 0
    return max(0, offset)


@dataclass(frozen=True)
class PageInfo:
    page: int
    limit: int
    total: int
    total_pages: int


def build_page_info(limit: int, offset: int, total: int) -> PageInfo:
    if limit <= 0:
        return PageInfo(page=1, limit=0, total=total, total_pages=0)
    return PageInfo(
        page=offset // limit + 1,
        limit=limit,
        total=total,
        total_pages=(total + limit - 1) // limit,
    )


@dataclass(frozen=True)
class Page(Generic[T]):
    """One slice of a collection plus the size of the whole collection."""
    items: list[T]
    limit: int
    offset: int
    total: int

    @property
    def info(self) -> PageInfo:
        return build_page_info(self.limit, self.offset, self.total)
