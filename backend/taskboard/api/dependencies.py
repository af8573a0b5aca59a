"""Route Dependencies: service handles, pagination params, path id parsing.

Invariants:
    - Services come from app.state (built once in create_app), never globals
    - limit is clamped to [0, max_page_size]; offset to >= 0
    - A path id that is not a UUID is reported as 404 (no such resource)
"""

from dataclasses import dataclass
from uuid import UUID

from fastapi import Query, Request

from taskboard.core.errors import NotFoundError
from taskboard.core.pagination import clamp_limit, clamp_offset
from taskboard.services.task_service import TaskService
from taskboard.services.user_service import UserService


def get_user_service(request: Request) -> UserService:
    return request.app.state.user_service


def get_task_service(request: Request) -> TaskService:
    return request.app.state.task_service


@dataclass(frozen=True)
class PageParams:
    limit: int
    offset: int


def get_page_params(
    request: Request,
    limit: int | None = Query(None),
    offset: int | None = Query(None),
) -> PageParams:
    settings = request.app.state.settings
    if limit is None:
        limit = settings.default_page_size
    return PageParams(
        limit=clamp_limit(limit, settings.max_page_size),
        offset=clamp_offset(offset),
    )


def parse_id(raw: str, resource: str) -> UUID:
    try:
        return UUID(raw)
    except ValueError:
        raise NotFoundError(resource, raw) from None
