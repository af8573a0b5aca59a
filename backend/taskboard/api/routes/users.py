"""User Routes: CRUD and status updates for users.

Invariants:
    - POST returns 201; DELETE returns 204 with an empty body
    - Unknown or malformed ids return 404
    - Unparseable status on PUT /status returns 400 (no silent default)
"""

from fastapi import APIRouter, Depends, Response, status

from taskboard.api.dependencies import (
    PageParams, get_page_params, get_user_service, parse_id,
)
from taskboard.core.domain_types import UserId
from taskboard.core.result import unwrap
from taskboard.schemas.common import PaginatedResponse, PaginationInfo
from taskboard.schemas.user import (
    CreateUserRequest, UpdateUserStatusRequest, UserResponse,
)
from taskboard.services.user_service import UserService

router = APIRouter(prefix="/api/v1/users", tags=["users"])


@router.post(
    "", response_model=UserResponse, status_code=status.HTTP_201_CREATED,
)
async def create_user(
    body: CreateUserRequest, users: UserService = Depends(get_user_service),
):
    """Create a user. 400 on validation failure, 409 on duplicate email."""
    user = unwrap(await users.create_user(body))
    return UserResponse.from_user(user)


@router.get("", response_model=PaginatedResponse[UserResponse])
async def list_users(
    page: PageParams = Depends(get_page_params),
    users: UserService = Depends(get_user_service),
):
    """List users with limit/offset pagination."""
    result = await users.list_users(page.limit, page.offset)
    return PaginatedResponse[UserResponse](
        data=[UserResponse.from_user(u) for u in result.items],
        pagination=PaginationInfo.from_page_info(result.info),
    )


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: str, users: UserService = Depends(get_user_service),
):
    """Get one user by id."""
    uid = UserId(parse_id(user_id, "User"))
    return UserResponse.from_user(unwrap(await users.get_user(uid)))


@router.put("/{user_id}/status", response_model=UserResponse)
async def update_user_status(
    user_id: str,
    body: UpdateUserStatusRequest,
    users: UserService = Depends(get_user_service),
):
    """Change a user's status (active, inactive, suspended)."""
    uid = UserId(parse_id(user_id, "User"))
    user = unwrap(await users.update_user_status(uid, body.status))
    return UserResponse.from_user(user)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: str, users: UserService = Depends(get_user_service),
):
    """Delete a user. Tasks assigned to the user keep the dangling reference."""
    uid = UserId(parse_id(user_id, "User"))
    unwrap(await users.delete_user(uid))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
