"""User Service: user creation, lookup, status changes and deletion.

Invariants:
    - Email uniqueness check and insert run under ONE store acquisition, so
      concurrent creations with the same email yield exactly one success
    - Status updates never substitute a default for unparseable input
    - Deleting a user does not touch tasks that reference it (orphaned refs)
    - Returns Ok/Err; never raises for validation, not-found or conflict

Design Decisions:
    - Store injected at construction: no ambient globals, tests get fresh state
    - Emails compared case-insensitively after trimming (Email.matches)
"""

import logging
from uuid import uuid4

from taskboard.core.domain_types import UserId, UserStatus
from taskboard.core.entities import Email, User
from taskboard.core.errors import ConflictError, NotFoundError, ValidationError
from taskboard.core.pagination import (
    MAX_PAGE_SIZE, Page, clamp_limit, clamp_offset,
)
from taskboard.core.result import Err, Ok, Result
from taskboard.core.validation import check_user_status
from taskboard.infrastructure.memory_store import InMemoryStore
from taskboard.schemas.user import CreateUserRequest

logger = logging.getLogger(__name__)


class UserService:
    """Business rules for users. One instance per application."""

    def __init__(
        self, store: InMemoryStore[User], max_page_size: int = MAX_PAGE_SIZE,
    ):
        self._store = store
        self._max_page_size = max_page_size

    async def create_user(self, request: CreateUserRequest) -> Result[User]:
        errors = request.violations()
        if errors:
            return Err(ValidationError(errors))

        email = Email(request.email.strip())
        async with self._store.locked() as view:
            if view.find_by_field(lambda u: u.email.matches(email)):
                logger.warning(f"User with email {email.value} already exists")
                return Err(ConflictError("User with this email already exists"))
            user = view.save(User(
                id=UserId(uuid4()), email=email, name=request.name.strip(),
            ))

        logger.info("User created", extra={"entity_id": str(user.id)})
        return Ok(user)

    async def get_user(self, user_id: UserId) -> Result[User]:
        user = await self._store.find_by_id(user_id)
        if user is None:
            return Err(NotFoundError("User", user_id))
        return Ok(user)

    async def get_user_by_email(self, email: str) -> User | None:
        return await self._store.find_by_field(lambda u: u.email.matches(email))

    async def user_exists(self, user_id: UserId) -> bool:
        return await self._store.find_by_id(user_id) is not None

    async def list_users(
        self, limit: int | None = None, offset: int | None = None,
    ) -> Page[User]:
        limit = clamp_limit(limit, self._max_page_size)
        offset = clamp_offset(offset)
        items, total = await self._store.find_page(limit, offset)
        return Page(items=items, limit=limit, offset=offset, total=total)

    async def update_user_status(
        self, user_id: UserId, status: UserStatus | str,
    ) -> Result[User]:
        errors = check_user_status(status)
        if errors:
            return Err(ValidationError(errors))
        parsed = UserStatus.parse(status)

        async with self._store.locked() as view:
            user = view.find_by_id(user_id)
            if user is None:
                return Err(NotFoundError("User", user_id))
            updated = view.update(user.with_changes(status=parsed))

        logger.info(
            f"User status updated to {parsed.value}",
            extra={"entity_id": str(user_id)},
        )
        return Ok(updated)

    async def delete_user(self, user_id: UserId) -> Result[None]:
        if not await self._store.delete(user_id):
            return Err(NotFoundError("User", user_id))
        logger.info("User deleted", extra={"entity_id": str(user_id)})
        return Ok(None)
