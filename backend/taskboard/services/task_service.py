"""Task Service: task lifecycle, partial updates and assignment.

Invariants:
    - create_task: an assigneeEmail with no matching user creates the task
      unassigned (not an error)
    - update_task merges ONLY fields present in the request; absent fields keep
      their previous value
    - assign_task verifies the assignee exists before committing; None unassigns
    - Fetch-merge-replace runs under one task-store acquisition; user lookups
      are separate store interactions (no cross-entity transaction)
    - List operations clamp limit to the max page size

Design Decisions:
    - Referential checks go through UserService, never the user store directly
    - Email resolution for assignment lives here so routes stay thin
"""

import logging
from uuid import uuid4

from taskboard.core.domain_types import Priority, TaskId, TaskStatus, UserId
from taskboard.core.entities import Task
from taskboard.core.errors import NotFoundError, ValidationError
from taskboard.core.pagination import (
    MAX_PAGE_SIZE, Page, clamp_limit, clamp_offset,
)
from taskboard.core.result import Err, Ok, Result
from taskboard.infrastructure.memory_store import InMemoryStore
from taskboard.schemas.task import (
    AssignTaskRequest, CreateTaskRequest, UpdateTaskRequest,
)
from taskboard.services.user_service import UserService

logger = logging.getLogger(__name__)


class TaskService:
    """Business rules for tasks. Depends on UserService for referential checks."""

    def __init__(
        self,
        store: InMemoryStore[Task],
        users: UserService,
        max_page_size: int = MAX_PAGE_SIZE,
    ):
        self._store = store
        self._users = users
        self._max_page_size = max_page_size

    # ─── Create / read ──────────────────────────────────────────

    async def create_task(self, request: CreateTaskRequest) -> Result[Task]:
        errors = request.violations()
        if errors:
            return Err(ValidationError(errors))

        assignee_id = None
        if request.assignee_email is not None:
            assignee = await self._users.get_user_by_email(request.assignee_email)
            if assignee is None:
                logger.info(
                    f"No user for {request.assignee_email}; task left unassigned",
                )
            else:
                assignee_id = assignee.id

        task = await self._store.save(Task(
            id=TaskId(uuid4()),
            title=request.title.strip(),
            description=(
                request.description.strip()
                if request.description is not None else None
            ),
            priority=Priority.parse(request.priority) or Priority.MEDIUM,
            assignee_id=assignee_id,
            due_date=request.due_date,
        ))
        logger.info("Task created", extra={"entity_id": str(task.id)})
        return Ok(task)

    async def get_task(self, task_id: TaskId) -> Result[Task]:
        task = await self._store.find_by_id(task_id)
        if task is None:
            return Err(NotFoundError("Task", task_id))
        return Ok(task)

    async def list_tasks(
        self, limit: int | None = None, offset: int | None = None,
    ) -> Page[Task]:
        return await self._page(limit, offset, None)

    async def tasks_by_assignee(
        self, assignee_id: UserId,
        limit: int | None = None, offset: int | None = None,
    ) -> Page[Task]:
        return await self._page(
            limit, offset, lambda t: t.assignee_id == assignee_id,
        )

    async def tasks_by_assignee_email(
        self, email: str, limit: int | None = None, offset: int | None = None,
    ) -> Page[Task]:
        """Unknown email yields an empty page, not an error."""
        user = await self._users.get_user_by_email(email)
        if user is None:
            return Page(
                items=[], limit=clamp_limit(limit, self._max_page_size),
                offset=clamp_offset(offset), total=0,
            )
        return await self.tasks_by_assignee(user.id, limit, offset)

    async def assignee_email(self, task: Task) -> str | None:
        """Resolve the assignee's email; None when unassigned or user deleted."""
        if task.assignee_id is None:
            return None
        result = await self._users.get_user(task.assignee_id)
        return result.value.email.value if isinstance(result, Ok) else None

    # ─── Update / assign / delete ───────────────────────────────

    async def update_task(
        self, task_id: TaskId, request: UpdateTaskRequest,
    ) -> Result[Task]:
        errors = request.violations()
        if errors:
            return Err(ValidationError(errors))

        changes = {}
        if request.title is not None:
            changes["title"] = request.title.strip()
        if request.description is not None:
            changes["description"] = request.description.strip()
        if request.status is not None:
            changes["status"] = TaskStatus.parse(request.status)
        if request.priority is not None:
            changes["priority"] = Priority.parse(request.priority)
        if request.due_date is not None:
            changes["due_date"] = request.due_date
        if request.assignee_email is not None:
            assignee = await self._users.get_user_by_email(request.assignee_email)
            if assignee is None:
                return Err(NotFoundError("Assignee", request.assignee_email))
            changes["assignee_id"] = assignee.id

        async with self._store.locked() as view:
            existing = view.find_by_id(task_id)
            if existing is None:
                return Err(NotFoundError("Task", task_id))
            updated = view.update(existing.with_changes(**changes))

        logger.info(
            f"Task updated: {sorted(changes)}", extra={"entity_id": str(task_id)},
        )
        return Ok(updated)

    async def assign_task(
        self, task_id: TaskId, assignee_id: UserId | None,
    ) -> Result[Task]:
        if await self._store.find_by_id(task_id) is None:
            return Err(NotFoundError("Task", task_id))
        if assignee_id is not None and not await self._users.user_exists(assignee_id):
            return Err(NotFoundError("Assignee", assignee_id))

        async with self._store.locked() as view:
            # Re-read: the task may have been deleted while the user was checked
            task = view.find_by_id(task_id)
            if task is None:
                return Err(NotFoundError("Task", task_id))
            updated = view.update(task.with_changes(assignee_id=assignee_id))

        logger.info(
            f"Task {'assigned' if assignee_id else 'unassigned'}",
            extra={"entity_id": str(task_id)},
        )
        return Ok(updated)

    async def assign_task_from_request(
        self, task_id: TaskId, request: AssignTaskRequest,
    ) -> Result[Task]:
        """Resolve assigneeId / assigneeEmail, then assign. Empty body unassigns."""
        errors = request.violations()
        if errors:
            return Err(ValidationError(errors))

        assignee_id = request.assignee_id
        if assignee_id is None and request.assignee_email is not None:
            assignee = await self._users.get_user_by_email(request.assignee_email)
            if assignee is None:
                if await self._store.find_by_id(task_id) is None:
                    return Err(NotFoundError("Task", task_id))
                return Err(NotFoundError("Assignee", request.assignee_email))
            assignee_id = assignee.id
        return await self.assign_task(
            task_id, UserId(assignee_id) if assignee_id is not None else None,
        )

    async def delete_task(self, task_id: TaskId) -> Result[None]:
        if not await self._store.delete(task_id):
            return Err(NotFoundError("Task", task_id))
        logger.info("Task deleted", extra={"entity_id": str(task_id)})
        return Ok(None)

    # ─── Helpers ────────────────────────────────────────────────

    async def _page(self, limit, offset, predicate) -> Page[Task]:
        limit = clamp_limit(limit, self._max_page_size)
        offset = clamp_offset(offset)
        items, total = await self._store.find_page(limit, offset, predicate)
        return Page(items=items, limit=limit, offset=offset, total=total)
