"""Task Schemas: create, partial update, assignment, and task representation.

Invariants:
    - None means "field absent" in every request model
    - UpdateTaskRequest.violations() also checks status (create has no status)
    - TaskResponse.assignee_email is resolved by the caller (null if unassigned
      or the referenced user no longer exists)
"""

from datetime import datetime
from uuid import UUID

from pydantic import field_validator

from taskboard.core import validation
from taskboard.core.entities import Task
from taskboard.schemas.common import CamelModel


class CreateTaskRequest(CamelModel):
    title: str
    description: str | None = None
    priority: str | None = None
    assignee_email: str | None = None
    due_date: datetime | None = None

    def violations(self) -> list[str]:
        return (
            validation.check_title(self.title)
            + validation.check_description(self.description)
            + validation.check_priority(self.priority)
            + validation.check_assignee_email(self.assignee_email)
        )


class UpdateTaskRequest(CamelModel):
    title: str | None = None
    description: str | None = None
    status: str | None = None
    priority: str | None = None
    assignee_email: str | None = None
    due_date: datetime | None = None

    def violations(self) -> list[str]:
        errors = []
        if self.title is not None:
            errors += validation.check_title(self.title)
        return (
            errors
            + validation.check_description(self.description)
            + validation.check_task_status(self.status)
            + validation.check_priority(self.priority)
            + validation.check_assignee_email(self.assignee_email)
        )


class AssignTaskRequest(CamelModel):
    """Empty body, or blank / null fields, unassigns the task."""
    assignee_id: UUID | None = None
    assignee_email: str | None = None

    @field_validator("assignee_id", "assignee_email", mode="before")
    @classmethod
    def blank_as_absent(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    def violations(self) -> list[str]:
        if self.assignee_id is not None:
            return []
        return validation.check_assignee_email(self.assignee_email)


class TaskResponse(CamelModel):
    id: UUID
    title: str
    description: str | None
    status: str
    priority: str
    assignee_id: UUID | None
    assignee_email: str | None
    created_at: datetime
    due_date: datetime | None
    is_overdue: bool

    @classmethod
    def from_task(
        cls, task: Task, assignee_email: str | None = None,
    ) -> "TaskResponse":
        return cls(
            id=task.id,
            title=task.title,
            description=task.description,
            status=task.status.value,
            priority=task.priority.value,
            assignee_id=task.assignee_id,
            assignee_email=assignee_email,
            created_at=task.created_at,
            due_date=task.due_date,
            is_overdue=task.is_overdue(),
        )
