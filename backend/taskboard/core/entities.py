"""Entities: immutable User and Task records held by the store.

Invariants:
    - Entities are frozen; mutation means building a replacement via with_changes()
    - created_at is timezone-aware UTC and never changes after creation
    - Task.assignee_id is a weak reference: no ownership, no cascade

Design Decisions:
    - Frozen dataclasses over ORM models: the store is in-memory, no session tracking
    - Clock injected into is_overdue so the check stays pure and testable
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone

from taskboard.core.domain_types import (
    MAX_EMAIL_LENGTH, Priority, TaskId, TaskStatus, UserId, UserStatus,
)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Email:
    """Email address value object. Compared case-insensitively."""
    value: str

    @property
    def is_valid(self) -> bool:
        value = self.value.strip()
        return "@" in value and len(value) <= MAX_EMAIL_LENGTH

    @property
    def domain(self) -> str:
        _, _, domain = self.value.partition("@")
        return domain

    @property
    def key(self) -> str:
        """Lookup key used for uniqueness checks."""
        return self.value.strip().lower()

    def matches(self, other: "Email | str") -> bool:
        other_value = other.value if isinstance(other, Email) else other
        return self.key == other_value.strip().lower()


@dataclass(frozen=True)
class User:
    id: UserId
    email: Email
    name: str
    status: UserStatus = UserStatus.ACTIVE
    created_at: datetime = field(default_factory=utc_now)

    @property
    def is_active(self) -> bool:
        return self.status == UserStatus.ACTIVE

    def with_changes(self, **changes) -> "User":
        return replace(self, **changes)


@dataclass(frozen=True)
class Task:
    id: TaskId
    title: str
    description: str | None = None
    status: TaskStatus = TaskStatus.PENDING
    priority: Priority = Priority.MEDIUM
    assignee_id: UserId | None = None
    created_at: datetime = field(default_factory=utc_now)
    due_date: datetime | None = None

    def is_overdue(self, now: datetime | None = None) -> bool:
        if self.due_date is None:
            return False
        now = now or utc_now()
        due = self.due_date
        if due.tzinfo is None:
            due = due.replace(tzinfo=timezone.utc)
        return due < now

    def belongs_to(self, user: User) -> bool:
        return self.assignee_id is not None and self.assignee_id == user.id

    def with_changes(self, **changes) -> "Task":
        return replace(self, **changes)
