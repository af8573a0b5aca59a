"""Domain Types: identity types and enums shared across the codebase.

Invariants:
    - UserId and TaskId wrap UUIDs; never compare a bare string to an id
    - Every enum value is its canonical wire rendering (snake_case)
    - parse() is permissive on case, whitespace, underscores and hyphens
    - parse() returns None on unknown input; callers decide what that means

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", UUID)
TaskId = NewType("TaskId", UUID)


# ─── Limits ──────────────────────────────────────────────────────

MAX_TITLE_LENGTH: int = 200
MAX_DESCRIPTION_LENGTH: int = 2000
MIN_NAME_LENGTH: int = 2
MAX_EMAIL_LENGTH: int = 254


def _normalize(raw: str) -> str:
    """Lowercase and drop separators: 'In Progress' -> 'inprogress'."""
    return (
        raw.strip().lower()
        .replace("_", "").replace(" ", "").replace("-", "")
    )


class _ParsableEnum(str, Enum):
    """str Enum with permissive parsing against normalized member values."""

    @classmethod
    def parse(cls, raw: str | None):
        if raw is None:
            return None
        key = _normalize(raw)
        for member in cls:
            if _normalize(member.value) == key:
                return member
        return cls._aliases().get(key)

    @classmethod
    def _aliases(cls) -> dict:
        return {}

    @classmethod
    def choices(cls) -> str:
        return ", ".join(member.value for member in cls)

    def __str__(self) -> str:
        return self.value


# ─── Enums ───────────────────────────────────────────────────────

class UserStatus(_ParsableEnum):
    """User account states."""
    ACTIVE = "active"
    INACTIVE = "inactive"
    SUSPENDED = "suspended"


class TaskStatus(_ParsableEnum):
    """Task lifecycle states. New tasks start PENDING."""
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @classmethod
    def _aliases(cls) -> dict:
        return {"canceled": cls.CANCELLED}


class Priority(_ParsableEnum):
    """Task priority. New tasks default to MEDIUM."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"
