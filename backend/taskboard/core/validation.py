"""Request Validation Rules: pure checks that accumulate every violation.

Invariants:
    - Every check returns a list of messages (empty = valid), never raises
    - Callers concatenate checks: all violations are reported at once
    - Optional fields are only checked when present (None = absent)

Design Decisions:
    - Rules live in core/ so schemas and services share one source of truth
    - Messages are user-facing and stable; tests assert on them verbatim
"""

from taskboard.core.domain_types import (
    MAX_DESCRIPTION_LENGTH, MAX_TITLE_LENGTH, MIN_NAME_LENGTH,
    Priority, TaskStatus, UserStatus,
)
from taskboard.core.entities import Email

EMAIL_INVALID = "Email must be valid"
NAME_EMPTY = "Name cannot be empty"
NAME_TOO_SHORT = f"Name must be at least {MIN_NAME_LENGTH} characters"
TITLE_EMPTY = "Title cannot be empty"
TITLE_TOO_LONG = f"Title must be at most {MAX_TITLE_LENGTH} characters"
DESCRIPTION_TOO_LONG = (
    f"Description must be at most {MAX_DESCRIPTION_LENGTH} characters"
)
PRIORITY_INVALID = f"Priority must be one of: {Priority.choices()}"
TASK_STATUS_INVALID = f"Status must be one of: {TaskStatus.choices()}"
USER_STATUS_INVALID = f"Status must be one of: {UserStatus.choices()}"
ASSIGNEE_EMAIL_INVALID = "Assignee email must be valid"


def check_email(email: str) -> list[str]:
    return [] if Email(email).is_valid else [EMAIL_INVALID]


def check_name(name: str) -> list[str]:
    errors = []
    stripped = name.strip()
    if not stripped:
        errors.append(NAME_EMPTY)
    if len(stripped) < MIN_NAME_LENGTH:
        errors.append(NAME_TOO_SHORT)
    return errors


def check_title(title: str) -> list[str]:
    stripped = title.strip()
    if not stripped:
        return [TITLE_EMPTY]
    if len(stripped) > MAX_TITLE_LENGTH:
        return [TITLE_TOO_LONG]
    return []


def check_description(description: str | None) -> list[str]:
    if description is not None and len(description) > MAX_DESCRIPTION_LENGTH:
        return [DESCRIPTION_TOO_LONG]
    return []


def check_priority(priority: str | None) -> list[str]:
    if priority is not None and Priority.parse(priority) is None:
        return [PRIORITY_INVALID]
    return []


def check_task_status(status: str | None) -> list[str]:
    if status is not None and TaskStatus.parse(status) is None:
        return [TASK_STATUS_INVALID]
    return []


def check_user_status(status: str) -> list[str]:
    return [] if UserStatus.parse(status) is not None else [USER_STATUS_INVALID]


def check_assignee_email(email: str | None) -> list[str]:
    if email is not None and not Email(email).is_valid:
        return [ASSIGNEE_EMAIL_INVALID]
    return []
