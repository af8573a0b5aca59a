"""Request Schemas: camelCase decoding and accumulated violations.

Tests cover:
    - violations() reports every failure at once (not fail-fast)
    - camelCase and snake_case field names both decode
    - Missing required fields fail at decode time (pydantic)
"""

import pytest
from pydantic import ValidationError as PydanticValidationError

from taskboard.core.validation import (
    ASSIGNEE_EMAIL_INVALID, EMAIL_INVALID, NAME_EMPTY, NAME_TOO_SHORT,
    PRIORITY_INVALID, TASK_STATUS_INVALID, TITLE_EMPTY,
)
from taskboard.schemas.task import (
    AssignTaskRequest, CreateTaskRequest, UpdateTaskRequest,
)
from taskboard.schemas.user import CreateUserRequest


def test_create_user_reports_all_violations():
    req = CreateUserRequest(email="nope", name=" ")
    assert req.violations() == [EMAIL_INVALID, NAME_EMPTY, NAME_TOO_SHORT]


def test_create_user_valid():
    assert CreateUserRequest(email="a@b.c", name="Alice").violations() == []


def test_create_user_missing_field_fails_decode():
    with pytest.raises(PydanticValidationError):
        CreateUserRequest.model_validate({"email": "a@b.c"})


def test_create_task_empty_title_and_bogus_priority_yield_exactly_two():
    req = CreateTaskRequest(title="", priority="bogus")
    assert req.violations() == [TITLE_EMPTY, PRIORITY_INVALID]


def test_create_task_decodes_camel_case():
    req = CreateTaskRequest.model_validate(
        {"title": "T1", "assigneeEmail": "alice@example.com",
         "dueDate": "2026-01-01T10:00:00Z"},
    )
    assert req.assignee_email == "alice@example.com"
    assert req.due_date.year == 2026


def test_create_task_malformed_assignee_email():
    req = CreateTaskRequest(title="T", assignee_email="alice")
    assert req.violations() == [ASSIGNEE_EMAIL_INVALID]


def test_update_task_all_absent_is_valid():
    assert UpdateTaskRequest().violations() == []


def test_update_task_checks_status_and_title():
    req = UpdateTaskRequest(title="  ", status="done")
    assert req.violations() == [TITLE_EMPTY, TASK_STATUS_INVALID]


def test_assign_request_prefers_id_over_email():
    from uuid import uuid4
    req = AssignTaskRequest(assignee_id=uuid4(), assignee_email="broken")
    assert req.violations() == []
    assert AssignTaskRequest(assignee_email="broken").violations() == [
        ASSIGNEE_EMAIL_INVALID,
    ]


def test_assign_request_treats_blank_fields_as_absent():
    req = AssignTaskRequest.model_validate({"assigneeId": "", "assigneeEmail": "  "})
    assert req.assignee_id is None
    assert req.assignee_email is None
    assert req.violations() == []
