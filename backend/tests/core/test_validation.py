"""Validation Rules: pure checks return message lists, never raise."""

from taskboard.core import validation
from taskboard.core.validation import (
    ASSIGNEE_EMAIL_INVALID, DESCRIPTION_TOO_LONG, EMAIL_INVALID, NAME_EMPTY,
    NAME_TOO_SHORT, PRIORITY_INVALID, TASK_STATUS_INVALID, TITLE_EMPTY,
    TITLE_TOO_LONG, USER_STATUS_INVALID,
)


def test_email_requires_at_sign():
    assert validation.check_email("alice.example.com") == [EMAIL_INVALID]
    assert validation.check_email("alice@example.com") == []


def test_email_longer_than_254_characters_is_invalid():
    local = "a" * (254 - len("@example.com"))
    assert validation.check_email(f"{local}@example.com") == []
    assert validation.check_email(f"{local}a@example.com") == [EMAIL_INVALID]
    assert validation.check_assignee_email(f"{local}a@example.com") == [
        ASSIGNEE_EMAIL_INVALID,
    ]


def test_blank_name_reports_empty_and_too_short():
    assert validation.check_name("   ") == [NAME_EMPTY, NAME_TOO_SHORT]


def test_single_char_name_is_too_short():
    assert validation.check_name(" A ") == [NAME_TOO_SHORT]


def test_two_char_name_is_valid():
    assert validation.check_name("Al") == []


def test_title_rules():
    assert validation.check_title("") == [TITLE_EMPTY]
    assert validation.check_title("x" * 200) == []
    assert validation.check_title("x" * 201) == [TITLE_TOO_LONG]


def test_description_rules():
    assert validation.check_description(None) == []
    assert validation.check_description("d" * 2000) == []
    assert validation.check_description("d" * 2001) == [DESCRIPTION_TOO_LONG]


def test_optional_enums_only_checked_when_present():
    assert validation.check_priority(None) == []
    assert validation.check_priority("high") == []
    assert validation.check_priority("bogus") == [PRIORITY_INVALID]
    assert validation.check_task_status(None) == []
    assert validation.check_task_status("done") == [TASK_STATUS_INVALID]


def test_user_status_is_required_and_checked():
    assert validation.check_user_status("active") == []
    assert validation.check_user_status("deleted") == [USER_STATUS_INVALID]


def test_assignee_email():
    assert validation.check_assignee_email(None) == []
    assert validation.check_assignee_email("bob") == [ASSIGNEE_EMAIL_INVALID]
