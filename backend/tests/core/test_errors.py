"""Errors and Results: response envelope, status codes, unwrap."""

import pytest

from taskboard.core.errors import (
    ConflictError, InternalError, NotFoundError, StoreError, ValidationError,
)
from taskboard.core.result import Err, Ok, unwrap


def test_validation_error_keeps_every_message():
    err = ValidationError(["Title cannot be empty", "Priority bad"])
    assert err.http_status == 400
    body = err.to_response()
    assert body["error"] == "VALIDATION_ERROR"
    assert body["details"] == ["Title cannot be empty", "Priority bad"]
    assert "Title cannot be empty" in body["message"]
    assert "timestamp" in body


def test_not_found_and_conflict_statuses():
    assert NotFoundError("User", "123").http_status == 404
    assert NotFoundError("User", "123").to_response()["error"] == "NOT_FOUND"
    assert ConflictError("email exists").http_status == 409


def test_internal_error_message_is_opaque():
    err = StoreError("dict corrupted at key 7", "users.save")
    assert isinstance(err, InternalError)
    assert err.http_status == 500
    body = err.to_response()
    assert body["error"] == "INTERNAL_ERROR"
    assert "corrupted" not in body["message"]


def test_unwrap_returns_ok_value():
    assert unwrap(Ok(5)) == 5
    assert Ok(5).is_ok
    assert not Err(ConflictError("x")).is_ok


def test_unwrap_raises_carried_error():
    with pytest.raises(NotFoundError):
        unwrap(Err(NotFoundError("Task", "1")))
