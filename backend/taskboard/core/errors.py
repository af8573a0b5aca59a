"""Error Hierarchy: typed, categorized failures for every Taskboard outcome.

Invariants:
    - Every error has a stable code (str) and an HTTP status
    - to_response() produces the flat REST envelope {error, message, timestamp}
    - Validation, not-found and conflict are expected outcomes: services return
      them inside Err results, they are never raised from the service layer
    - InternalError messages are opaque; details go to the log, not the client

Design Decisions:
    - Single hierarchy with TaskboardError base: one FastAPI handler encodes all
    - Errors double as values (carried by Err) and exceptions (raised by routes)
"""

from datetime import datetime, timezone


class TaskboardError(Exception):
    """Base exception for all Taskboard errors."""

    def __init__(self, message: str, code: str, http_status: int = 500):
        super().__init__(message)
        self.message = message
        self.code = code
        self.http_status = http_status
        self.timestamp = datetime.now(timezone.utc)

    @property
    def public_message(self) -> str:
        return self.message

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": self.code,
            "message": self.public_message,
            "timestamp": self.timestamp.isoformat(),
        }


# ─── Expected business outcomes (4xx) ────────────────────────────

class ValidationError(TaskboardError):
    """Request failed business validation. Carries every violation at once."""

    def __init__(self, messages: list[str]):
        super().__init__(
            "; ".join(messages) or "Validation failed",
            "VALIDATION_ERROR", 400,
        )
        self.messages = list(messages)

    def to_response(self) -> dict:
        response = super().to_response()
        response["details"] = self.messages
        return response


class NotFoundError(TaskboardError):
    """Requested resource does not exist."""

    def __init__(self, resource: str, identifier: object):
        super().__init__(f"{resource} '{identifier}' not found", "NOT_FOUND", 404)
        self.resource = resource
        self.identifier = identifier


class ConflictError(TaskboardError):
    """Request conflicts with existing state (e.g. duplicate email)."""

    def __init__(self, message: str):
        super().__init__(message, "CONFLICT", 409)


# ─── Unexpected failures (5xx) ───────────────────────────────────

class InternalError(TaskboardError):
    """Unexpected or infrastructure failure. Never shown verbatim to callers."""

    def __init__(self, message: str):
        super().__init__(message, "INTERNAL_ERROR", 500)

    @property
    def public_message(self) -> str:
        return "An unexpected error occurred"


class StoreError(InternalError):
    """Store state is inconsistent with its own invariants."""

    def __init__(self, message: str, operation: str):
        super().__init__(f"Store {operation} failed: {message}")
        self.operation = operation
