"""Service Results: discriminated success/failure values.

Invariants:
    - Exactly one of Ok / Err; Ok carries the value, Err carries a TaskboardError
    - Services return Results for expected outcomes instead of raising

Design Decisions:
    - Frozen dataclasses matched with isinstance/match: no third-party Result type
"""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from taskboard.core.errors import TaskboardError

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def is_ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    error: TaskboardError

    @property
    def is_ok(self) -> bool:
        return False


Result = Union[Ok[T], Err]


def unwrap(result: "Result[T]") -> T:
    """Return the Ok value or raise the carried error (route boundary only)."""
    if isinstance(result, Err):
        raise result.error
    return result.value
