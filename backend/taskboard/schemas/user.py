"""User Schemas: creation, status update, and public user representation.

Invariants:
    - CreateUserRequest.violations() reports every broken rule at once
    - UpdateUserStatusRequest carries the raw status; UserService rejects
      unknown values without falling back to a default
"""

from datetime import datetime
from uuid import UUID

from taskboard.core import validation
from taskboard.core.entities import User
from taskboard.schemas.common import CamelModel


class CreateUserRequest(CamelModel):
    email: str
    name: str

    def violations(self) -> list[str]:
        return validation.check_email(self.email) + validation.check_name(self.name)


class UpdateUserStatusRequest(CamelModel):
    status: str


class UserResponse(CamelModel):
    id: UUID
    email: str
    name: str
    status: str
    created_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            email=user.email.value,
            name=user.name,
            status=user.status.value,
            created_at=user.created_at,
        )
