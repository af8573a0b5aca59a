"""Root conftest: shared fixtures: fresh stores, services, app and client.

Invariants:
    - Every test gets fresh stores (no state leaks between tests)
    - The HTTP app is built via create_app with rate limiting disabled;
      rate-limit tests build their own app
"""

import pytest
from httpx import ASGITransport, AsyncClient

from taskboard.config import Settings
from taskboard.core.entities import Task, User
from taskboard.infrastructure.memory_store import InMemoryStore
from taskboard.main import create_app
from taskboard.schemas.user import CreateUserRequest
from taskboard.services.task_service import TaskService
from taskboard.services.user_service import UserService


@pytest.fixture
def user_store() -> InMemoryStore[User]:
    return InMemoryStore("users")


@pytest.fixture
def task_store() -> InMemoryStore[Task]:
    return InMemoryStore("tasks")


@pytest.fixture
def user_service(user_store) -> UserService:
    return UserService(user_store)


@pytest.fixture
def task_service(task_store, user_service) -> TaskService:
    return TaskService(task_store, user_service)


@pytest.fixture
async def alice(user_service) -> User:
    result = await user_service.create_user(
        CreateUserRequest(email="alice@example.com", name="Alice"),
    )
    return result.value


@pytest.fixture
def settings() -> Settings:
    return Settings(
        rate_limit_enabled=False, http_log_enabled=False, log_format="text",
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
async def client(app):
    """FastAPI test client over ASGI transport (no network)."""
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
