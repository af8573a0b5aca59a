"""Taskboard API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Stores and services built once per app in create_app and handed to routes
      through app.state (no module-level mutable state)
    - Middleware order is fixed: logging → CORS → rate limiting → routes
    - Global error handlers map TaskboardError → structured JSON responses

Design Decisions:
    - create_app(settings) factory: tests build isolated apps with their own
      stores and limiter; `app` below serves uvicorn
    - Lifespan over @app.on_event: logging configured once on startup
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from taskboard.api.error_handlers import register_error_handlers
from taskboard.api.middleware import register_middleware
from taskboard.api.routes import health, tasks, users
from taskboard.config import Settings, get_settings
from taskboard.core.entities import Task, User
from taskboard.infrastructure.memory_store import InMemoryStore
from taskboard.infrastructure.observability import setup_logging
from taskboard.services.task_service import TaskService
from taskboard.services.user_service import UserService

logger = logging.getLogger(__name__)


def _route_summary(app: FastAPI) -> list[str]:
    return [
        f"{','.join(sorted(r.methods))} {r.path}"
        for r in app.routes
        if getattr(r, "methods", None) and r.path.startswith(("/api", "/health"))
    ]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings: Settings = app.state.settings
    setup_logging(settings.log_level, settings.log_format)
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    for line in _route_summary(app):
        logger.info(f"Route: {line}")
    yield
    logger.info(f"{settings.app_name} shutting down")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Assemble stores, services, middleware, routes and error handlers."""
    settings = settings or get_settings()
    app = FastAPI(
        title=settings.app_name, version=settings.app_version, lifespan=lifespan,
    )
    app.state.settings = settings

    user_store: InMemoryStore[User] = InMemoryStore("users")
    task_store: InMemoryStore[Task] = InMemoryStore("tasks")
    app.state.user_service = UserService(user_store, settings.max_page_size)
    app.state.task_service = TaskService(
        task_store, app.state.user_service, settings.max_page_size,
    )

    register_middleware(app, settings)

    app.include_router(health.router)
    app.include_router(users.router)
    app.include_router(tasks.router)

    register_error_handlers(app)
    return app


app = create_app()
