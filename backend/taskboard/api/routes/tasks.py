"""Task Routes: CRUD, filtering by assignee, and assignment.

Invariants:
    - Every task body includes assigneeEmail resolved through the user service
    - GET /tasks?assigneeEmail= with an unknown email returns an empty page
    - PUT /{id}/assign with an empty body unassigns the task
"""

from fastapi import APIRouter, Depends, Query, Response, status

from taskboard.api.dependencies import (
    PageParams, get_page_params, get_task_service, parse_id,
)
from taskboard.core.domain_types import TaskId
from taskboard.core.entities import Task
from taskboard.core.result import unwrap
from taskboard.schemas.common import PaginatedResponse, PaginationInfo
from taskboard.schemas.task import (
    AssignTaskRequest, CreateTaskRequest, TaskResponse, UpdateTaskRequest,
)
from taskboard.services.task_service import TaskService

router = APIRouter(prefix="/api/v1/tasks", tags=["tasks"])


async def _to_response(tasks: TaskService, task: Task) -> TaskResponse:
    return TaskResponse.from_task(task, await tasks.assignee_email(task))


@router.post(
    "", response_model=TaskResponse, status_code=status.HTTP_201_CREATED,
)
async def create_task(
    body: CreateTaskRequest, tasks: TaskService = Depends(get_task_service),
):
    """Create a task. An unknown assigneeEmail leaves the task unassigned."""
    task = unwrap(await tasks.create_task(body))
    return await _to_response(tasks, task)


@router.get("", response_model=PaginatedResponse[TaskResponse])
async def list_tasks(
    page: PageParams = Depends(get_page_params),
    assignee_email: str | None = Query(None, alias="assigneeEmail"),
    tasks: TaskService = Depends(get_task_service),
):
    """List tasks, optionally only those assigned to assigneeEmail."""
    if assignee_email is not None:
        result = await tasks.tasks_by_assignee_email(
            assignee_email, page.limit, page.offset,
        )
    else:
        result = await tasks.list_tasks(page.limit, page.offset)
    return PaginatedResponse[TaskResponse](
        data=[await _to_response(tasks, t) for t in result.items],
        pagination=PaginationInfo.from_page_info(result.info),
    )


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(
    task_id: str, tasks: TaskService = Depends(get_task_service),
):
    tid = TaskId(parse_id(task_id, "Task"))
    return await _to_response(tasks, unwrap(await tasks.get_task(tid)))


@router.put("/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: str,
    body: UpdateTaskRequest,
    tasks: TaskService = Depends(get_task_service),
):
    """Partial update: only fields present in the body change."""
    tid = TaskId(parse_id(task_id, "Task"))
    task = unwrap(await tasks.update_task(tid, body))
    return await _to_response(tasks, task)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(
    task_id: str, tasks: TaskService = Depends(get_task_service),
):
    tid = TaskId(parse_id(task_id, "Task"))
    unwrap(await tasks.delete_task(tid))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put("/{task_id}/assign", response_model=TaskResponse)
async def assign_task(
    task_id: str,
    body: AssignTaskRequest | None = None,
    tasks: TaskService = Depends(get_task_service),
):
    """Assign by assigneeId or assigneeEmail; an empty body unassigns."""
    tid = TaskId(parse_id(task_id, "Task"))
    task = unwrap(await tasks.assign_task_from_request(
        tid, body or AssignTaskRequest(),
    ))
    return await _to_response(tasks, task)
