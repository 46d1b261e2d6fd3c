"""Task CRUD and completion endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

from fastapi import APIRouter, HTTPException, Query, Response, status

from app.api.deps import ACTOR_DEP, AUTH_DEP, SESSION_DEP
from app.models.tasks import TaskStatus
from app.schemas.errors import ErrorResponse
from app.schemas.tasks import TaskCreate, TaskRead, TaskUpdate
from app.services import tasks as task_service

if TYPE_CHECKING:
    from sqlmodel.ext.asyncio.session import AsyncSession

router = APIRouter(prefix="/tasks", tags=["tasks"], dependencies=[AUTH_DEP])
STATUS_FILTER_QUERY = Query(default=None, alias="status")
NOT_FOUND_RESPONSE = {
    status.HTTP_404_NOT_FOUND: {"model": ErrorResponse, "description": "Task not found."},
}


@router.post(
    "",
    response_model=TaskRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Task",
)
async def create_task(
    payload: TaskCreate,
    session: AsyncSession = SESSION_DEP,
    actor: str = ACTOR_DEP,
) -> TaskRead:
    """Create a new task; it always starts as PENDING."""
    task = await task_service.create_task(session, payload=payload, actor=actor)
    return TaskRead.model_validate(task, from_attributes=True)


@router.get("", response_model=list[TaskRead], summary="List Tasks")
async def list_tasks(
    session: AsyncSession = SESSION_DEP,
    status_filter: TaskStatus | None = STATUS_FILTER_QUERY,
) -> list[TaskRead]:
    """List all tasks, optionally filtered by status."""
    tasks = await task_service.list_tasks(session, status_filter=status_filter)
    return [TaskRead.model_validate(t, from_attributes=True) for t in tasks]


@router.get(
    "/{task_id}",
    response_model=TaskRead,
    summary="Get Task",
    responses=NOT_FOUND_RESPONSE,
)
async def get_task(
    task_id: UUID,
    session: AsyncSession = SESSION_DEP,
) -> TaskRead:
    """Get a task by id."""
    task = await task_service.get_task(session, task_id=task_id)
    return TaskRead.model_validate(task, from_attributes=True)


@router.put(
    "/{task_id}",
    response_model=TaskRead,
    summary="Update Task",
    responses=NOT_FOUND_RESPONSE,
)
async def update_task(
    task_id: UUID,
    payload: TaskUpdate,
    session: AsyncSession = SESSION_DEP,
    actor: str = ACTOR_DEP,
) -> TaskRead:
    """Replace a task's title, description and due date; change status if given."""
    task = await task_service.update_task(
        session,
        task_id=task_id,
        payload=payload,
        actor=actor,
    )
    return TaskRead.model_validate(task, from_attributes=True)


@router.patch(
    "/{task_id}/complete",
    response_model=TaskRead,
    summary="Complete Task",
    responses=NOT_FOUND_RESPONSE,
)
async def complete_task(
    task_id: UUID,
    session: AsyncSession = SESSION_DEP,
    actor: str = ACTOR_DEP,
) -> TaskRead:
    """Mark a task as completed, whatever its current status."""
    task = await task_service.complete_task(session, task_id=task_id, actor=actor)
    return TaskRead.model_validate(task, from_attributes=True)


@router.delete(
    "/{task_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete Task",
    responses=NOT_FOUND_RESPONSE,
)
async def delete_task(
    task_id: UUID,
    session: AsyncSession = SESSION_DEP,
    actor: str = ACTOR_DEP,
) -> Response:
    """Delete a task; responds 404 when there was nothing to delete."""
    deleted = await task_service.delete_task(session, task_id=task_id, actor=actor)
    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Task not found with ID: {task_id}",
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
