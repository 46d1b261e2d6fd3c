"""Task lifecycle operations with an audit entry for every mutation.

Each mutating operation stages the task change and its audit row on the same
session and commits them together, so a task is never changed without being
audited. The acting identity is passed in explicitly by the caller.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import HTTPException, status
from sqlmodel import col

from app.core.logging import get_logger
from app.core.time import utcnow
from app.models.audit_logs import (
    AUDIT_ACTION_COMPLETE,
    AUDIT_ACTION_CREATE,
    AUDIT_ACTION_DELETE,
    AUDIT_ACTION_UPDATE,
    SYSTEM_ACTOR,
)
from app.models.tasks import Task, TaskStatus
from app.services.audit import record_audit

if TYPE_CHECKING:
    from uuid import UUID

    from sqlmodel.ext.asyncio.session import AsyncSession

    from app.schemas.tasks import TaskCreate, TaskUpdate

logger = get_logger(__name__)
UNKNOWN_TASK_TITLE = "Unknown"


def _actor_or_system(actor: str | None) -> str:
    return (actor or "").strip() or SYSTEM_ACTOR


def _touch(task: Task, *, actor: str) -> None:
    """Stamp the modifier and refresh ``updated_at`` without ever moving it backwards."""
    task.last_modified_by = actor
    task.updated_at = max(utcnow(), task.updated_at, task.created_at)


async def _find_task(session: AsyncSession, task_id: UUID) -> Task | None:
    return await Task.objects.by_id(task_id).first(session)


def _not_found(task_id: UUID) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Task not found with ID: {task_id}",
    )


async def create_task(
    session: AsyncSession,
    *,
    payload: TaskCreate,
    actor: str | None,
) -> Task:
    """Create a PENDING task and record a CREATE audit entry."""
    actor = _actor_or_system(actor)
    now = utcnow()
    task = Task(
        title=payload.title,
        description=payload.description,
        due_date=payload.due_date,
        status=TaskStatus.PENDING.value,
        created_by=actor,
        last_modified_by=actor,
        created_at=now,
        updated_at=now,
    )
    session.add(task)
    await session.flush()
    await record_audit(
        session,
        username=actor,
        action=AUDIT_ACTION_CREATE,
        entity_id=task.id,
        details=f"Created task: {task.title}",
        commit=False,
    )
    await session.commit()
    await session.refresh(task)
    logger.info("task.created", extra={"task_id": str(task.id), "actor": actor})
    return task


async def list_tasks(
    session: AsyncSession,
    *,
    status_filter: TaskStatus | None = None,
) -> list[Task]:
    """List all tasks, or only those currently in *status_filter*."""
    query = Task.objects.all()
    if status_filter is not None:
        query = query.filter(col(Task.status) == TaskStatus(status_filter).value)
    tasks = await query.order_by(col(Task.created_at).asc()).all(session)
    logger.debug(
        "task.listed",
        extra={
            "status_filter": status_filter.value if status_filter else None,
            "count": len(tasks),
        },
    )
    return tasks


async def get_task(session: AsyncSession, *, task_id: UUID) -> Task:
    """Return the task or raise 404."""
    task = await _find_task(session, task_id)
    if task is None:
        logger.info("task.not_found", extra={"task_id": str(task_id)})
        raise _not_found(task_id)
    return task


async def update_task(
    session: AsyncSession,
    *,
    task_id: UUID,
    payload: TaskUpdate,
    actor: str | None,
) -> Task:
    """Replace a task's fields and record an UPDATE entry describing the change.

    ``title``, ``description`` and ``due_date`` are always overwritten. The status
    changes only when the payload carries one.
    """
    actor = _actor_or_system(actor)
    task = await get_task(session, task_id=task_id)
    old_title = task.title
    old_status = task.status

    task.title = payload.title
    task.description = payload.description
    task.due_date = payload.due_date
    if payload.status is not None:
        task.status = TaskStatus(payload.status).value
    _touch(task, actor=actor)
    session.add(task)
    await session.flush()

    details = (
        f"Updated task from '{old_title}' (status: {old_status}) "
        f"to '{task.title}' (status: {task.status})"
    )
    await record_audit(
        session,
        username=actor,
        action=AUDIT_ACTION_UPDATE,
        entity_id=task.id,
        details=details,
        commit=False,
    )
    await session.commit()
    await session.refresh(task)
    logger.info("task.updated", extra={"task_id": str(task.id), "actor": actor})
    return task


async def complete_task(
    session: AsyncSession,
    *,
    task_id: UUID,
    actor: str | None,
) -> Task:
    """Force a task to COMPLETED regardless of its current status."""
    actor = _actor_or_system(actor)
    task = await get_task(session, task_id=task_id)
    task.status = TaskStatus.COMPLETED.value
    _touch(task, actor=actor)
    session.add(task)
    await session.flush()
    await record_audit(
        session,
        username=actor,
        action=AUDIT_ACTION_COMPLETE,
        entity_id=task.id,
        details=f"Marked task as completed: {task.title}",
        commit=False,
    )
    await session.commit()
    await session.refresh(task)
    logger.info("task.completed", extra={"task_id": str(task.id), "actor": actor})
    return task


async def delete_task(
    session: AsyncSession,
    *,
    task_id: UUID,
    actor: str | None,
) -> bool:
    """Delete a task and record a DELETE entry; return ``False`` if it did not exist."""
    actor = _actor_or_system(actor)
    task = await _find_task(session, task_id)
    if task is None:
        logger.info("task.delete.not_found", extra={"task_id": str(task_id)})
        return False

    title = (task.title or "").strip() or UNKNOWN_TASK_TITLE
    await session.delete(task)
    await session.flush()
    await record_audit(
        session,
        username=actor,
        action=AUDIT_ACTION_DELETE,
        entity_id=task_id,
        details=f"Deleted task: {title}",
        commit=False,
    )
    await session.commit()
    logger.info("task.deleted", extra={"task_id": str(task_id), "actor": actor})
    return True
