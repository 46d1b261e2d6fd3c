"""Audit trail query endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING
from uuid import UUID

from fastapi import APIRouter, Path, Query

from app.api.deps import AUTH_DEP, SESSION_DEP
from app.models.audit_logs import AUDIT_ACTIONS, TASK_ENTITY_TYPE
from app.schemas.audit import AuditLogRead
from app.services.audit import (
    list_audit_logs,
    list_audit_logs_by_action,
    list_audit_logs_by_time_range,
    list_audit_logs_by_user,
    list_audit_logs_for_entity,
)

if TYPE_CHECKING:
    from sqlmodel.ext.asyncio.session import AsyncSession

    from app.models.audit_logs import AuditLog

RUNTIME_ANNOTATION_TYPES = (datetime, UUID)

router = APIRouter(prefix="/audit", tags=["audit"], dependencies=[AUTH_DEP])
RANGE_START_QUERY = Query(description="Inclusive lower bound (ISO 8601).")
RANGE_END_QUERY = Query(description="Inclusive upper bound (ISO 8601).")
ACTION_PATH = Path(
    description="Action kind, matched exactly. Unknown kinds return an empty list.",
    examples=sorted(AUDIT_ACTIONS),
)


def _to_read(entries: list[AuditLog]) -> list[AuditLogRead]:
    return [AuditLogRead.model_validate(e, from_attributes=True) for e in entries]


@router.get("", response_model=list[AuditLogRead], summary="List Audit Logs")
async def list_all_audit_logs(session: AsyncSession = SESSION_DEP) -> list[AuditLogRead]:
    """Return every audit entry, oldest first."""
    return _to_read(await list_audit_logs(session))


@router.get(
    "/user/{username}",
    response_model=list[AuditLogRead],
    summary="List Audit Logs By User",
)
async def list_audit_logs_for_user(
    username: str,
    session: AsyncSession = SESSION_DEP,
) -> list[AuditLogRead]:
    """Return entries recorded for one acting identity."""
    return _to_read(await list_audit_logs_by_user(session, username=username))


@router.get(
    "/task/{task_id}",
    response_model=list[AuditLogRead],
    summary="List Audit Logs For Task",
)
async def list_audit_logs_for_task(
    task_id: UUID,
    session: AsyncSession = SESSION_DEP,
) -> list[AuditLogRead]:
    """Return the history of one task, including after it has been deleted."""
    entries = await list_audit_logs_for_entity(
        session,
        entity_type=TASK_ENTITY_TYPE,
        entity_id=task_id,
    )
    return _to_read(entries)


@router.get(
    "/action/{action}",
    response_model=list[AuditLogRead],
    summary="List Audit Logs By Action",
)
async def list_audit_logs_for_action(
    action: str = ACTION_PATH,
    session: AsyncSession = SESSION_DEP,
) -> list[AuditLogRead]:
    """Return entries for one action kind."""
    return _to_read(await list_audit_logs_by_action(session, action=action))


@router.get(
    "/date-range",
    response_model=list[AuditLogRead],
    summary="List Audit Logs In Date Range",
)
async def list_audit_logs_in_range(
    start: datetime = RANGE_START_QUERY,
    end: datetime = RANGE_END_QUERY,
    session: AsyncSession = SESSION_DEP,
) -> list[AuditLogRead]:
    """Return entries with a timestamp between ``start`` and ``end`` inclusive."""
    return _to_read(await list_audit_logs_by_time_range(session, start=start, end=end))
