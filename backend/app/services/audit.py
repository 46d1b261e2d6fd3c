"""Audit trail recording and retrieval for task mutations."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import TYPE_CHECKING

from sqlmodel import col

from app.core.logging import get_logger
from app.core.time import to_naive_utc, utcnow
from app.models.audit_logs import SYSTEM_ACTOR, TASK_ENTITY_TYPE, AuditLog

if TYPE_CHECKING:
    from uuid import UUID

    from sqlmodel.ext.asyncio.session import AsyncSession

    from app.db.queryset import QuerySet

logger = get_logger(__name__)
_TIMESTAMP_STEP = timedelta(microseconds=1)


class _AuditClock:
    """Hand out strictly increasing audit timestamps within this process."""

    def __init__(self) -> None:
        self._last: datetime | None = None

    def next(self) -> datetime:
        now = utcnow()
        if self._last is not None and now <= self._last:
            now = self._last + _TIMESTAMP_STEP
        self._last = now
        return now


_clock = _AuditClock()


def _chronological(query: QuerySet[AuditLog]) -> QuerySet[AuditLog]:
    # id orders entries that share a timestamp.
    return query.order_by(col(AuditLog.timestamp).asc(), col(AuditLog.id).asc())


async def record_audit(
    session: AsyncSession,
    *,
    username: str | None,
    action: str,
    entity_id: UUID,
    entity_type: str = TASK_ENTITY_TYPE,
    details: str | None = None,
    commit: bool = True,
) -> AuditLog:
    """Create an append-only audit log entry.

    With ``commit=False`` the entry is only staged on *session*; the caller
    commits it together with the change it describes.
    """
    entry = AuditLog(
        username=(username or "").strip() or SYSTEM_ACTOR,
        action=action,
        entity_type=entity_type,
        entity_id=entity_id,
        details=details,
        timestamp=_clock.next(),
    )
    session.add(entry)
    if commit:
        await session.commit()
        await session.refresh(entry)
    logger.info(
        "audit.recorded",
        extra={
            "username": entry.username,
            "action": entry.action,
            "entity_type": entry.entity_type,
            "entity_id": str(entry.entity_id),
        },
    )
    return entry


async def list_audit_logs(session: AsyncSession) -> list[AuditLog]:
    """Return the full audit trail, oldest first."""
    return await _chronological(AuditLog.objects.all()).all(session)


async def list_audit_logs_by_user(session: AsyncSession, *, username: str) -> list[AuditLog]:
    return await _chronological(AuditLog.objects.filter_by(username=username)).all(session)


async def list_audit_logs_for_entity(
    session: AsyncSession,
    *,
    entity_id: UUID,
    entity_type: str = TASK_ENTITY_TYPE,
) -> list[AuditLog]:
    """Return the history of one entity, including entries written after it was deleted."""
    query = AuditLog.objects.filter_by(entity_type=entity_type, entity_id=entity_id)
    return await _chronological(query).all(session)


async def list_audit_logs_by_action(session: AsyncSession, *, action: str) -> list[AuditLog]:
    return await _chronological(AuditLog.objects.filter_by(action=action)).all(session)


async def list_audit_logs_by_time_range(
    session: AsyncSession,
    *,
    start: datetime,
    end: datetime,
) -> list[AuditLog]:
    """Return entries with ``start <= timestamp <= end``; an inverted range is empty."""
    start = to_naive_utc(start)
    end = to_naive_utc(end)
    if start > end:
        return []
    query = AuditLog.objects.filter(
        col(AuditLog.timestamp) >= start,
        col(AuditLog.timestamp) <= end,
    )
    return await _chronological(query).all(session)
