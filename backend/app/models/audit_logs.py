"""Append-only audit log model for task mutations."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Field

from app.core.time import utcnow
from app.models.base import QueryModel

RUNTIME_ANNOTATION_TYPES = (datetime,)

SYSTEM_ACTOR = "system"
TASK_ENTITY_TYPE = "TASK"

# Known action kinds. `action` stays an open string column so new kinds need no migration.
AUDIT_ACTION_CREATE = "CREATE"
AUDIT_ACTION_UPDATE = "UPDATE"
AUDIT_ACTION_DELETE = "DELETE"
AUDIT_ACTION_COMPLETE = "COMPLETE"
AUDIT_ACTIONS = frozenset(
    {AUDIT_ACTION_CREATE, AUDIT_ACTION_UPDATE, AUDIT_ACTION_DELETE, AUDIT_ACTION_COMPLETE},
)


class AuditLog(QueryModel, table=True):
    """Append-only record of who did what to which entity, and when.

    ``entity_id`` is a plain value, not a foreign key, so history survives
    deletion of the entity it describes.
    """

    __tablename__ = "audit_logs"  # pyright: ignore[reportAssignmentType]

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    username: str = Field(index=True)
    action: str = Field(index=True)
    entity_type: str = Field(index=True)
    entity_id: UUID = Field(index=True)
    details: str | None = None
    timestamp: datetime = Field(default_factory=utcnow, index=True)
