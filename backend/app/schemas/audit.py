"""Schemas for the audit query API."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlmodel import SQLModel

RUNTIME_ANNOTATION_TYPES = (datetime, UUID)


class AuditLogRead(SQLModel):
    """Audit entry payload returned by read endpoints."""

    id: UUID
    username: str
    action: str
    entity_type: str
    entity_id: UUID
    details: str | None = None
    timestamp: datetime
