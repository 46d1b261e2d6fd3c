"""Task model and its status values."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from uuid import UUID, uuid4

from sqlmodel import Field

from app.core.time import utcnow
from app.models.audit_logs import SYSTEM_ACTOR
from app.models.base import QueryModel

RUNTIME_ANNOTATION_TYPES = (datetime,)


class TaskStatus(str, Enum):
    """Task lifecycle states.

    PENDING -> IN_PROGRESS -> COMPLETED is the intended direction, but no
    transition is enforced.
    """

    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"


class Task(QueryModel, table=True):
    """A to-do item with due date, status, and authorship metadata."""

    __tablename__ = "tasks"  # pyright: ignore[reportAssignmentType]

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    title: str
    description: str | None = None
    due_date: datetime
    status: str = Field(default=TaskStatus.PENDING.value, index=True)

    created_by: str = Field(default=SYSTEM_ACTOR, index=True)
    last_modified_by: str = Field(default=SYSTEM_ACTOR)

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
