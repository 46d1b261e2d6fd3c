"""Schemas for task create/update/read API operations."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import Field, field_validator
from sqlmodel import SQLModel

from app.core.time import to_naive_utc
from app.models.tasks import TaskStatus

_ERR_TITLE_REQUIRED = "title is required"
RUNTIME_ANNOTATION_TYPES = (datetime, UUID, TaskStatus)


class TaskBase(SQLModel):
    """Fields a client supplies when creating or replacing a task."""

    title: str = Field(
        description="Short task title; must not be blank.",
        examples=["Complete project documentation"],
    )
    description: str | None = Field(
        default=None,
        description="Optional long-form description.",
        examples=["Write comprehensive API documentation"],
    )
    due_date: datetime = Field(
        description="When the task is due. Timezone-aware values are stored as UTC.",
        examples=["2025-01-25T17:00:00"],
    )

    @field_validator("title")
    @classmethod
    def validate_title(cls, value: str) -> str:
        """Strip surrounding whitespace and reject blank titles."""
        title = value.strip()
        if not title:
            raise ValueError(_ERR_TITLE_REQUIRED)
        return title

    @field_validator("due_date")
    @classmethod
    def normalize_due_date(cls, value: datetime) -> datetime:
        return to_naive_utc(value)


class TaskCreate(TaskBase):
    """Payload for creating a task. New tasks always start as PENDING."""


class TaskUpdate(TaskBase):
    """Payload for replacing a task's fields.

    ``title``, ``description`` and ``due_date`` are always overwritten; ``status``
    only changes when a non-empty value is supplied.
    """

    status: TaskStatus | None = Field(
        default=None,
        description="New status; omitted, null, or empty leaves the status unchanged.",
        examples=["IN_PROGRESS"],
    )

    @field_validator("status", mode="before")
    @classmethod
    def blank_status_means_unchanged(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class TaskRead(SQLModel):
    """Task payload returned from read and write endpoints."""

    id: UUID
    title: str
    description: str | None = None
    due_date: datetime
    status: TaskStatus
    created_by: str
    last_modified_by: str
    created_at: datetime
    updated_at: datetime
