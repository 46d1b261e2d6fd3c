"""Schemas for caller identity endpoints."""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from sqlmodel import SQLModel


class IdentityRead(SQLModel):
    """Identity that will be recorded for the caller's task mutations."""

    username: str = Field(
        description="Acting identity; `system` when none can be resolved.",
        examples=["admin", "system"],
    )
    actor_type: Literal["user", "anonymous"] = Field(
        description="Whether the caller authenticated or auth is disabled.",
        examples=["user"],
    )
