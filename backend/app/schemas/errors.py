"""Structured error payload schemas used by API responses."""

from __future__ import annotations

from pydantic import Field
from sqlmodel import SQLModel


class ErrorResponse(SQLModel):
    """Error body produced by the global exception handlers."""

    detail: str | dict[str, object] | list[object] = Field(
        description="Error message, or a list of field errors for validation failures.",
        examples=["Not Found", "Internal Server Error"],
    )
    request_id: str | None = Field(
        default=None,
        description="Request correlation identifier injected by middleware.",
    )
