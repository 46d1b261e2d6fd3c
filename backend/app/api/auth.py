"""Caller identity endpoint for the task API."""

from __future__ import annotations

from fastapi import APIRouter, status

from app.api.deps import AUTH_DEP
from app.core.auth import AuthContext, resolve_actor_identity
from app.schemas.auth import IdentityRead
from app.schemas.errors import ErrorResponse

router = APIRouter(prefix="/auth", tags=["auth"])


@router.get(
    "/me",
    response_model=IdentityRead,
    summary="Resolve Caller Identity",
    description=(
        "Return the identity that task mutations made with these credentials "
        "will be attributed to in the audit trail."
    ),
    responses={
        status.HTTP_200_OK: {
            "description": "Identity resolved from auth headers.",
            "content": {
                "application/json": {"example": {"username": "admin", "actor_type": "user"}},
            },
        },
        status.HTTP_401_UNAUTHORIZED: {
            "model": ErrorResponse,
            "description": "Missing or invalid bearer token.",
        },
    },
)
async def read_identity(auth: AuthContext = AUTH_DEP) -> IdentityRead:
    """Return the caller's resolved acting identity."""
    return IdentityRead(username=resolve_actor_identity(auth), actor_type=auth.actor_type)
