"""Caller authentication and acting-identity resolution."""

from __future__ import annotations

from dataclasses import dataclass
from hmac import compare_digest
from typing import Literal

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.auth_mode import AuthMode
from app.core.config import settings
from app.core.logging import get_logger
from app.models.audit_logs import SYSTEM_ACTOR

logger = get_logger(__name__)
security = HTTPBearer(auto_error=False)
SECURITY_DEP = Depends(security)


@dataclass
class AuthContext:
    """Authenticated caller context resolved from inbound auth headers."""

    actor_type: Literal["user", "anonymous"]
    username: str | None = None


def _extract_bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    value = authorization.strip()
    if not value:
        return None
    if not value.lower().startswith("bearer "):
        return None
    token = value.split(" ", maxsplit=1)[1].strip()
    return token or None


def _non_empty_str(value: object) -> str | None:
    if not isinstance(value, str):
        return None
    cleaned = value.strip()
    return cleaned or None


def _resolve_local_auth_context(*, request: Request) -> AuthContext | None:
    token = _extract_bearer_token(request.headers.get("Authorization"))
    if token is None:
        return None
    expected = settings.local_auth_token.strip()
    if not expected or not compare_digest(token, expected):
        logger.info("auth.local.rejected", extra={"path": request.url.path})
        return None
    return AuthContext(
        actor_type="user",
        username=_non_empty_str(settings.local_auth_username),
    )


async def get_auth_context(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = SECURITY_DEP,
) -> AuthContext:
    """Resolve required caller context for the configured auth mode."""
    _ = credentials
    if settings.auth_mode == AuthMode.DISABLED:
        return AuthContext(actor_type="anonymous")
    local_auth = _resolve_local_auth_context(request=request)
    if local_auth is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    return local_auth


def resolve_actor_identity(auth: AuthContext | None) -> str:
    """Return the identity recorded for a caller, falling back to ``"system"``.

    Never raises: a missing context or a blank username both resolve to the
    system identity so that mutations are still attributed.
    """
    if auth is None:
        return SYSTEM_ACTOR
    return _non_empty_str(auth.username) or SYSTEM_ACTOR
