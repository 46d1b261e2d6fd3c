"""Reusable FastAPI dependencies for sessions and the acting identity.

Routers that mutate tasks depend on ``ACTOR_DEP`` to get the identity string
recorded on the task and in the audit trail. Resolution goes through
``resolve_actor_identity`` so it never fails; an unresolvable caller is
recorded as ``system``.
"""

from __future__ import annotations

from fastapi import Depends

from app.core.auth import AuthContext, get_auth_context, resolve_actor_identity
from app.db.session import get_session

AUTH_DEP = Depends(get_auth_context)
SESSION_DEP = Depends(get_session)


def get_actor_identity(auth: AuthContext = AUTH_DEP) -> str:
    """Return the identity string for the authenticated caller."""
    return resolve_actor_identity(auth)


ACTOR_DEP = Depends(get_actor_identity)
