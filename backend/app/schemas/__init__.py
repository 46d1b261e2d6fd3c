"""Public schema exports shared across API route modules."""

from app.schemas.audit import AuditLogRead
from app.schemas.auth import IdentityRead
from app.schemas.errors import ErrorResponse
from app.schemas.health import HealthStatusResponse
from app.schemas.tasks import TaskCreate, TaskRead, TaskUpdate

__all__ = [
    "AuditLogRead",
    "ErrorResponse",
    "HealthStatusResponse",
    "IdentityRead",
    "TaskCreate",
    "TaskRead",
    "TaskUpdate",
]
