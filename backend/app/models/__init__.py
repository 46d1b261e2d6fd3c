"""Model exports for SQLAlchemy/SQLModel metadata discovery."""

from app.models.audit_logs import AuditLog
from app.models.tasks import Task, TaskStatus

__all__ = [
    "AuditLog",
    "Task",
    "TaskStatus",
]
