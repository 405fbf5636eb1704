from app.models.audit_log import AuditLog
from app.models.org import Organization
from app.models.task import Task
from app.models.user import User

__all__ = ["AuditLog", "Organization", "Task", "User"]
