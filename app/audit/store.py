from sqlalchemy.orm import Session, sessionmaker

from app.audit.recorder import AuditEntry
from app.models.audit_log import AuditLog

class SqlAuditStore:
    """Writes each entry in its own session, independent of the request's transaction."""

    def __init__(self, session_factory: sessionmaker[Session]):
        self.session_factory = session_factory

    def add(self, entry: AuditEntry) -> None:
        with self.session_factory() as db:
            db.add(
                AuditLog(
                    ts=entry.ts,
                    user_id=entry.user_id,
                    organization_id=entry.organization_id,
                    action=entry.action,
                    resource=entry.resource,
                    resource_id=entry.resource_id,
                    allowed=entry.allowed,
                    reason=entry.reason,
                    meta=entry.meta,
                )
            )
            db.commit()