from sqlalchemy import select
from sqlalchemy.orm import Session

from app.auth.context import RequestUser
from app.models.audit_log import AuditLog
from app.models.user import User
from app.rbac.scope import accessible_org_ids_for
from app.schemas.audit import AuditLogOut

UNKNOWN_USER = "Unknown"

def list_audit_log(db: Session, user: RequestUser) -> list[AuditLogOut]:
    # caller already checked audit:view
    org_ids = accessible_org_ids_for(user)

    q = (
        select(AuditLog, User.name)
        .outerjoin(User, User.id == AuditLog.user_id)
        .where(AuditLog.organization_id.in_(org_ids))
        .order_by(AuditLog.ts.desc(), AuditLog.id.desc())
    )
    rows = db.execute(q).all()
    return [
        AuditLogOut(
            id=log.id,
            action=log.action,
            entity_type=log.resource,
            entity_id=log.resource_id,
            user_id=log.user_id,
            user_name=name or UNKNOWN_USER,
            organization_id=log.organization_id,
            allowed=log.allowed,
            reason=log.reason,
            metadata=log.meta,
            created_at=log.ts,
        )
        for log, name in rows
    ]
