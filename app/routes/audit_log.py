from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.audit.queries import list_audit_log
from app.audit.route import AuditedRoute
from app.auth.context import RequestUser
from app.db import get_db
from app.models.enums import Permission
from app.rbac.deps import require_perm
from app.schemas.audit import AuditLogOut

router = APIRouter(prefix="/audit-log", tags=["audit-log"], route_class=AuditedRoute)

@router.get("", response_model=list[AuditLogOut])
def get_audit_log(
    user: RequestUser = Depends(require_perm(Permission.audit_view)),
    db: Session = Depends(get_db),
) -> list[AuditLogOut]:
    return list_audit_log(db, user)
