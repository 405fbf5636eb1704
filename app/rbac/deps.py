import logging

from fastapi import Depends

from app.auth.context import RequestUser
from app.auth.deps import get_current_user
from app.errors import PermissionDenied
from app.models.enums import Permission
from app.rbac.perms import has_any_permission

logger = logging.getLogger(__name__)

def require_perm(*permissions: Permission):
    """Dependency factory: the caller's role must hold at least one of ``permissions``."""
    if not permissions:
        raise RuntimeError("require_perm needs at least one permission")

    required = tuple(Permission(p) for p in permissions)

    def _checker(user: RequestUser = Depends(get_current_user)) -> RequestUser:
        if not has_any_permission(user.role, required):
            logger.debug("role %s lacks %s", user.role.value, [p.value for p in required])
            raise PermissionDenied("Forbidden resource")
        return user

    return _checker
