from collections.abc import Iterable
from types import MappingProxyType

from app.models.enums import Permission, Role

_TASK_FULL = frozenset(
    {
        Permission.task_view,
        Permission.task_create,
        Permission.task_update,
        Permission.task_delete,
        Permission.audit_view,
    }
)

# owner and admin share a catalog entry; they differ only in can_modify_resource
ROLE_PERMISSIONS: MappingProxyType[Role, frozenset[Permission]] = MappingProxyType(
    {
        Role.viewer: frozenset({Permission.task_view}),
        Role.admin: _TASK_FULL,
        Role.owner: _TASK_FULL,
    }
)

def permissions_for(role: Role) -> frozenset[Permission]:
    return ROLE_PERMISSIONS.get(role, frozenset())

def has_permission(role: Role, permission: Permission) -> bool:
    return permission in permissions_for(role)

def has_any_permission(role: Role, permissions: Iterable[Permission]) -> bool:
    return any(has_permission(role, p) for p in permissions)

def has_all_permissions(role: Role, permissions: Iterable[Permission]) -> bool:
    return all(has_permission(role, p) for p in permissions)
