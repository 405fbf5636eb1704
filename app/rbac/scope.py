"""Organization scoping and the resource access policy.

Read access is pure org scoping. Write access layers role and ownership on top:

- viewer: never
- owner: anything inside the accessible orgs
- admin: only resources they created, inside the accessible orgs
"""
from __future__ import annotations

import logging

from app.auth.context import RequestUser
from app.errors import OrgScopeDenied
from app.models.enums import Role

logger = logging.getLogger(__name__)

def accessible_org_ids(
    organization_id: int,
    parent_organization_id: int | None = None,
    role: Role | None = None,
) -> list[int]:
    """Org ids a user may read from.

    An owner whose parent_organization_id equals their own org sits at a parent
    org root. Child org enumeration for that case is not implemented, so every
    branch resolves to the user's own org only.
    """
    if role == Role.owner and parent_organization_id == organization_id:
        # extension point: [organization_id, *child_org_ids]
        return [organization_id]

    return [organization_id]

def accessible_org_ids_for(user: RequestUser) -> list[int]:
    return accessible_org_ids(user.organization_id, user.parent_organization_id, user.role)

def can_access_resource(user: RequestUser, resource_org_id: int) -> bool:
    return resource_org_id in accessible_org_ids_for(user)

def can_modify_resource(
    user: RequestUser,
    resource_org_id: int,
    resource_owner_id: int | None = None,
) -> bool:
    if user.role == Role.viewer:
        return False

    if resource_org_id not in accessible_org_ids_for(user):
        return False

    if user.role == Role.owner:
        return True

    # admins may not touch each other's (or the owner's) resources
    if user.role == Role.admin:
        return resource_owner_id is not None and resource_owner_id == user.user_id

    return False

def enforce_org_scope(user: RequestUser, resource_org_id: int) -> None:
    org_ids = accessible_org_ids_for(user)
    if resource_org_id not in org_ids:
        logger.debug("org scope denied user=%s org=%s accessible=%s", user.user_id, resource_org_id, org_ids)
        raise OrgScopeDenied(resource_org_id, org_ids)
