from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from app.models.enums import Role

@dataclass(frozen=True)
class RequestUser:
    """Identity bound to one request. A read-only view over a User row."""

    user_id: int
    email: str
    role: Role
    organization_id: int
    parent_organization_id: int | None = None

def request_user_from_payload(payload: Mapping[str, Any]) -> RequestUser:
    """Bind a verified token payload to a RequestUser.

    Raises KeyError/ValueError on a malformed payload.
    """
    parent = payload.get("parentOrganizationId")
    return RequestUser(
        user_id=int(payload["sub"]),
        email=str(payload["email"]),
        role=Role(payload["role"]),
        organization_id=int(payload["organizationId"]),
        parent_organization_id=int(parent) if parent is not None else None,
    )
