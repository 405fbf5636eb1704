from fastapi import HTTPException
from starlette.exceptions import HTTPException as StarletteHTTPException

class AccessError(HTTPException):
    """Authorization-class failure.

    ``message`` is the full internal reason (kept for the audit trail and logs),
    ``detail`` is what the requester gets back.
    """

    status = 403
    default_message = "forbidden"

    def __init__(self, message: str | None = None, detail: str | None = None, headers: dict | None = None):
        self.message = message or self.default_message
        super().__init__(status_code=self.status, detail=detail or self.message, headers=headers)

class AuthenticationRequired(AccessError):
    status = 401
    default_message = "authentication required"

    def __init__(self, message: str | None = None):
        super().__init__(message, headers={"WWW-Authenticate": "Bearer"})

class PermissionDenied(AccessError):
    status = 403
    default_message = "forbidden"

class OrgScopeDenied(PermissionDenied):
    # org topology stays out of the response body
    def __init__(self, resource_org_id: int, accessible_org_ids: list[int]):
        self.resource_org_id = resource_org_id
        self.accessible_org_ids = list(accessible_org_ids)
        ids = ", ".join(str(i) for i in self.accessible_org_ids)
        super().__init__(
            f"Access denied: Resource org {resource_org_id} not in accessible orgs [{ids}]",
            detail="forbidden",
        )

class ResourceNotFound(HTTPException):
    def __init__(self, detail: str = "not found"):
        super().__init__(status_code=404, detail=detail)

def is_authorization_error(exc: BaseException) -> bool:
    if isinstance(exc, AccessError):
        return True
    return isinstance(exc, StarletteHTTPException) and exc.status_code in (401, 403)

def denial_reason(exc: BaseException) -> str:
    message = getattr(exc, "message", None)
    if message:
        return str(message)
    detail = getattr(exc, "detail", None)
    return str(detail) if detail else "Access denied"
