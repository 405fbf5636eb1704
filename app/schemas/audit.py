from datetime import datetime
from typing import Any

from pydantic import BaseModel

class AuditLogOut(BaseModel):
    id: int
    action: str
    entity_type: str
    entity_id: int
    user_id: int
    user_name: str
    organization_id: int
    allowed: bool
    reason: str | None
    metadata: dict[str, Any] | None = None
    created_at: datetime
