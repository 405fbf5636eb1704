from datetime import datetime, timedelta, timezone

import jwt

from app.config import Settings
from app.models.org import Organization
from app.models.user import User

def now_utc() -> datetime:
    return datetime.now(timezone.utc)

def build_payload(user: User, org: Organization | None) -> dict:
    payload = {
        # pyjwt wants a string subject
        "sub": str(user.id),
        "email": user.email,
        "role": user.role.value,
        "organizationId": user.org_id,
    }
    if org is not None and org.parent_id is not None:
        payload["parentOrganizationId"] = org.parent_id
    return payload

def issue_access_token(settings: Settings, user: User, org: Organization | None) -> str:
    iat = now_utc()
    exp = iat + timedelta(minutes=settings.jwt_expires_minutes)
    payload = build_payload(user, org)
    payload.update(
        {
            "iss": settings.jwt_issuer,
            "aud": settings.jwt_audience,
            "iat": int(iat.timestamp()),
            "exp": int(exp.timestamp()),
        }
    )
    return jwt.encode(payload, settings.jwt_secret, algorithm="HS256")

def decode_access_token(settings: Settings, token: str) -> dict:
    return jwt.decode(
        token,
        settings.jwt_secret,
        algorithms=["HS256"],
        audience=settings.jwt_audience,
        issuer=settings.jwt_issuer,
    )
