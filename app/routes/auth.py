from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.audit.route import AuditedRoute
from app.auth.context import RequestUser
from app.auth.deps import get_app_settings, get_current_user
from app.auth.passwords import hash_password, verify_password
from app.auth.tokens import issue_access_token
from app.config import Settings
from app.db import get_db
from app.errors import AuthenticationRequired, PermissionDenied
from app.models.enums import Permission, Role
from app.models.org import Organization
from app.models.user import User
from app.ratelimit import rate_limit
from app.rbac.deps import require_perm
from app.rbac.scope import enforce_org_scope
from app.schemas.auth import AccessTokenOut, LoginIn, MeOut, RegisterIn

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"], route_class=AuditedRoute)

@router.post("/login", response_model=AccessTokenOut)
def login(
    payload: LoginIn,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
    _: None = Depends(rate_limit("auth:login", "rate_limit_login_per_min", window_seconds=60)),
) -> AccessTokenOut:
    email = payload.email.lower().strip()

    user = db.scalar(select(User).where(User.email == email))
    if user is None or not verify_password(payload.password, user.password_hash):
        raise AuthenticationRequired("Invalid credentials")

    org = db.get(Organization, user.org_id)
    return AccessTokenOut(access_token=issue_access_token(settings, user, org))

@router.post("/register", response_model=AccessTokenOut)
def register(
    payload: RegisterIn,
    caller: RequestUser = Depends(
        require_perm(Permission.task_create, Permission.task_delete, Permission.audit_view)
    ),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> AccessTokenOut:
    # new accounts stay inside the caller's org scope
    enforce_org_scope(caller, payload.organization_id)

    # only an owner may mint another owner
    if payload.role == Role.owner and caller.role != Role.owner:
        raise PermissionDenied("Only an owner can register an owner")

    email = payload.email.lower().strip()

    if db.scalar(select(User).where(User.email == email)) is not None:
        raise HTTPException(status_code=409, detail="user with this email already exists")

    org = db.get(Organization, payload.organization_id)
    if org is None:
        raise HTTPException(status_code=400, detail="invalid organization")

    user = User(
        email=email,
        password_hash=hash_password(payload.password, rounds=settings.bcrypt_rounds),
        name=payload.name,
        role=payload.role,
        org_id=org.id,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("registered user %s in org %s as %s", user.id, org.id, user.role.value)

    return AccessTokenOut(access_token=issue_access_token(settings, user, org))

@router.get("/me", response_model=MeOut)
def me(user: RequestUser = Depends(get_current_user)) -> MeOut:
    return MeOut(
        id=user.user_id,
        email=user.email,
        role=user.role,
        organization_id=user.organization_id,
        parent_organization_id=user.parent_organization_id,
    )
