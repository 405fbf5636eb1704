import logging

import jwt
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.auth.context import RequestUser, request_user_from_payload
from app.auth.tokens import decode_access_token
from app.config import Settings, get_settings
from app.errors import AuthenticationRequired

logger = logging.getLogger(__name__)

bearer = HTTPBearer(auto_error=False)

def get_app_settings(request: Request) -> Settings:
    return getattr(request.app.state, "settings", None) or get_settings()

def get_current_user(
    request: Request,
    creds: HTTPAuthorizationCredentials | None = Depends(bearer),
    settings: Settings = Depends(get_app_settings),
) -> RequestUser:
    if creds is None or creds.scheme.lower() != "bearer":
        raise AuthenticationRequired("missing bearer token")

    try:
        payload = decode_access_token(settings, creds.credentials)
    except jwt.PyJWTError as e:
        logger.debug("rejected token: %s", e)
        raise AuthenticationRequired("invalid token")

    try:
        user = request_user_from_payload(payload)
    except (KeyError, ValueError, TypeError):
        raise AuthenticationRequired("invalid token payload")

    # picked up by the audit route once the handler finishes
    request.state.user = user
    return user
