from __future__ import annotations

import hashlib
import logging

from fastapi import Depends, HTTPException, Request

from app.auth.deps import get_app_settings
from app.config import Settings
from app.redis_client import redis_client

logger = logging.getLogger(__name__)

def _hash(s: str) -> str:
    return hashlib.sha256(s.encode("utf-8")).hexdigest()[:24]

# fixed-window limiter using redis INCR + EXPIRE
def rate_limit(name: str, limit_setting: str, window_seconds: int):
    async def _dep(request: Request, settings: Settings = Depends(get_app_settings)) -> None:
        if not settings.rate_limit_enabled:
            return

        limit_per_window = int(getattr(settings, limit_setting))
        ip = (request.client.host if request.client else "unknown").strip()
        key = f"rl:{name}:{_hash(ip)}"

        try:
            pipe = redis_client.pipeline()
            pipe.incr(key)
            pipe.expire(key, window_seconds, nx=True)
            count, _ = pipe.execute()
        except Exception:
            # fail-open if redis is down
            logger.warning("rate limiter unavailable for %s", name, exc_info=True)
            return

        if int(count) > limit_per_window:
            raise HTTPException(status_code=429, detail="rate_limited")

    return _dep
