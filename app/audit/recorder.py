"""Audit trail for authorization-sensitive requests.

Every request under the task or audit-log surface produces exactly one
AuditEntry: allowed when the handler returns, denied when it fails with an
authorization-class error. Other failures (not found, validation) are not
recorded. A failing audit write is logged and dropped, never surfaced.
"""
from __future__ import annotations

import logging
import re
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Protocol, TypeVar, Union

from starlette.concurrency import run_in_threadpool

from app.auth.context import RequestUser
from app.errors import denial_reason, is_authorization_error

logger = logging.getLogger(__name__)

T = TypeVar("T")

UserSource = Union[RequestUser, None, Callable[[], Union[RequestUser, None]]]

_ACTIONS = {
    "GET": "READ",
    "POST": "CREATE",
    "PUT": "UPDATE",
    "PATCH": "UPDATE",
    "DELETE": "DELETE",
}

# /tasks/123 or /tasks/123?x=1
_TRAILING_ID = re.compile(r"/(\d+)(?:\?|$)")

@dataclass(frozen=True)
class AuditEntry:
    ts: datetime
    user_id: int
    organization_id: int
    action: str
    resource: str
    resource_id: int
    allowed: bool
    reason: str | None
    meta: dict[str, Any] = field(default_factory=dict)

class AuditStore(Protocol):
    def add(self, entry: AuditEntry) -> None: ...

def action_for_method(method: str) -> str:
    return _ACTIONS.get(method.upper(), method)

def _strip_query(path: str) -> str:
    return path.split("?", 1)[0]

def resource_for_path(path: str) -> str:
    path = _strip_query(path)
    if "tasks" in path:
        return "Task"
    if "audit-log" in path:
        return "AuditLog"
    return "Unknown"

def resource_id_for_path(path: str) -> int | None:
    m = _TRAILING_ID.search(_strip_query(path))
    return int(m.group(1)) if m else None

def is_audited_path(path: str) -> bool:
    # the query string never decides what gets audited
    path = _strip_query(path)
    return "/tasks" in path or "/audit-log" in path

def _elapsed_ms(started: float) -> int:
    return int((time.perf_counter() - started) * 1000)

class AuditRecorder:
    def __init__(self, store: AuditStore):
        self.store = store

    async def audit(
        self,
        method: str,
        path: str,
        user: UserSource,
        handler: Callable[[], Awaitable[T]],
    ) -> T:
        """Run ``handler`` and record its authorization outcome.

        ``user`` may be a callable; it is resolved after the handler ran, since
        route handlers only learn who is calling while they execute.
        """
        if not is_audited_path(path):
            return await handler()

        started = time.perf_counter()
        try:
            result = await handler()
        except Exception as exc:
            if is_authorization_error(exc):
                actor = _resolve(user)
                if actor is not None:
                    meta = {
                        "method": method,
                        "path": path,
                        "duration_ms": _elapsed_ms(started),
                        "error_type": type(exc).__name__,
                    }
                    await self._write(actor, method, path, False, denial_reason(exc), meta)
            raise

        actor = _resolve(user)
        if actor is not None:
            meta = {"method": method, "path": path, "duration_ms": _elapsed_ms(started)}
            await self._write(actor, method, path, True, None, meta)
        return result

    async def _write(
        self,
        actor: RequestUser,
        method: str,
        path: str,
        allowed: bool,
        reason: str | None,
        meta: dict[str, Any],
    ) -> None:
        entry = AuditEntry(
            ts=datetime.now(timezone.utc),
            user_id=actor.user_id,
            organization_id=actor.organization_id,
            action=action_for_method(method),
            resource=resource_for_path(path),
            resource_id=resource_id_for_path(path) or 0,
            allowed=allowed,
            reason=reason,
            meta=meta,
        )
        try:
            await run_in_threadpool(self.store.add, entry)
        except Exception:
            logger.exception("failed to write audit entry for %s %s", method, path)

def _resolve(user: UserSource) -> RequestUser | None:
    if callable(user):
        return user()
    return user
