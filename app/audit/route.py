from collections.abc import Callable, Coroutine
from typing import Any

from fastapi import Request, Response
from fastapi.routing import APIRoute

from app.audit.recorder import AuditRecorder

def request_path(request: Request) -> str:
    path = request.url.path
    if request.url.query:
        path = f"{path}?{request.url.query}"
    return path

class AuditedRoute(APIRoute):
    """Route class that runs every handler inside the app's AuditRecorder."""

    def get_route_handler(self) -> Callable[[Request], Coroutine[Any, Any, Response]]:
        route_handler = super().get_route_handler()

        async def audited_handler(request: Request) -> Response:
            recorder: AuditRecorder | None = getattr(request.app.state, "audit_recorder", None)
            if recorder is None:
                return await route_handler(request)

            return await recorder.audit(
                method=request.method,
                path=request_path(request),
                user=lambda: getattr(request.state, "user", None),
                handler=lambda: route_handler(request),
            )

        return audited_handler
