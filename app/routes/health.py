from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from app.db import db_ping, engine

router = APIRouter(tags=["health"])

@router.get("/")
def info() -> dict:
    return {
        "name": "secure-task-api",
        "status": "running",
        "endpoints": {
            "auth": ["POST /auth/login", "POST /auth/register", "GET /auth/me"],
            "tasks": ["GET /tasks", "GET /tasks/{id}", "POST /tasks", "PUT /tasks/{id}", "DELETE /tasks/{id}"],
            "audit_log": ["GET /audit-log"],
        },
    }

@router.get("/health")
def health() -> dict:
    return {"status": "ok"}

# readiness probe
@router.get("/ready")
def ready(request: Request):
    bind = getattr(request.app.state, "engine", None) or engine
    ok = db_ping(bind)
    body = {"status": "ok" if ok else "unready", "checks": {"db": ok}}

    # returns 503 when the database is unreachable
    return JSONResponse(status_code=200 if ok else 503, content=body)
