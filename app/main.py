import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from sqlalchemy.orm import Session, sessionmaker

from app.audit.recorder import AuditRecorder, AuditStore
from app.audit.store import SqlAuditStore
from app.config import Settings, get_settings, warn_if_insecure
from app.db import SessionLocal, init_db
from app.logger import setup_logging
from app.routes.audit_log import router as audit_log_router
from app.routes.auth import router as auth_router
from app.routes.health import router as health_router
from app.routes.tasks import router as tasks_router

logger = logging.getLogger(__name__)

def create_app(
    settings: Settings | None = None,
    session_factory: sessionmaker[Session] | None = None,
    audit_store: AuditStore | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    session_factory = session_factory or SessionLocal

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(settings.log_level)
        warn_if_insecure(settings)
        init_db(session_factory.kw["bind"])
        logger.info("secure-task-api starting (env=%s)", settings.app_env)
        yield

    app = FastAPI(title="secure-task-api", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.session_factory = session_factory
    app.state.engine = session_factory.kw["bind"]
    if audit_store is None:
        audit_store = SqlAuditStore(session_factory)
    app.state.audit_recorder = AuditRecorder(audit_store)

    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(tasks_router)
    app.include_router(audit_log_router)
    return app

app = create_app()

def serve() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run("app.main:app", host=settings.app_host, port=settings.app_port)
