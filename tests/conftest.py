import pytest
from fastapi.testclient import TestClient
from sqlalchemy import select
from sqlalchemy.orm import Session, sessionmaker

from app.config import Settings
from app.db import init_db, make_engine
from app.main import create_app
from app.models.audit_log import AuditLog
from app.seed import SeedResult, seed

TEST_PASSWORD = "Password123!"

@pytest.fixture()
def settings() -> Settings:
    return Settings(
        _env_file=None,
        jwt_secret="test-secret",
        bcrypt_rounds=4,
        rate_limit_enabled=False,
    )

@pytest.fixture()
def session_factory(tmp_path) -> sessionmaker[Session]:
    engine = make_engine(f"sqlite:///{tmp_path / 'test.db'}")
    init_db(engine)
    factory = sessionmaker(bind=engine, autoflush=False, autocommit=False)
    try:
        yield factory
    finally:
        engine.dispose()

@pytest.fixture()
def db_session(session_factory) -> Session:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()

@pytest.fixture()
def seeded(db_session: Session, settings: Settings) -> SeedResult:
    return seed(db_session, password=TEST_PASSWORD, rounds=settings.bcrypt_rounds)

@pytest.fixture()
def client(settings: Settings, session_factory) -> TestClient:
    app = create_app(settings=settings, session_factory=session_factory)
    return TestClient(app)

def _login(client, email: str, password: str = TEST_PASSWORD) -> str:
    r = client.post("/auth/login", json={"email": email, "password": password})
    assert r.status_code == 200, r.text
    return r.json()["access_token"]

@pytest.fixture()
def audit_rows(session_factory):
    def _rows() -> list[AuditLog]:
        # fresh session so rows written by the app are visible
        with session_factory() as db:
            return list(db.scalars(select(AuditLog).order_by(AuditLog.id)).all())

    return _rows

@pytest.fixture()
def owner_jwt(client, seeded) -> str:
    return _login(client, "owner@example.com")

@pytest.fixture()
def admin_jwt(client, seeded) -> str:
    return _login(client, "admin@example.com")

@pytest.fixture()
def viewer_jwt(client, seeded) -> str:
    return _login(client, "viewer@example.com")

@pytest.fixture()
def child_jwt(client, seeded) -> str:
    return _login(client, "child@example.com")
