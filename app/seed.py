"""Demo data: a parent org with a child org, one user per role, a few tasks.

    python -m app.seed
"""
import logging
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.auth.passwords import hash_password
from app.config import get_settings
from app.models.enums import Role, TaskCategory, TaskStatus
from app.models.org import Organization
from app.models.task import Task
from app.models.user import User

logger = logging.getLogger(__name__)

DEMO_PASSWORD = "Password123!"

@dataclass
class SeedResult:
    parent_org_id: int
    child_org_id: int
    owner_id: int
    admin_id: int
    viewer_id: int
    child_admin_id: int

def get_or_create_org(db: Session, name: str, parent_id: int | None = None) -> Organization:
    o = db.scalar(select(Organization).where(Organization.name == name))
    if o is None:
        o = Organization(name=name, parent_id=parent_id)
        db.add(o)
        db.flush()
    return o

def get_or_create_user(
    db: Session, email: str, name: str, role: Role, org_id: int, password_hash: str
) -> User:
    email = email.lower().strip()
    u = db.scalar(select(User).where(User.email == email))
    if u is None:
        u = User(email=email, name=name, role=role, org_id=org_id, password_hash=password_hash)
        db.add(u)
        db.flush()
    else:
        if u.role != role or u.org_id != org_id:
            u.role = role
            u.org_id = org_id
            db.flush()
    return u

def get_or_create_task(db: Session, org_id: int, created_by: int, title: str, **fields) -> Task:
    t = db.scalar(select(Task).where(Task.org_id == org_id, Task.title == title))
    if t is None:
        t = Task(org_id=org_id, created_by=created_by, updated_by=created_by, title=title, **fields)
        db.add(t)
        db.flush()
    return t

def seed(db: Session, password: str = DEMO_PASSWORD, rounds: int = 12) -> SeedResult:
    pw = hash_password(password, rounds=rounds)

    org_a = get_or_create_org(db, "Org A")
    org_b = get_or_create_org(db, "Org B", parent_id=org_a.id)

    owner = get_or_create_user(db, "owner@example.com", "Owner User", Role.owner, org_a.id, pw)
    admin = get_or_create_user(db, "admin@example.com", "Admin User", Role.admin, org_a.id, pw)
    viewer = get_or_create_user(db, "viewer@example.com", "Viewer User", Role.viewer, org_a.id, pw)
    child = get_or_create_user(db, "child@example.com", "Child Org User", Role.admin, org_b.id, pw)

    get_or_create_task(
        db, org_a.id, owner.id, "Review Q4 Reports",
        description="Analyze quarterly performance metrics",
        category=TaskCategory.work, status=TaskStatus.in_progress, order_index=0,
    )
    get_or_create_task(
        db, org_a.id, admin.id, "Update onboarding docs",
        category=TaskCategory.work, status=TaskStatus.todo, order_index=1,
    )
    get_or_create_task(
        db, org_b.id, child.id, "Child org kickoff",
        category=TaskCategory.urgent, status=TaskStatus.todo, order_index=0,
    )

    db.commit()
    return SeedResult(
        parent_org_id=org_a.id,
        child_org_id=org_b.id,
        owner_id=owner.id,
        admin_id=admin.id,
        viewer_id=viewer.id,
        child_admin_id=child.id,
    )

def main() -> None:
    from app.db import SessionLocal, init_db
    from app.logger import setup_logging

    settings = get_settings()
    setup_logging(settings.log_level)
    init_db()
    with SessionLocal() as db:
        res = seed(db, rounds=settings.bcrypt_rounds)
    logger.info("seeded orgs %s (parent) and %s (child)", res.parent_org_id, res.child_org_id)
    logger.info("demo logins: owner@, admin@, viewer@, child@example.com / %s", DEMO_PASSWORD)

if __name__ == "__main__":
    main()
