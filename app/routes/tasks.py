from fastapi import APIRouter, Depends
from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from app.audit.route import AuditedRoute
from app.auth.context import RequestUser
from app.db import get_db
from app.errors import PermissionDenied, ResourceNotFound
from app.models.enums import Permission, TaskCategory, TaskStatus
from app.models.task import Task
from app.rbac.deps import require_perm
from app.rbac.scope import accessible_org_ids_for, can_modify_resource, enforce_org_scope
from app.schemas.tasks import SortDir, SortField, TaskCreateIn, TaskOut, TaskUpdateIn

router = APIRouter(prefix="/tasks", tags=["tasks"], route_class=AuditedRoute)

_SORT_COLUMNS = {
    "created_at": Task.created_at,
    "updated_at": Task.updated_at,
    "title": Task.title,
    "due_date": Task.due_date,
    "order": Task.order_index,
}

def _out(t: Task) -> TaskOut:
    return TaskOut(
        id=t.id,
        title=t.title,
        description=t.description,
        status=t.status,
        category=t.category,
        due_date=t.due_date,
        order=t.order_index,
        created_by=t.created_by,
        updated_by=t.updated_by,
        organization_id=t.org_id,
        created_at=t.created_at,
        updated_at=t.updated_at,
    )

def _get_task(db: Session, task_id: int) -> Task:
    t = db.get(Task, task_id)
    if t is None:
        raise ResourceNotFound("task not found")
    return t

@router.get("", response_model=list[TaskOut])
def list_tasks(
    status: TaskStatus | None = None,
    category: TaskCategory | None = None,
    search: str | None = None,
    sort_by: SortField = "order",
    sort_dir: SortDir = "asc",
    user: RequestUser = Depends(require_perm(Permission.task_view)),
    db: Session = Depends(get_db),
) -> list[TaskOut]:
    q = select(Task).where(Task.org_id.in_(accessible_org_ids_for(user)))

    if status is not None:
        q = q.where(Task.status == status)
    if category is not None:
        q = q.where(Task.category == category)
    if search:
        pattern = f"%{search}%"
        q = q.where(or_(Task.title.ilike(pattern), Task.description.ilike(pattern)))

    col = _SORT_COLUMNS[sort_by]
    q = q.order_by(col.desc() if sort_dir == "desc" else col.asc(), Task.id.asc())

    rows = db.scalars(q).all()
    return [_out(r) for r in rows]

@router.get("/{task_id}", response_model=TaskOut)
def get_task(
    task_id: int,
    user: RequestUser = Depends(require_perm(Permission.task_view)),
    db: Session = Depends(get_db),
) -> TaskOut:
    t = _get_task(db, task_id)
    enforce_org_scope(user, t.org_id)
    return _out(t)

@router.post("", response_model=TaskOut)
def create_task(
    payload: TaskCreateIn,
    user: RequestUser = Depends(require_perm(Permission.task_create)),
    db: Session = Depends(get_db),
) -> TaskOut:
    # tasks always land in the caller's own org
    enforce_org_scope(user, user.organization_id)

    t = Task(
        org_id=user.organization_id,
        title=payload.title,
        description=payload.description,
        status=payload.status,
        category=payload.category,
        due_date=payload.due_date,
        order_index=payload.order,
        created_by=user.user_id,
        updated_by=user.user_id,
    )
    db.add(t)
    db.commit()
    db.refresh(t)
    return _out(t)

@router.put("/{task_id}", response_model=TaskOut)
def update_task(
    task_id: int,
    payload: TaskUpdateIn,
    user: RequestUser = Depends(require_perm(Permission.task_update)),
    db: Session = Depends(get_db),
) -> TaskOut:
    t = _get_task(db, task_id)
    if not can_modify_resource(user, t.org_id, t.created_by):
        raise PermissionDenied("Access denied")

    changes = payload.model_dump(exclude_unset=True)
    if "title" in changes and payload.title is not None:
        t.title = payload.title
    if "description" in changes:
        t.description = payload.description
    if "status" in changes and payload.status is not None:
        t.status = payload.status
    if "category" in changes and payload.category is not None:
        t.category = payload.category
    if "due_date" in changes:
        t.due_date = payload.due_date
    if "order" in changes and payload.order is not None:
        t.order_index = payload.order

    t.updated_by = user.user_id
    db.add(t)
    db.commit()
    db.refresh(t)
    return _out(t)

@router.delete("/{task_id}")
def delete_task(
    task_id: int,
    user: RequestUser = Depends(require_perm(Permission.task_delete)),
    db: Session = Depends(get_db),
) -> dict:
    t = _get_task(db, task_id)
    if not can_modify_resource(user, t.org_id, t.created_by):
        raise PermissionDenied("Access denied")

    db.delete(t)
    db.commit()
    return {"deleted": True}
