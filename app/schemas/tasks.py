from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from app.models.enums import TaskCategory, TaskStatus

class TaskCreateIn(BaseModel):
    title: str = Field(min_length=1, max_length=300)
    description: str | None = None
    status: TaskStatus = TaskStatus.todo
    category: TaskCategory = TaskCategory.work
    due_date: datetime | None = None
    order: int = 0

class TaskUpdateIn(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=300)
    description: str | None = None
    status: TaskStatus | None = None
    category: TaskCategory | None = None
    due_date: datetime | None = None
    order: int | None = None

class TaskOut(BaseModel):
    id: int
    title: str
    description: str | None
    status: TaskStatus
    category: TaskCategory
    due_date: datetime | None
    order: int
    created_by: int
    updated_by: int | None
    organization_id: int
    created_at: datetime
    updated_at: datetime

SortField = Literal["created_at", "updated_at", "title", "due_date", "order"]
SortDir = Literal["asc", "desc"]
