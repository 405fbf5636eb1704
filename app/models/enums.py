from enum import Enum

class Role(str, Enum):
    owner = "owner"
    admin = "admin"
    viewer = "viewer"

class Permission(str, Enum):
    task_view = "task:view"
    task_create = "task:create"
    task_update = "task:update"
    task_delete = "task:delete"
    audit_view = "audit:view"

class TaskStatus(str, Enum):
    todo = "todo"
    in_progress = "in_progress"
    done = "done"

class TaskCategory(str, Enum):
    work = "work"
    personal = "personal"
    urgent = "urgent"
    low_priority = "low_priority"
