"""
Authorization policy for task mutations.

Admins may do anything to any task. Assignees may move their task
through its workflow (status and checklist) but not edit or delete it.
"""

from enum import Enum

from .models import Task


class TaskAction(Enum):
    UPDATE = "update"
    DELETE = "delete"
    UPDATE_STATUS = "update_status"
    UPDATE_CHECKLIST = "update_checklist"


ASSIGNEE_ACTIONS = frozenset({TaskAction.UPDATE_STATUS, TaskAction.UPDATE_CHECKLIST})


def is_admin(user) -> bool:
    return bool(getattr(user, 'is_admin', False))


def is_assignee(task: Task, user) -> bool:
    if user is None or user.pk is None:
        return False
    return task.assigned_to.filter(pk=user.pk).exists()


def can_mutate(task: Task, requester, action: TaskAction) -> bool:
    """Return True if ``requester`` may perform ``action`` on ``task``."""
    if is_admin(requester):
        return True
    if action in ASSIGNEE_ACTIONS:
        return is_assignee(task, requester)
    return False
