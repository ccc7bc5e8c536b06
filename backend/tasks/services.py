"""
Task service: every read and write on tasks goes through here.

Views stay thin: they validate the request shape, call one function from
this module and serialize the result. Derived fields (progress, status,
completed count) and authorization are decided here.

Rules:
- progress is always recomputed from the checklist
- replacing the checklist derives the status from the new progress
- forcing the status to Completed completes every checklist item
- admins may mutate any task; assignees may only change status and checklist
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from django.db import transaction
from django.db.models import Count, Q, QuerySet

from accounts.directory import existing_user_ids

from .checklist import (
    COMPLETED,
    ChecklistItem,
    complete_all,
    compute_progress,
    derive_status,
    parse_checklist,
)
from .exceptions import Forbidden, InvalidInput, TaskNotFound
from .models import Task
from .permissions import TaskAction, can_mutate, is_admin

logger = logging.getLogger(__name__)

ASSIGNED_TO_MESSAGE = "assignedTo must be an array of user IDs"

# Fields copied verbatim by update_task; the rest get dedicated handling.
PLAIN_FIELDS = ('title', 'description', 'priority', 'due_date', 'attachments')

_MISSING = object()


# ==================== Results ====================

@dataclass
class StatusSummary:
    """Status counts shown above the task list."""
    all: int = 0
    pending_tasks: int = 0
    in_progress_tasks: int = 0
    completed_tasks: int = 0

    def to_dict(self) -> Dict:
        return {
            'all': self.all,
            'pendingTasks': self.pending_tasks,
            'inProgressTasks': self.in_progress_tasks,
            'completedTasks': self.completed_tasks,
        }


@dataclass
class TaskListing:
    tasks: List[Task]
    status_summary: StatusSummary


# ==================== Helpers ====================

def _load(task_id) -> Task:
    try:
        return Task.objects.get(pk=task_id)
    except (Task.DoesNotExist, ValueError, TypeError):
        raise TaskNotFound()


def _authorize(task: Task, requester, action: TaskAction) -> None:
    if not can_mutate(task, requester, action):
        logger.warning(
            "User %s denied %s on task %s",
            getattr(requester, 'pk', None), action.value, task.pk
        )
        raise Forbidden()


def _clean_assignees(value: Any) -> List[int]:
    """Validate assignedTo into a de-duplicated list of existing user ids."""
    if not isinstance(value, (list, tuple)):
        raise InvalidInput(ASSIGNED_TO_MESSAGE)
    if not value:
        raise InvalidInput("assignedTo must contain at least one user ID")

    ids = []
    for raw in value:
        if isinstance(raw, bool):
            raise InvalidInput(ASSIGNED_TO_MESSAGE)
        if isinstance(raw, int):
            user_id = raw
        elif isinstance(raw, str) and raw.strip().isdigit():
            user_id = int(raw.strip())
        else:
            raise InvalidInput(ASSIGNED_TO_MESSAGE)
        if user_id not in ids:
            ids.append(user_id)

    unknown = set(ids) - existing_user_ids(ids)
    if unknown:
        raise InvalidInput(f"Unknown user IDs in assignedTo: {sorted(unknown)}")
    return ids


def _clean_priority(value: Any) -> str:
    if value not in Task.Priority.values:
        raise InvalidInput(
            f"Invalid priority: {value}. Valid options: {list(Task.Priority.values)}"
        )
    return value


def apply_checklist(task: Task, items: List[ChecklistItem]) -> None:
    """Store ``items`` on ``task`` and recompute progress and status from them."""
    task.checklist_items = items
    task.progress = compute_progress(items)
    task.status = derive_status(task.progress)


def _apply_status(task: Task, new_status: str) -> None:
    if new_status not in Task.Status.values:
        raise InvalidInput(
            f"Invalid status: {new_status}. Valid options: {list(Task.Status.values)}"
        )

    items = task.checklist_items
    if new_status == COMPLETED:
        task.checklist_items = complete_all(items)
        task.progress = 100
    else:
        progress = compute_progress(items)
        if progress == 100:
            raise InvalidInput(
                "Every checklist item is completed; uncheck an item to reopen the task"
            )
        task.progress = progress
    task.status = new_status


# ==================== Queries ====================

def visible_tasks(requester) -> QuerySet:
    """Tasks the requester may list: everything for admins, else their assignments."""
    tasks = Task.objects.all()
    if is_admin(requester):
        return tasks
    return tasks.filter(assigned_to=requester)


def list_tasks(requester, status: Optional[str] = None) -> TaskListing:
    """
    List visible tasks, optionally filtered by exact status.

    ``all`` in the summary counts the whole visible scope; the per-status
    counts are taken after the status filter, so filtering by one status
    zeroes the other two.
    """
    scoped = visible_tasks(requester)
    filtered = scoped.filter(status=status) if status else scoped

    counts = filtered.aggregate(
        pending=Count('pk', filter=Q(status=Task.Status.PENDING)),
        in_progress=Count('pk', filter=Q(status=Task.Status.IN_PROGRESS)),
        completed=Count('pk', filter=Q(status=Task.Status.COMPLETED)),
    )
    summary = StatusSummary(
        all=scoped.count(),
        pending_tasks=counts['pending'],
        in_progress_tasks=counts['in_progress'],
        completed_tasks=counts['completed'],
    )
    return TaskListing(tasks=list(filtered), status_summary=summary)


def get_task(task_id) -> Task:
    return _load(task_id)


# ==================== Mutations ====================

def create_task(
    *,
    title: str,
    created_by,
    assigned_to: Any,
    description: str = '',
    priority: Optional[str] = None,
    due_date=None,
    attachments: Optional[List[str]] = None,
    todo_checklist: Any = None,
) -> Task:
    """
    Create a task owned by ``created_by``.

    Status starts from the supplied checklist's progress, so a new task
    with nothing checked is Pending.
    """
    assignee_ids = _clean_assignees(assigned_to)
    items = parse_checklist(todo_checklist)

    task = Task(
        title=title,
        description=description or '',
        priority=_clean_priority(priority) if priority else Task.Priority.MEDIUM,
        due_date=due_date,
        attachments=list(attachments or []),
        created_by=created_by,
    )
    apply_checklist(task, items)

    with transaction.atomic():
        task.save()
        task.assigned_to.set(assignee_ids)

    logger.info(
        "Task %s created by user %s (assignees=%s, progress=%s)",
        task.pk, getattr(created_by, 'pk', None), assignee_ids, task.progress
    )
    return task


def update_task(task_id, changes: Dict[str, Any], requester) -> Task:
    """
    Merge ``changes`` onto the task (last write wins).

    A supplied checklist recomputes progress and status. A supplied status
    without a checklist follows the same rules as update_task_status.
    """
    task = _load(task_id)
    _authorize(task, requester, TaskAction.UPDATE)

    changes = dict(changes)
    assignee_ids = None
    if 'assigned_to' in changes:
        assignee_ids = _clean_assignees(changes.pop('assigned_to'))
    raw_checklist = changes.pop('todo_checklist', _MISSING)
    new_status = changes.pop('status', None)

    for field_name, value in changes.items():
        if field_name not in PLAIN_FIELDS:
            raise InvalidInput(f"Field {field_name} cannot be updated")
        if field_name == 'priority':
            value = _clean_priority(value)
        setattr(task, field_name, value)

    if raw_checklist is not _MISSING:
        apply_checklist(task, parse_checklist(raw_checklist))
    elif new_status:
        _apply_status(task, new_status)

    with transaction.atomic():
        task.save()
        if assignee_ids is not None:
            task.assigned_to.set(assignee_ids)

    logger.info("Task %s updated by user %s", task.pk, requester.pk)
    return task


def delete_task(task_id, requester) -> None:
    task = _load(task_id)
    _authorize(task, requester, TaskAction.DELETE)
    pk = task.pk
    task.delete()
    logger.info("Task %s deleted by user %s", pk, requester.pk)


def update_task_status(task_id, new_status: Optional[str], requester) -> Task:
    """
    Set the status directly. Completed also completes the whole checklist.
    A missing status leaves the task as it is.
    """
    task = _load(task_id)
    _authorize(task, requester, TaskAction.UPDATE_STATUS)

    if new_status:
        _apply_status(task, new_status)

    task.save()
    logger.info("Task %s status set to %s by user %s", task.pk, task.status, requester.pk)
    return task


def update_task_checklist(task_id, new_checklist: Any, requester) -> Task:
    """
    Replace the checklist wholesale and derive progress and status from it.

    Returns a freshly read copy of the task.
    """
    task = _load(task_id)
    _authorize(task, requester, TaskAction.UPDATE_CHECKLIST)

    if new_checklist is None:
        raise InvalidInput("todoChecklist is required")
    apply_checklist(task, parse_checklist(new_checklist))

    task.save()
    logger.info(
        "Task %s checklist updated by user %s (progress=%s, status=%s)",
        task.pk, requester.pk, task.progress, task.status
    )
    return _load(task.pk)
