"""
Dashboard aggregation.

Both dashboards (global and per-user) are built from one pass over the
scoped tasks: ``tally_tasks`` folds (status, priority, due date) rows into
every count at once, so adding a chart never adds another table scan.
"""

import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Tuple

from django.db.models import QuerySet
from django.utils import timezone

from .checklist import COMPLETED, IN_PROGRESS, PENDING
from .models import Task

STATUS_BUCKETS = (PENDING, IN_PROGRESS, COMPLETED)
PRIORITY_BUCKETS = tuple(Task.Priority.values)
RECENT_TASKS_LIMIT = 10

TaskRow = Tuple[str, str, Optional[datetime]]


@dataclass
class DashboardTallies:
    total: int = 0
    overdue: int = 0
    by_status: Dict[str, int] = field(
        default_factory=lambda: dict.fromkeys(STATUS_BUCKETS, 0)
    )
    by_priority: Dict[str, int] = field(
        default_factory=lambda: dict.fromkeys(PRIORITY_BUCKETS, 0)
    )


def tally_tasks(rows: Iterable[TaskRow], now: datetime) -> DashboardTallies:
    """Fold task rows into totals, status/priority buckets and the overdue count."""
    tallies = DashboardTallies()
    for status, priority, due_date in rows:
        tallies.total += 1
        if status in tallies.by_status:
            tallies.by_status[status] += 1
        if priority in tallies.by_priority:
            tallies.by_priority[priority] += 1
        if status != COMPLETED and due_date is not None and due_date < now:
            tallies.overdue += 1
    return tallies


def scoped_tasks(user=None) -> QuerySet:
    """All tasks, or only those assigned to ``user``."""
    tasks = Task.objects.all()
    if user is None:
        return tasks
    return tasks.filter(assigned_to=user)


def recent_tasks(tasks: QuerySet, limit: int = RECENT_TASKS_LIMIT) -> List[Dict]:
    rows = tasks.order_by('-created_at', '-id').values(
        'id', 'title', 'status', 'priority', 'due_date', 'created_at'
    )[:limit]
    return [
        {
            'id': row['id'],
            'title': row['title'],
            'status': row['status'],
            'priority': row['priority'],
            'dueDate': row['due_date'],
            'createdAt': row['created_at'],
        }
        for row in rows
    ]


def build_dashboard(user=None, now: Optional[datetime] = None) -> Dict:
    """
    Build dashboard data, global when ``user`` is None.

    Returns:
        dict with statistics, charts (taskDistribution, taskPriorityLevels)
        and recentTasks
    """
    now = now or timezone.now()
    tasks = scoped_tasks(user)
    tallies = tally_tasks(
        tasks.values_list('status', 'priority', 'due_date').iterator(), now
    )

    distribution = {
        re.sub(r'\s+', '', status): tallies.by_status[status]
        for status in STATUS_BUCKETS
    }
    distribution['All'] = tallies.total

    return {
        'statistics': {
            'totalTasks': tallies.total,
            'pendingTasks': tallies.by_status[PENDING],
            'completedTasks': tallies.by_status[COMPLETED],
            'overdueTasks': tallies.overdue,
        },
        'charts': {
            'taskDistribution': distribution,
            'taskPriorityLevels': dict(tallies.by_priority),
        },
        'recentTasks': recent_tasks(tasks),
    }
