"""
Read-side task representation with assignees expanded.

Assignee ids come from one query on the assignment join table and are
resolved to profile summaries with one directory lookup, however many
tasks are being serialized.
"""

from collections import defaultdict
from typing import Dict, Iterable, List

from accounts.directory import user_summaries

from .models import Task
from .serializers import TaskDetailSerializer


def assignee_ids_by_task(task_ids: Iterable[int]) -> Dict[int, List[int]]:
    """Map each task id to its assignee ids, in assignment order."""
    assignments = Task.assigned_to.through.objects.filter(
        task_id__in=list(task_ids)
    ).order_by('id').values_list('task_id', 'user_id')

    result = defaultdict(list)
    for task_id, user_id in assignments:
        result[task_id].append(user_id)
    return dict(result)


def task_read_models(tasks: Iterable[Task]) -> List[Dict]:
    tasks = list(tasks)
    assignments = assignee_ids_by_task(task.pk for task in tasks)
    directory = user_summaries(
        user_id for user_ids in assignments.values() for user_id in user_ids
    )
    context = {'assignments': assignments, 'directory': directory}
    return TaskDetailSerializer(tasks, many=True, context=context).data


def task_read_model(task: Task) -> Dict:
    return task_read_models([task])[0]
