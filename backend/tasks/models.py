"""
Task Model for Task Sync.

This module defines the persisted task record. Checklist items and
attachments live in JSON columns; assignees are a many-to-many relation
to the user model.
"""

from typing import List

from django.conf import settings
from django.core.validators import MaxValueValidator
from django.db import models

from . import checklist
from .checklist import ChecklistItem


class Task(models.Model):
    """
    A unit of work assigned to one or more users.

    Attributes:
        title: Short task title
        description: Free-text details
        priority: Low, Medium or High
        status: Pending, In Progress or Completed
        due_date: Deadline used for overdue reporting (optional)
        assigned_to: Users working on the task
        created_by: User who created the task
        todo_checklist: JSON list of {text, completed} items
        progress: Percentage of completed checklist items (derived)
        attachments: JSON list of opaque references, usually URLs
    """

    class Priority(models.TextChoices):
        LOW = 'Low', 'Low'
        MEDIUM = 'Medium', 'Medium'
        HIGH = 'High', 'High'

    class Status(models.TextChoices):
        PENDING = checklist.PENDING, 'Pending'
        IN_PROGRESS = checklist.IN_PROGRESS, 'In Progress'
        COMPLETED = checklist.COMPLETED, 'Completed'

    title = models.CharField(max_length=255, help_text="Task title")
    description = models.TextField(blank=True, default='')
    priority = models.CharField(
        max_length=10,
        choices=Priority.choices,
        default=Priority.MEDIUM
    )
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.PENDING,
        db_index=True
    )
    due_date = models.DateTimeField(null=True, blank=True, help_text="Task due date (optional)")
    assigned_to = models.ManyToManyField(
        settings.AUTH_USER_MODEL,
        related_name='assigned_tasks',
        help_text="Users the task is assigned to"
    )
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True,
        on_delete=models.SET_NULL,
        related_name='created_tasks'
    )
    todo_checklist = models.JSONField(
        default=list,
        blank=True,
        help_text="List of {text, completed} checklist items"
    )
    progress = models.PositiveSmallIntegerField(
        default=0,
        validators=[MaxValueValidator(100)],
        help_text="Derived from the checklist, never set directly"
    )
    attachments = models.JSONField(default=list, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at', '-id']

    def __str__(self):
        return f"{self.title} ({self.status})"

    @property
    def checklist_items(self) -> List[ChecklistItem]:
        return checklist.parse_checklist(self.todo_checklist)

    @checklist_items.setter
    def checklist_items(self, items: List[ChecklistItem]) -> None:
        self.todo_checklist = checklist.checklist_to_json(items)

    @property
    def completed_count(self) -> int:
        return checklist.completed_count(self.checklist_items)
