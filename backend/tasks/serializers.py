"""
Serializers for the Task model.

This module validates incoming task payloads and shapes task responses.
The API speaks camelCase (``dueDate``, ``todoChecklist`` ...) while the
model uses snake_case; ``source=`` bridges the two.

``assignedTo`` is deliberately absent from the input serializers: the task
service validates it so the same rules apply to every caller.
"""

from typing import Dict, List

from drf_spectacular.utils import extend_schema_field
from rest_framework import serializers

from .models import Task


class ChecklistItemSerializer(serializers.Serializer):
    """A single {text, completed} checklist entry."""

    text = serializers.CharField(max_length=500)
    completed = serializers.BooleanField(default=False)


class AssigneeSerializer(serializers.Serializer):
    """Profile summary of an assignee (documentation only)."""

    id = serializers.IntegerField()
    name = serializers.CharField()
    email = serializers.EmailField()
    profileImageUrl = serializers.CharField()


class TaskCreateSerializer(serializers.Serializer):
    """
    Serializer for validating a new task.

    Status and progress are not accepted: both follow from the checklist.
    """

    title = serializers.CharField(max_length=255)
    description = serializers.CharField(required=False, allow_blank=True)
    priority = serializers.ChoiceField(choices=Task.Priority.choices, required=False)
    dueDate = serializers.DateTimeField(source='due_date', required=False, allow_null=True)
    attachments = serializers.ListField(
        child=serializers.CharField(max_length=2048),
        required=False
    )
    todoChecklist = serializers.ListField(
        source='todo_checklist',
        child=ChecklistItemSerializer(),
        required=False
    )

    def validate_title(self, value):
        """Ensure title is not empty or just whitespace."""
        if not value or not value.strip():
            raise serializers.ValidationError("Title cannot be empty")
        return value.strip()


class TaskUpdateSerializer(TaskCreateSerializer):
    """Partial task update; admins may also set the status directly."""

    status = serializers.ChoiceField(choices=Task.Status.choices, required=False)


class TaskStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(
        choices=Task.Status.choices,
        required=False,
        allow_null=True
    )


class TaskChecklistSerializer(serializers.Serializer):
    todoChecklist = serializers.ListField(
        source='todo_checklist',
        child=ChecklistItemSerializer(),
        allow_empty=True
    )


class TaskSerializer(serializers.ModelSerializer):
    """
    Task output with assignees as plain user ids.
    """

    dueDate = serializers.DateTimeField(source='due_date', allow_null=True)
    assignedTo = serializers.SerializerMethodField()
    createdBy = serializers.PrimaryKeyRelatedField(source='created_by', read_only=True)
    todoChecklist = ChecklistItemSerializer(source='todo_checklist', many=True)
    completedCount = serializers.IntegerField(source='completed_count')
    createdAt = serializers.DateTimeField(source='created_at')
    updatedAt = serializers.DateTimeField(source='updated_at')

    class Meta:
        model = Task
        fields = [
            'id', 'title', 'description', 'priority', 'status', 'dueDate',
            'assignedTo', 'createdBy', 'todoChecklist', 'progress',
            'completedCount', 'attachments', 'createdAt', 'updatedAt',
        ]

    @extend_schema_field(serializers.ListField(child=serializers.IntegerField()))
    def get_assignedTo(self, task: Task) -> List[int]:
        return list(
            Task.assigned_to.through.objects.filter(task_id=task.pk)
            .order_by('id')
            .values_list('user_id', flat=True)
        )


class TaskDetailSerializer(TaskSerializer):
    """
    Task output with assignees expanded to profile summaries.

    Expects ``assignments`` (task id -> user ids) and ``directory``
    (user id -> summary) in the serializer context; see read_models.
    """

    @extend_schema_field(AssigneeSerializer(many=True))
    def get_assignedTo(self, task: Task) -> List[Dict]:
        user_ids = self.context['assignments'].get(task.pk, [])
        directory = self.context['directory']
        return [directory[user_id] for user_id in user_ids if user_id in directory]
