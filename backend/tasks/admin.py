from django import forms
from django.contrib import admin

from .checklist import checklist_to_json, parse_checklist
from .exceptions import InvalidInput
from .models import Task
from .services import apply_checklist


class TaskAdminForm(forms.ModelForm):
    class Meta:
        model = Task
        fields = '__all__'

    def clean_todo_checklist(self):
        try:
            items = parse_checklist(self.cleaned_data.get('todo_checklist'))
        except InvalidInput as exc:
            raise forms.ValidationError(exc.message)
        return checklist_to_json(items)


@admin.register(Task)
class TaskAdmin(admin.ModelAdmin):
    """Status and progress follow the checklist; neither is edited directly."""

    form = TaskAdminForm
    list_display = ('title', 'status', 'priority', 'progress', 'due_date', 'created_by', 'created_at')
    list_filter = ('status', 'priority')
    search_fields = ('title', 'description')
    filter_horizontal = ('assigned_to',)
    readonly_fields = ('status', 'progress', 'created_at', 'updated_at')

    def save_model(self, request, obj, form, change):
        apply_checklist(obj, obj.checklist_items)
        super().save_model(request, obj, form, change)
