"""
URL configuration for the tasks app.
"""

from django.urls import path
from . import views

urlpatterns = [
    path('tasks/', views.task_collection, name='task-list'),
    path('tasks/<int:task_id>/', views.task_detail, name='task-detail'),
    path('tasks/<int:task_id>/status/', views.update_task_status, name='task-status'),
    path('tasks/<int:task_id>/checklist/', views.update_task_checklist, name='task-checklist'),
    path('dashboard/', views.dashboard, name='dashboard'),
    path('dashboard/user/', views.user_dashboard, name='user-dashboard'),
]
