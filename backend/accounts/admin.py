from django.contrib import admin
from django.contrib.auth.admin import UserAdmin

from .models import User


@admin.register(User)
class TaskSyncUserAdmin(UserAdmin):
    list_display = ('username', 'name', 'email', 'role', 'is_active')
    list_filter = ('role', 'is_active')
    fieldsets = UserAdmin.fieldsets + (
        ('Profile', {'fields': ('name', 'profile_image_url', 'role')}),
    )
