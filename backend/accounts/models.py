"""
User model for Task Sync.

Extends Django's built-in user with the profile fields the frontend shows
next to every assignee and the role used for authorization.
"""

from django.contrib.auth.models import AbstractUser
from django.db import models


class User(AbstractUser):
    """
    Application user.

    Attributes:
        name: Display name shown on task cards
        profile_image_url: Opaque avatar reference (usually a URL)
        role: 'admin' users see and manage every task; 'member' users
              only work on tasks assigned to them. Superusers count as
              admins regardless of role
    """

    class Role(models.TextChoices):
        ADMIN = 'admin', 'Admin'
        MEMBER = 'member', 'Member'

    name = models.CharField(max_length=150, blank=True)
    profile_image_url = models.CharField(max_length=2048, blank=True, default='')
    role = models.CharField(max_length=10, choices=Role.choices, default=Role.MEMBER)

    def __str__(self):
        return f"{self.display_name} ({self.role})"

    @property
    def display_name(self) -> str:
        return self.name or self.get_username()

    @property
    def is_admin(self) -> bool:
        return self.is_superuser or self.role == self.Role.ADMIN
