"""
Authentication models.

This module defines the account model used across the project:
- User: Custom user model with email-based authentication and a display name

Related files:
    - managers.py: Custom user manager for email-based creation
    - services.py: AuthService (registration) and UserDirectoryService

Security:
    - User passwords hashed with Django's configured password hasher
    - Email is the login identifier and is unique
"""

from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin
from django.db import models

from authentication.managers import UserManager


class User(AbstractBaseUser, PermissionsMixin):
    """
    Custom User model using email as the primary identifier.

    The chat system only reads users: it lists them in the directory and
    shows their name next to chats and messages.

    Fields:
        name: Display name shown to other users
        email: Primary identifier, unique, used for login
        is_active: Whether the user account is active
        is_staff: Whether the user can access Django admin
        created_at: When the user account was created
        updated_at: When the user record was last modified

    Usage:
        user = User.objects.create_user(
            email="user@example.com",
            password="securepassword",
            name="Jane Doe",
        )
    """

    name = models.CharField(
        max_length=255,
        help_text="User's display name",
    )

    email = models.EmailField(
        unique=True,
        max_length=254,
        help_text="User's email address (primary identifier)",
    )

    is_active = models.BooleanField(
        default=True,
        help_text="Whether this user account is active. Deselect instead of deleting.",
    )
    is_staff = models.BooleanField(
        default=False,
        help_text="Whether the user can access the admin site.",
    )

    created_at = models.DateTimeField(
        auto_now_add=True,
        help_text="When the user account was created",
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        help_text="When the user record was last modified",
    )

    USERNAME_FIELD = "email"
    EMAIL_FIELD = "email"
    REQUIRED_FIELDS = ["name"]

    objects = UserManager()

    class Meta:
        verbose_name = "user"
        verbose_name_plural = "users"
        ordering = ["name", "id"]

    def __str__(self):
        return self.email

    def get_full_name(self):
        """Return the display name, or the email when no name is set."""
        return self.name or self.email

    def get_short_name(self):
        """Return the first word of the name, or the email local part."""
        if self.name:
            return self.name.split()[0]
        return self.email.split("@")[0]
