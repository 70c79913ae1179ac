"""
Authentication services.

This module provides:
- AuthService: account creation used by the registration endpoint
- UserDirectoryService: read-only listing and lookup of other users

Related files:
    - models.py: User
    - views.py: RegisterView, UserViewSet

Security:
    - Passwords hashed with Django's configured hasher
    - The directory never returns the calling user
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from django.db.models import Q

from core.services import NOT_FOUND, BaseService, ServiceResult

if TYPE_CHECKING:
    from django.db.models import QuerySet

    from authentication.models import User

logger = logging.getLogger(__name__)


class AuthService:
    """
    Account creation logic shared by the registration endpoint and tests.

    Usage:
        from authentication.services import AuthService

        user = AuthService.create_user("jane@example.com", "s3cret!", name="Jane")
    """

    @staticmethod
    def create_user(email: str, password: str | None = None, **kwargs) -> User:
        """
        Create a new user.

        Args:
            email: User's email address
            password: Password (None leaves the account without a usable password)
            **kwargs: Additional user fields (name, ...)

        Returns:
            Created User instance

        Raises:
            ValueError: If a user with this email already exists
        """
        from authentication.models import User

        email = email.lower().strip()

        if User.objects.filter(email__iexact=email).exists():
            raise ValueError("A user with this email already exists")

        user = User.objects.create_user(email=email, password=password, **kwargs)

        logger.info(f"User created: {user.email}")
        return user


class UserDirectoryService(BaseService):
    """
    Read-only directory of registered users.

    Every lookup excludes the caller: the directory is the list of people
    the caller can start a chat with. The caller's own record is served by
    the current-user endpoint instead.

    Methods:
        list_users: Other users, optionally filtered by a search term
        get_user: A single other user by id
    """

    @classmethod
    def list_users(cls, caller: User, search: str | None = None) -> QuerySet[User]:
        """
        List users other than the caller, ordered by name.

        Args:
            caller: Authenticated user making the request
            search: Optional term matched case-insensitively as a substring
                of name or email. Blank terms are ignored.

        Returns:
            QuerySet of User ordered by name ascending
        """
        from authentication.models import User

        queryset = User.objects.exclude(pk=caller.pk)

        search = search.strip() if search else ""
        if search:
            queryset = queryset.filter(
                Q(name__icontains=search) | Q(email__icontains=search)
            )

        return queryset.order_by("name", "id")

    @classmethod
    def get_user(cls, caller: User, user_id: int) -> ServiceResult[User]:
        """
        Get another user by id.

        Args:
            caller: Authenticated user making the request
            user_id: Id of the user to fetch

        Returns:
            ServiceResult with User

        Error codes:
            NOT_FOUND: No such user, or user_id is the caller's own id
        """
        from authentication.models import User

        user = User.objects.exclude(pk=caller.pk).filter(pk=user_id).first()
        if user is None:
            return ServiceResult.failure("User not found", error_code=NOT_FOUND)

        return ServiceResult.success(user)
