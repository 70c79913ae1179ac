"""
Base service layer patterns for business logic encapsulation.

This module provides the two building blocks every domain service uses:
- ServiceResult: Standard result wrapper for consistent success/failure handling
- BaseService: Base class with logging and transaction helpers

Service Layer Philosophy:
    Views handle HTTP concerns, models handle data, services handle logic.
    Services receive the calling user explicitly; they never look it up
    from request or thread-local state.

Pattern Comparison:
    - ServiceResult: Use for expected failures (validation, missing rows,
      membership checks)
    - Exceptions: Use for unexpected failures (bugs, broken database)

Error Codes:
    Failures carry a machine-readable error_code. The codes below are shared
    across apps and map onto HTTP statuses through ServiceResult.status_code:

        VALIDATION_ERROR   422  bad or missing input, nothing was written
        NOT_FOUND          404  referenced row does not exist
        PERMISSION_DENIED  403  caller is known but not allowed
        STORAGE_ERROR      500  a transaction failed and was rolled back

Usage:
    from core.services import BaseService, ServiceResult

    class ChatService(BaseService):
        @classmethod
        def get_chat(cls, caller, chat_id) -> ServiceResult[Chat]:
            chat = Chat.objects.filter(pk=chat_id).first()
            if chat is None:
                return ServiceResult.failure("Chat not found", error_code="NOT_FOUND")
            return ServiceResult.success(chat)

    # In view
    result = ChatService.get_chat(request.user, pk)
    if not result:
        return Response(result.to_response(), status=result.status_code)
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Generic, TypeVar

from django.db import transaction

if TYPE_CHECKING:
    from collections.abc import Generator
    from typing import Any

T = TypeVar("T")

VALIDATION_ERROR = "VALIDATION_ERROR"
NOT_FOUND = "NOT_FOUND"
PERMISSION_DENIED = "PERMISSION_DENIED"
STORAGE_ERROR = "STORAGE_ERROR"

HTTP_STATUS_BY_ERROR_CODE = {
    VALIDATION_ERROR: 422,
    NOT_FOUND: 404,
    PERMISSION_DENIED: 403,
    STORAGE_ERROR: 500,
}


@dataclass
class ServiceResult(Generic[T]):
    """
    Standard result wrapper for service operations.

    Attributes:
        success: Whether the operation succeeded
        data: Result data if successful (None if failed)
        error: Error message if failed (None if successful)
        error_code: Machine-readable error code for client handling
        errors: Field-level errors for validation failures

    Usage:
        # Success case
        return ServiceResult.success(chat)

        # Failure case
        return ServiceResult.failure("Chat not found", "NOT_FOUND")

        # Validation errors with field details
        return ServiceResult.failure(
            "Invalid data",
            error_code="VALIDATION_ERROR",
            errors={"users": ["At least one user must be selected"]},
        )
    """

    success: bool
    data: T | None = None
    error: str | None = None
    error_code: str | None = None
    errors: dict[str, list[str]] | None = field(default=None)

    @classmethod
    def success(cls, data: T) -> ServiceResult[T]:
        """Create a successful result carrying ``data``."""
        return cls(success=True, data=data)

    @classmethod
    def failure(
        cls,
        error: str,
        error_code: str | None = None,
        errors: dict[str, list[str]] | None = None,
    ) -> ServiceResult[T]:
        """
        Create a failed result.

        Args:
            error: Human-readable error message
            error_code: Machine-readable error code for client handling
            errors: Field-level errors (for validation failures)
        """
        return cls(
            success=False,
            error=error,
            error_code=error_code,
            errors=errors,
        )

    @property
    def status_code(self) -> int:
        """
        HTTP status matching this result.

        200 for successes; failures use HTTP_STATUS_BY_ERROR_CODE and fall
        back to 400 for codes that are not listed there.
        """
        if self.success:
            return 200
        return HTTP_STATUS_BY_ERROR_CODE.get(self.error_code, 400)

    def to_response(self) -> dict[str, Any]:
        """
        Convert to API response format.

        Returns:
            Dict with success status and data or error details
        """
        if self.success:
            return {"success": True, "data": self.data}

        response: dict[str, Any] = {
            "success": False,
            "error": self.error,
        }
        if self.error_code:
            response["error_code"] = self.error_code
        if self.errors:
            response["errors"] = self.errors
        return response

    def __bool__(self) -> bool:
        return self.success


class BaseService:
    """
    Base class for service layer classes.

    Design Notes:
        - Use @classmethod (no instance state)
        - Use ServiceResult for expected failures
        - Raise exceptions for unexpected failures
    """

    @classmethod
    def get_logger(cls) -> logging.Logger:
        """
        Get logger for this service.

        The logger is named ``<module>.<ClassName>`` so it can be filtered
        per service in the LOGGING configuration.
        """
        return logging.getLogger(f"{cls.__module__}.{cls.__name__}")

    @classmethod
    @contextmanager
    def atomic(cls) -> Generator[None, None, None]:
        """
        Execute operations in a database transaction.

        Every write inside the block commits together or not at all. Nested
        use creates a savepoint.

        Example:
            with cls.atomic():
                chat = Chat.objects.create(chat_type=ChatType.GROUP)
                Membership.objects.create(chat=chat, user=caller)
                # If the membership insert fails, the chat row is rolled back
        """
        with transaction.atomic():
            yield

    @classmethod
    def validation_failure(
        cls,
        error: str,
        field_name: str | None = None,
    ) -> ServiceResult:
        """
        Build a VALIDATION_ERROR result, attaching ``error`` to ``field_name``.
        """
        errors = {field_name: [error]} if field_name else None
        return ServiceResult.failure(
            error,
            error_code=VALIDATION_ERROR,
            errors=errors,
        )
