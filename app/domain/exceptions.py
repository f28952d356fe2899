"""Domain exceptions for the Workdesk application.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers.

Every exception is raised before any store write, so a failed operation
never leaves a partially updated task behind.
"""

from typing import Any


class WorkdeskException(Exception):
    """Base exception for all Workdesk application errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON body used by the HTTP exception handler."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(WorkdeskException):
    """Raised when input validation fails (e.g. missing title or deadline)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthenticationException(WorkdeskException):
    """Raised when authentication fails (e.g. invalid credentials or token)."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class AuthorizationException(WorkdeskException):
    """Raised when the actor lacks permission for the operation."""

    def __init__(
        self,
        resource: str | None = None,
        action: str | None = None,
        message: str = "Not authorized",
    ) -> None:
        """Initialize with optional resource, action, and message.

        Args:
            resource: Optional resource type (e.g. 'task', 'plan').
            action: Optional action that was attempted (e.g. 'review_subtask').
            message: Human-readable message.
        """
        details: dict[str, Any] = {}
        if resource:
            details["resource"] = resource
        if action:
            details["action"] = action
        super().__init__(message, "PERMISSION_DENIED", details)


class ResourceNotFoundException(WorkdeskException):
    """Raised when a requested resource (task, subtask, user, plan) is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'task', 'subtask').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class InvalidRoleException(WorkdeskException):
    """Raised at task creation when a referenced user has the wrong role."""

    def __init__(self, field: str, user_id: str, role: str, expected: list[str]) -> None:
        """Initialize with the offending field and the roles it accepts.

        Args:
            field: Task field referencing the user (assigned_to, manager_id).
            user_id: The referenced user.
            role: The user's actual role.
            expected: Roles accepted for the field.
        """
        super().__init__(
            f"User {user_id} has role '{role}'; {field} requires one of {', '.join(expected)}",
            "INVALID_ROLE",
            {"field": field, "user_id": user_id, "role": role, "expected": expected},
        )


class InvalidTransitionException(WorkdeskException):
    """Raised when a status transition is not allowed from the current state."""

    def __init__(
        self,
        entity: str,
        entity_id: str,
        from_status: str,
        to_status: str | None = None,
    ) -> None:
        """Initialize with the entity and the attempted transition.

        Args:
            entity: 'task' or 'subtask'.
            entity_id: Identifier of the entity.
            from_status: Current status.
            to_status: Requested status, when the request named one.
        """
        target = f" to {to_status}" if to_status else ""
        super().__init__(
            f"Cannot transition {entity} {entity_id} from {from_status}{target}",
            "INVALID_TRANSITION",
            {
                "entity": entity,
                "entity_id": entity_id,
                "from_status": from_status,
                "to_status": to_status,
            },
        )


class UserAlreadyExistsException(WorkdeskException):
    """Raised when creating a user whose username already exists."""

    def __init__(self, username: str) -> None:
        super().__init__(
            "User already exists",
            "USER_ALREADY_EXISTS",
            {"username": username},
        )
