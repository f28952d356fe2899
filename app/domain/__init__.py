"""Domain layer: entities, value objects, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from app.domain.entities import (
    PlanEntity,
    PlanSubtaskTemplate,
    PlanVariant,
    SubtaskEntity,
    TaskEntity,
)
from app.domain.enums import SubtaskStatus, TaskStatus, UserRole
from app.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    InvalidRoleException,
    InvalidTransitionException,
    ResourceNotFoundException,
    UserAlreadyExistsException,
    ValidationException,
    WorkdeskException,
)
from app.domain.value_objects import Username

__all__ = [
    # Entities
    "PlanEntity",
    "PlanSubtaskTemplate",
    "PlanVariant",
    "SubtaskEntity",
    "TaskEntity",
    # Enums
    "SubtaskStatus",
    "TaskStatus",
    "UserRole",
    # Exceptions
    "AuthenticationException",
    "AuthorizationException",
    "InvalidRoleException",
    "InvalidTransitionException",
    "ResourceNotFoundException",
    "UserAlreadyExistsException",
    "ValidationException",
    "WorkdeskException",
    # Value objects
    "Username",
]
