"""Domain enumerations for the Workdesk application.

Closed sets of lifecycle values for tasks, subtasks and user roles. Transition
functions in app.application.services match on these exhaustively.
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings.

        Returns:
            List of enum value strings (e.g. for validation or serialization).
        """
        return [member.value for member in cls]


class UserRole(_ValuesMixin, str, Enum):
    """Role of a user in the approval chain (staff -> manager -> admin)."""

    ADMIN = "admin"
    MANAGER = "manager"
    STAFF = "staff"

    @property
    def can_be_assigned(self) -> bool:
        """Return whether users with this role may execute tasks."""
        return self in (UserRole.STAFF, UserRole.MANAGER)


class TaskStatus(_ValuesMixin, str, Enum):
    """Task aggregate status.

    COMPLETED is the only terminal state. OVERDUE is derived by the sweeper
    from the deadline and can still move to COMPLETED.
    """

    PENDING = "pending"
    PROCESSING = "processing"
    IN_PROGRESS = "in_progress"
    WAITING_APPROVAL = "waiting_approval"
    COMPLETED = "completed"
    OVERDUE = "overdue"

    @property
    def is_terminal(self) -> bool:
        """Return whether no further transition is allowed from this status."""
        return self is TaskStatus.COMPLETED


class SubtaskStatus(_ValuesMixin, str, Enum):
    """Per-subtask status in the manager review layer."""

    PENDING = "pending"
    WAITING_APPROVAL = "waiting_approval"
    COMPLETED = "completed"
    REJECTED = "rejected"

    @classmethod
    def parse(cls, raw: str | None) -> "SubtaskStatus":
        """Read a stored status; absent or unknown values are PENDING."""
        if not raw:
            return cls.PENDING
        try:
            return cls(raw)
        except ValueError:
            return cls.PENDING
