"""DTOs for user use cases (no dependency on ORM)."""

from dataclasses import dataclass

from app.domain.enums import UserRole


@dataclass(frozen=True)
class UserResult:
    """User read-model (result of get_by_id, create_user, etc.). No password.

    Also serves as the actor passed to the access control gate.
    """

    id: str
    username: str
    name: str
    role: UserRole
    is_active: bool = True

    @property
    def is_admin(self) -> bool:
        return self.role is UserRole.ADMIN
