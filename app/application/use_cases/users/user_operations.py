"""User operations: login and admin-managed accounts."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.application.dtos.user import UserResult
from app.application.services.access_control import AccessControlGate, Operation
from app.domain.enums import UserRole
from app.domain.exceptions import (
    AuthenticationException,
    ResourceNotFoundException,
    UserAlreadyExistsException,
    ValidationException,
)
from app.domain.value_objects.core import Username

if TYPE_CHECKING:
    from app.application.interfaces.repositories import IUserRepository

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


def _normalize_username(raw: str) -> str:
    try:
        return Username(raw).value
    except ValueError as e:
        raise ValidationException(str(e), field="username") from e


class UserService:
    """Authenticate users; create, list, reset and delete accounts (admin only)."""

    def __init__(
        self,
        user_repo: IUserRepository,
        gate: AccessControlGate | None = None,
        min_password_length: int = MIN_PASSWORD_LENGTH,
    ) -> None:
        self.user_repo = user_repo
        self.gate = gate or AccessControlGate()
        self.min_password_length = min_password_length

    def _check_password(self, password: str) -> None:
        if not password or len(password) < self.min_password_length:
            raise ValidationException(
                f"Password must be at least {self.min_password_length} characters",
                field="password",
            )

    async def authenticate(self, username: str, password: str) -> UserResult:
        """Return the active user for the credentials; username is case-insensitive.

        Raises:
            AuthenticationException: On unknown user, wrong password or inactive account.
        """
        try:
            normalized = Username(username).value
        except ValueError as e:
            raise AuthenticationException("Invalid username or password") from e
        user = await self.user_repo.authenticate(normalized, password)
        if user is None:
            logger.warning("Failed login for username %s", normalized)
            raise AuthenticationException("Invalid username or password")
        return user

    async def create_user(
        self,
        actor: UserResult,
        username: str,
        password: str,
        name: str,
        role: UserRole = UserRole.STAFF,
    ) -> UserResult:
        """Create an account with a unique lower-case username."""
        self.gate.require(actor, None, Operation.MANAGE_USERS)
        normalized = _normalize_username(username)
        display_name = (name or "").strip()
        if not display_name:
            raise ValidationException("Name is required", field="name")
        self._check_password(password)
        if await self.user_repo.get_by_username(normalized):
            raise UserAlreadyExistsException(normalized)
        user = await self.user_repo.create_user(
            username=normalized,
            password=password,
            name=display_name,
            role=role,
        )
        logger.info("User %s (%s) created by %s", user.id, role.value, actor.id)
        return user

    async def list_users(
        self, actor: UserResult, role: UserRole | None = None
    ) -> list[UserResult]:
        self.gate.require(actor, None, Operation.MANAGE_USERS)
        return await self.user_repo.list_users(role=role)

    async def get_user(self, actor: UserResult, user_id: str) -> UserResult:
        """Return a user; admins may read anyone, others only themselves."""
        if actor.id != user_id:
            self.gate.require(actor, None, Operation.MANAGE_USERS)
        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            raise ResourceNotFoundException("user", user_id)
        return user

    async def reset_password(
        self, actor: UserResult, user_id: str, new_password: str
    ) -> None:
        self.gate.require(actor, None, Operation.MANAGE_USERS)
        self._check_password(new_password)
        if not await self.user_repo.update_password(user_id, new_password):
            raise ResourceNotFoundException("user", user_id)
        logger.info("Password for user %s reset by %s", user_id, actor.id)

    async def delete_user(self, actor: UserResult, user_id: str) -> None:
        """Delete an account. An admin cannot delete their own account."""
        self.gate.require(actor, None, Operation.MANAGE_USERS)
        if actor.id == user_id:
            raise ValidationException(
                "You cannot delete your own account", field="user_id"
            )
        if not await self.user_repo.delete_user(user_id):
            raise ResourceNotFoundException("user", user_id)
        logger.info("User %s deleted by %s", user_id, actor.id)
