"""User repository with password helpers. Interface methods return application DTOs."""

from __future__ import annotations

import asyncio

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.user import UserResult
from app.domain.enums import UserRole
from app.domain.exceptions import UserAlreadyExistsException
from app.infrastructure.persistence.models.user import User
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.infrastructure.security.password import get_password_hash, verify_password

# Lazy dummy hash for constant-time comparison when user is not found (timing-attack mitigation).
# Computed on first use in a thread to avoid blocking the event loop at import.
_dummy_hash_cache: str | None = None


async def _get_dummy_hash() -> str:
    """Return a valid bcrypt hash for dummy comparison; computed once in thread pool."""
    global _dummy_hash_cache
    if _dummy_hash_cache is None:
        _dummy_hash_cache = await asyncio.to_thread(
            get_password_hash, "not-a-real-password"
        )
    return _dummy_hash_cache


def _user_to_result(u: User) -> UserResult:
    """Map ORM User to application UserResult (no password)."""
    return UserResult(
        id=u.id,
        username=u.username,
        name=u.name,
        role=UserRole(u.role),
        is_active=u.is_active,
    )


class UserRepository(BaseRepository[User]):
    """User repository. Authenticate, create_user, update_password, delete_user."""

    resource_type = "user"

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, User)

    async def _get_by_username(self, username: str) -> User | None:
        result = await self.db.execute(
            select(User).where(func.lower(User.username) == username.strip().lower())
        )
        return result.scalar_one_or_none()

    async def get_by_id(self, user_id: str) -> UserResult | None:  # type: ignore[override]
        user = await super().get_by_id(user_id)
        return _user_to_result(user) if user else None

    async def get_by_username(self, username: str) -> UserResult | None:
        user = await self._get_by_username(username)
        return _user_to_result(user) if user else None

    async def authenticate(self, username: str, password: str) -> UserResult | None:
        user = await self._get_by_username(username)
        if not user:
            dummy_hash = await _get_dummy_hash()
            await asyncio.to_thread(verify_password, password, dummy_hash)
            return None
        if not user.is_active:
            return None
        if not await asyncio.to_thread(verify_password, password, user.hashed_password):
            return None
        return _user_to_result(user)

    async def create_user(
        self,
        username: str,
        password: str,
        name: str,
        role: UserRole,
    ) -> UserResult:
        """Create user; raise UserAlreadyExistsException on unique constraint violation."""
        hashed = await asyncio.to_thread(get_password_hash, password)
        user = User(
            username=username.strip().lower(),
            name=name,
            role=role.value,
            hashed_password=hashed,
            is_active=True,
        )
        try:
            created = await self.add(user)
        except IntegrityError as e:
            raise UserAlreadyExistsException(user.username) from e
        return _user_to_result(created)

    async def list_users(self, role: UserRole | None = None) -> list[UserResult]:
        stmt = select(User).order_by(User.username)
        if role is not None:
            stmt = stmt.where(User.role == role.value)
        result = await self.db.execute(stmt)
        return [_user_to_result(u) for u in result.scalars().all()]

    async def update_password(self, user_id: str, new_password: str) -> bool:
        user = await super().get_by_id(user_id)
        if not user:
            return False
        user.hashed_password = await asyncio.to_thread(get_password_hash, new_password)
        await self.update(user)
        return True

    async def delete_user(self, user_id: str) -> bool:
        return await self.remove(user_id)
