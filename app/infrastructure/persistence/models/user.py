"""User ORM model for authentication and role-based approval."""

from sqlalchemy import Boolean, CheckConstraint, String, true
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import WorkdeskModel


class User(WorkdeskModel, Base):
    """User model. Table: app_user. Username is unique and stored lower-case."""

    __tablename__ = "app_user"

    username: Mapped[str] = mapped_column(String(150), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    role: Mapped[str] = mapped_column(String(16), nullable=False, index=True)
    hashed_password: Mapped[str] = mapped_column(String, nullable=False)
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=true()
    )

    __table_args__ = (
        CheckConstraint(
            "role IN ('admin', 'manager', 'staff')", name="app_user_role_check"
        ),
    )
