"""Create the first admin account.

Usage:
    python -m scripts.create_admin <username> <name> [password]
If password is omitted, a random one is printed. Run `alembic upgrade head`
first. All imports use app.*.
"""

import asyncio
import secrets
import sys

from app.core.config import get_settings
from app.domain.enums import UserRole
from app.domain.exceptions import UserAlreadyExistsException
from app.domain.value_objects.core import Username
from app.infrastructure.persistence.database import dispose_engine, get_sessionmaker
from app.infrastructure.persistence.repositories import UserRepository
from app.shared.telemetry.logging import get_logger, setup_logging

logger = get_logger(__name__)


async def main() -> None:
    """Create an admin user; username is normalised to lower case."""
    if len(sys.argv) < 3:
        print(
            "Usage: python -m scripts.create_admin <username> <name> [password]",
            file=sys.stderr,
        )
        sys.exit(1)
    setup_logging()
    settings = get_settings()
    try:
        username = Username(sys.argv[1]).value
    except ValueError as e:
        print(f"Invalid username: {e}", file=sys.stderr)
        sys.exit(1)
    name = sys.argv[2].strip()
    password = sys.argv[3] if len(sys.argv) > 3 else secrets.token_urlsafe(12)
    if len(password) < settings.min_password_length:
        print(
            f"Password must be at least {settings.min_password_length} characters",
            file=sys.stderr,
        )
        sys.exit(1)

    try:
        async with get_sessionmaker()() as session, session.begin():
            user = await UserRepository(session).create_user(
                username=username, password=password, name=name, role=UserRole.ADMIN
            )
    except UserAlreadyExistsException:
        print(f"User already exists: {username}", file=sys.stderr)
        sys.exit(1)
    finally:
        await dispose_engine()

    logger.info("Admin %s created", user.id)
    print(f"Created admin: {user.id} ({user.username})")
    if len(sys.argv) <= 3:
        print(f"Password: {password}")


if __name__ == "__main__":
    asyncio.run(main())
