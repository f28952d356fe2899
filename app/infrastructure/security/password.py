"""Password hashing for user accounts (bcrypt over a SHA-256 digest).

bcrypt only reads the first 72 bytes of its input, so the password is first
reduced to a base64 SHA-256 digest of fixed length.
"""

import base64
import hashlib

import bcrypt


def _digest(password: str) -> bytes:
    return base64.b64encode(hashlib.sha256(password.encode("utf-8")).digest())


def get_password_hash(password: str) -> str:
    """Return the bcrypt hash to store for password."""
    return bcrypt.hashpw(_digest(password), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Return True if plain_password matches the stored hash; False on malformed hashes."""
    try:
        return bool(bcrypt.checkpw(_digest(plain_password), hashed_password.encode("utf-8")))
    except (ValueError, TypeError):
        return False
