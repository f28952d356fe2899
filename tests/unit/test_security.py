"""Password hashing and JWT helpers."""

from datetime import timedelta

import pytest

from app.infrastructure.security.jwt import create_access_token, verify_token
from app.infrastructure.security.password import get_password_hash, verify_password


def test_password_hash_roundtrip() -> None:
    hashed = get_password_hash("correct-horse")
    assert hashed != "correct-horse"
    assert verify_password("correct-horse", hashed)
    assert not verify_password("wrong-horse", hashed)


def test_long_passwords_are_not_truncated() -> None:
    """Passwords differing only after byte 72 must not verify against each other."""
    base = "x" * 80
    hashed = get_password_hash(base + "a")
    assert not verify_password(base + "b", hashed)


def test_malformed_hash_does_not_verify() -> None:
    assert verify_password("anything", "not-a-bcrypt-hash") is False


def test_token_carries_subject_and_role() -> None:
    payload = verify_token(create_access_token("u1", "manager"))
    assert payload["sub"] == "u1"
    assert payload["role"] == "manager"


def test_expired_token_rejected() -> None:
    token = create_access_token("u1", "staff", expires_delta=timedelta(seconds=-5))
    with pytest.raises(ValueError, match="Invalid token"):
        verify_token(token)


def test_garbage_token_rejected() -> None:
    with pytest.raises(ValueError):
        verify_token("not.a.jwt")
