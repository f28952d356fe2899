"""Tests for domain value objects (Username)."""

import pytest

from app.domain.value_objects.core import Username


class TestUsername:
    """Username: 1-150 chars, case-insensitive, stored lower-case."""

    def test_normalizes_case_and_whitespace(self) -> None:
        assert Username("  Alice ").value == "alice"
        assert str(Username("BOB.smith")) == "bob.smith"

    def test_allowed_characters(self) -> None:
        Username("a")
        Username("jane_doe-2.x")
        Username("a" * 150)

    def test_equal_regardless_of_case(self) -> None:
        assert Username("Alice") == Username("alice")

    def test_empty_rejected(self) -> None:
        with pytest.raises(ValueError, match="non-empty"):
            Username("")
        with pytest.raises(ValueError, match="non-empty"):
            Username("   ")

    def test_too_long_rejected(self) -> None:
        with pytest.raises(ValueError, match="150"):
            Username("a" * 151)

    def test_invalid_characters_rejected(self) -> None:
        with pytest.raises(ValueError, match="letters, digits"):
            Username("jane doe")
        with pytest.raises(ValueError, match="letters, digits"):
            Username("jane@example.com")
