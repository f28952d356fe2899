"""Domain value objects for the Workdesk application.

Value objects are immutable types that represent domain concepts with
self-validation. They have no identity, only value.
"""

import re
from dataclasses import dataclass

# Usernames: letters, digits, dot, hyphen, underscore; no whitespace.
_USERNAME_RE = re.compile(r"^[a-z0-9._-]+$")


@dataclass(frozen=True)
class Username:
    """Value object for a login name.

    Usernames are case-insensitive: the stored value is always lower-case,
    so 'Alice' and 'alice' name the same account. 1-150 characters.
    """

    value: str

    def __post_init__(self) -> None:
        normalized = (self.value or "").strip().lower()
        if not normalized:
            raise ValueError("Username must be a non-empty string")
        if len(normalized) > 150:
            raise ValueError("Username must not exceed 150 characters")
        if not _USERNAME_RE.match(normalized):
            raise ValueError(
                "Username may only contain letters, digits, '.', '-' and '_'"
            )
        object.__setattr__(self, "value", normalized)

    def __str__(self) -> str:
        return self.value
