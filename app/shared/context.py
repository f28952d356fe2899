"""Request context management using contextvars.

Async-safe storage for request-scoped data (request id, authenticated user
id) so log records can carry them without passing them through every call.

Usage:
    set_request_id("9f1c...")
    set_current_user("user123")
    request_id = get_request_id()
"""

from contextvars import ContextVar

_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)
_current_user_id: ContextVar[str | None] = ContextVar("current_user_id", default=None)


def set_request_id(request_id: str | None) -> None:
    """Set the request id for the current task (RequestIDMiddleware)."""
    _request_id.set(request_id)


def get_request_id() -> str | None:
    return _request_id.get()


def set_current_user(user_id: str | None) -> None:
    """Set the authenticated user id for the current task (after token check)."""
    _current_user_id.set(user_id)


def get_current_user_id() -> str | None:
    return _current_user_id.get()


def clear_context() -> None:
    """Clear request id and user id."""
    _request_id.set(None)
    _current_user_id.set(None)
