"""Identifier generation for users, plans, tasks and subtasks."""

from cuid2 import cuid_wrapper

_next_cuid = cuid_wrapper()


def generate_cuid() -> str:
    """Return a new CUID2 string.

    Used for row primary keys and for subtask ids inside a task's JSON
    column, so ids stay stable when subtasks are reordered or patched.
    """
    return str(_next_cuid())
