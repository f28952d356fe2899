"""Tests for domain exceptions (error_code, message, details)."""

from app.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    InvalidRoleException,
    InvalidTransitionException,
    ResourceNotFoundException,
    UserAlreadyExistsException,
    ValidationException,
    WorkdeskException,
)


def test_workdesk_exception_default_error_code() -> None:
    """Base WorkdeskException uses class name as error_code when not provided."""
    exc = WorkdeskException("Something failed")
    assert exc.message == "Something failed"
    assert exc.error_code == "WorkdeskException"
    assert exc.details == {}


def test_to_dict_shape() -> None:
    exc = WorkdeskException("Oops", error_code="CUSTOM", details={"key": "value"})
    assert exc.to_dict() == {
        "error": "CUSTOM",
        "message": "Oops",
        "details": {"key": "value"},
    }


def test_validation_exception() -> None:
    """ValidationException sets VALIDATION_ERROR and optional field in details."""
    exc = ValidationException("Title is required", field="title")
    assert exc.error_code == "VALIDATION_ERROR"
    assert exc.details == {"field": "title"}
    assert ValidationException("x").details == {}


def test_authentication_exception() -> None:
    exc = AuthenticationException()
    assert exc.error_code == "AUTHENTICATION_ERROR"
    assert exc.message == "Authentication failed"


def test_authorization_exception() -> None:
    """AuthorizationException sets PERMISSION_DENIED with resource and action."""
    exc = AuthorizationException(resource="task", action="review_task")
    assert exc.error_code == "PERMISSION_DENIED"
    assert exc.message == "Not authorized"
    assert exc.details == {"resource": "task", "action": "review_task"}


def test_resource_not_found_exception() -> None:
    exc = ResourceNotFoundException("subtask", "s1")
    assert exc.error_code == "RESOURCE_NOT_FOUND"
    assert exc.message == "subtask not found: s1"
    assert exc.details == {"resource_type": "subtask", "resource_id": "s1"}


def test_invalid_role_exception() -> None:
    exc = InvalidRoleException("assigned_to", "u1", "admin", ["staff", "manager"])
    assert exc.error_code == "INVALID_ROLE"
    assert exc.details["expected"] == ["staff", "manager"]
    assert "assigned_to" in exc.message


def test_invalid_transition_exception() -> None:
    exc = InvalidTransitionException("task", "t1", "completed", "in_progress")
    assert exc.error_code == "INVALID_TRANSITION"
    assert exc.message == "Cannot transition task t1 from completed to in_progress"
    no_target = InvalidTransitionException("task", "t1", "completed")
    assert no_target.message == "Cannot transition task t1 from completed"
    assert no_target.details["to_status"] is None


def test_user_already_exists_exception() -> None:
    exc = UserAlreadyExistsException("alice")
    assert exc.error_code == "USER_ALREADY_EXISTS"
    assert exc.details == {"username": "alice"}
