"""TaskApprovalEngine: progress saves, completion downgrade and admin review."""

import pytest

from app.application.dtos.task import ProgressUpdate, SubtaskPatch
from app.application.dtos.user import UserResult
from app.application.services.access_control import AccessControlGate
from app.application.services.subtask_approval import SubtaskApprovalEngine
from app.application.services.task_approval import (
    TaskApprovalEngine,
    next_status_on_review,
    next_status_on_save,
)
from app.domain.enums import SubtaskStatus, TaskStatus
from app.domain.exceptions import (
    AuthorizationException,
    InvalidTransitionException,
    ResourceNotFoundException,
    ValidationException,
)
from tests.unit.fakes import make_task


@pytest.fixture
def engine() -> TaskApprovalEngine:
    gate = AccessControlGate()
    return TaskApprovalEngine(gate, SubtaskApprovalEngine(gate), "Rejected by Admin")


class TestNextStatusOnSave:
    def test_non_admin_completion_request_downgraded(self) -> None:
        got = next_status_on_save(
            is_admin=False,
            current=TaskStatus.IN_PROGRESS,
            requested=TaskStatus.COMPLETED,
            all_subtasks_completed=False,
        )
        assert got is TaskStatus.WAITING_APPROVAL

    def test_all_subtasks_completed_promotes(self) -> None:
        got = next_status_on_save(
            is_admin=False,
            current=TaskStatus.PROCESSING,
            requested=TaskStatus.IN_PROGRESS,
            all_subtasks_completed=True,
        )
        assert got is TaskStatus.WAITING_APPROVAL

    def test_admin_status_taken_as_is(self) -> None:
        got = next_status_on_save(
            is_admin=True,
            current=TaskStatus.IN_PROGRESS,
            requested=TaskStatus.COMPLETED,
            all_subtasks_completed=False,
        )
        assert got is TaskStatus.COMPLETED

    def test_no_request_keeps_status(self) -> None:
        got = next_status_on_save(
            is_admin=False,
            current=TaskStatus.PROCESSING,
            requested=None,
            all_subtasks_completed=False,
        )
        assert got is TaskStatus.PROCESSING

    def test_non_admin_overdue_request_rejected(self) -> None:
        with pytest.raises(ValidationException):
            next_status_on_save(
                is_admin=False,
                current=TaskStatus.PENDING,
                requested=TaskStatus.OVERDUE,
                all_subtasks_completed=False,
            )

    @pytest.mark.parametrize(
        "requested", [None, TaskStatus.PENDING, TaskStatus.COMPLETED]
    )
    def test_non_admin_cannot_touch_submitted_task(
        self, requested: TaskStatus | None
    ) -> None:
        got = next_status_on_save(
            is_admin=False,
            current=TaskStatus.WAITING_APPROVAL,
            requested=requested,
            all_subtasks_completed=False,
        )
        assert got is None

    def test_overdue_task_accepts_only_submission(self) -> None:
        for requested in (None, TaskStatus.IN_PROGRESS):
            assert (
                next_status_on_save(
                    is_admin=False,
                    current=TaskStatus.OVERDUE,
                    requested=requested,
                    all_subtasks_completed=False,
                )
                is None
            )
        assert (
            next_status_on_save(
                is_admin=False,
                current=TaskStatus.OVERDUE,
                requested=TaskStatus.COMPLETED,
                all_subtasks_completed=False,
            )
            is TaskStatus.WAITING_APPROVAL
        )

    def test_admin_may_move_submitted_task(self) -> None:
        got = next_status_on_save(
            is_admin=True,
            current=TaskStatus.WAITING_APPROVAL,
            requested=TaskStatus.PROCESSING,
            all_subtasks_completed=False,
        )
        assert got is TaskStatus.PROCESSING


class TestNextStatusOnReview:
    def test_approve_only_from_waiting(self) -> None:
        assert (
            next_status_on_review(TaskStatus.WAITING_APPROVAL, TaskStatus.COMPLETED)
            is TaskStatus.COMPLETED
        )
        assert next_status_on_review(TaskStatus.OVERDUE, TaskStatus.COMPLETED) is None

    def test_approve_from_working_status_not_allowed(self) -> None:
        assert next_status_on_review(TaskStatus.IN_PROGRESS, TaskStatus.COMPLETED) is None

    def test_completed_is_terminal(self) -> None:
        assert next_status_on_review(TaskStatus.COMPLETED, TaskStatus.IN_PROGRESS) is None

    def test_reject_to_pending(self) -> None:
        assert (
            next_status_on_review(TaskStatus.WAITING_APPROVAL, TaskStatus.PENDING)
            is TaskStatus.PENDING
        )

    @pytest.mark.parametrize(
        "current",
        [TaskStatus.WAITING_APPROVAL, TaskStatus.IN_PROGRESS, TaskStatus.PENDING],
    )
    def test_reject_sources(self, current: TaskStatus) -> None:
        assert next_status_on_review(current, TaskStatus.IN_PROGRESS) is TaskStatus.IN_PROGRESS

    @pytest.mark.parametrize("current", [TaskStatus.PROCESSING, TaskStatus.OVERDUE])
    def test_reject_not_allowed_from(self, current: TaskStatus) -> None:
        assert next_status_on_review(current, TaskStatus.IN_PROGRESS) is None


class TestSaveProgress:
    def test_staff_completion_request_waits_for_admin(
        self, engine: TaskApprovalEngine, staff: UserResult
    ) -> None:
        task = make_task(status=TaskStatus.IN_PROGRESS)
        engine.save_progress(
            staff,
            task,
            ProgressUpdate(status=TaskStatus.COMPLETED, submission_note="all done"),
        )
        assert task.status is TaskStatus.WAITING_APPROVAL
        assert task.submission_note == "all done"

    def test_manager_cannot_complete_either(
        self, engine: TaskApprovalEngine, manager: UserResult
    ) -> None:
        task = make_task(status=TaskStatus.IN_PROGRESS)
        engine.save_progress(manager, task, ProgressUpdate(status=TaskStatus.COMPLETED))
        assert task.status is TaskStatus.WAITING_APPROVAL

    def test_working_status_change(
        self, engine: TaskApprovalEngine, staff: UserResult
    ) -> None:
        task = make_task()
        engine.save_progress(
            staff,
            task,
            ProgressUpdate(status=TaskStatus.PROCESSING, submission_note="ignored"),
        )
        assert task.status is TaskStatus.PROCESSING
        assert task.submission_note is None

    def test_subtask_patches_applied(
        self, engine: TaskApprovalEngine, staff: UserResult
    ) -> None:
        task = make_task()
        engine.save_progress(
            staff,
            task,
            ProgressUpdate(subtasks=[SubtaskPatch(id="s2", completed=True)]),
        )
        assert task.get_subtask("s2").status is SubtaskStatus.WAITING_APPROVAL
        assert task.status is TaskStatus.PENDING

    def test_save_with_all_subtasks_approved_goes_to_waiting(
        self, engine: TaskApprovalEngine, staff: UserResult
    ) -> None:
        task = make_task(status=TaskStatus.IN_PROGRESS)
        for subtask in task.subtasks:
            subtask.status = SubtaskStatus.COMPLETED
        engine.save_progress(staff, task, ProgressUpdate(status=TaskStatus.PROCESSING))
        assert task.status is TaskStatus.WAITING_APPROVAL

    def test_task_without_subtasks_is_not_promoted(
        self, engine: TaskApprovalEngine, staff: UserResult
    ) -> None:
        task = make_task(subtask_count=0)
        engine.save_progress(staff, task, ProgressUpdate())
        assert task.status is TaskStatus.PENDING

    def test_admin_completes_directly_and_clears_rejection(
        self, engine: TaskApprovalEngine, admin: UserResult
    ) -> None:
        task = make_task(status=TaskStatus.IN_PROGRESS)
        task.rejection_reason = "redo"
        engine.save_progress(
            admin,
            task,
            ProgressUpdate(status=TaskStatus.COMPLETED, submission_note="closed"),
        )
        assert task.status is TaskStatus.COMPLETED
        assert task.rejection_reason is None
        assert task.submission_note == "closed"

    def test_admin_may_set_overdue(
        self, engine: TaskApprovalEngine, admin: UserResult
    ) -> None:
        task = make_task()
        engine.save_progress(admin, task, ProgressUpdate(status=TaskStatus.OVERDUE))
        assert task.status is TaskStatus.OVERDUE

    def test_staff_overdue_request_changes_nothing(
        self, engine: TaskApprovalEngine, staff: UserResult
    ) -> None:
        task = make_task()
        with pytest.raises(ValidationException):
            engine.save_progress(
                staff,
                task,
                ProgressUpdate(
                    subtasks=[SubtaskPatch(id="s1", completed=True)],
                    status=TaskStatus.OVERDUE,
                ),
            )
        assert task.status is TaskStatus.PENDING
        assert task.get_subtask("s1").status is SubtaskStatus.PENDING

    def test_unknown_subtask_patch_changes_nothing(
        self, engine: TaskApprovalEngine, staff: UserResult
    ) -> None:
        task = make_task()
        with pytest.raises(ResourceNotFoundException):
            engine.save_progress(
                staff,
                task,
                ProgressUpdate(
                    subtasks=[
                        SubtaskPatch(id="s1", completed=True),
                        SubtaskPatch(id="ghost", completed=True),
                    ]
                ),
            )
        assert task.get_subtask("s1").status is SubtaskStatus.PENDING

    @pytest.mark.parametrize("actor_name", ["staff", "manager", "admin"])
    def test_completed_task_is_locked(
        self,
        engine: TaskApprovalEngine,
        actor_name: str,
        request: pytest.FixtureRequest,
    ) -> None:
        actor = request.getfixturevalue(actor_name)
        task = make_task(status=TaskStatus.COMPLETED)
        with pytest.raises(InvalidTransitionException):
            engine.save_progress(actor, task, ProgressUpdate(status=TaskStatus.IN_PROGRESS))
        assert task.status is TaskStatus.COMPLETED

    def test_unrelated_user_denied(
        self, engine: TaskApprovalEngine, outsider: UserResult
    ) -> None:
        with pytest.raises(AuthorizationException):
            engine.save_progress(outsider, make_task(), ProgressUpdate())


    def test_staff_cannot_pull_submitted_task_back(
        self, engine: TaskApprovalEngine, staff: UserResult
    ) -> None:
        task = make_task(status=TaskStatus.WAITING_APPROVAL)
        task.submission_note = "ready"
        with pytest.raises(InvalidTransitionException):
            engine.save_progress(
                staff,
                task,
                ProgressUpdate(
                    subtasks=[SubtaskPatch(id="s1", completed=True)],
                    status=TaskStatus.PENDING,
                    submission_note="never mind",
                ),
            )
        assert task.status is TaskStatus.WAITING_APPROVAL
        assert task.submission_note == "ready"
        assert task.get_subtask("s1").status is SubtaskStatus.PENDING

    def test_overdue_task_can_still_be_submitted(
        self, engine: TaskApprovalEngine, staff: UserResult
    ) -> None:
        task = make_task(status=TaskStatus.OVERDUE)
        engine.save_progress(
            staff,
            task,
            ProgressUpdate(
                subtasks=[SubtaskPatch(id="s1", completed=True)],
                status=TaskStatus.COMPLETED,
                submission_note="late but done",
            ),
        )
        assert task.status is TaskStatus.WAITING_APPROVAL
        assert task.submission_note == "late but done"
        assert task.get_subtask("s1").status is SubtaskStatus.WAITING_APPROVAL

    def test_overdue_task_rejects_working_status(
        self, engine: TaskApprovalEngine, staff: UserResult
    ) -> None:
        task = make_task(status=TaskStatus.OVERDUE)
        with pytest.raises(InvalidTransitionException):
            engine.save_progress(staff, task, ProgressUpdate(status=TaskStatus.IN_PROGRESS))
        assert task.status is TaskStatus.OVERDUE

    def test_admin_may_reopen_submitted_task(
        self, engine: TaskApprovalEngine, admin: UserResult
    ) -> None:
        task = make_task(status=TaskStatus.WAITING_APPROVAL)
        engine.save_progress(admin, task, ProgressUpdate(status=TaskStatus.PROCESSING))
        assert task.status is TaskStatus.PROCESSING


class TestReview:
    def test_approve_clears_rejection_reason_keeps_note(
        self, engine: TaskApprovalEngine, admin: UserResult
    ) -> None:
        task = make_task(status=TaskStatus.WAITING_APPROVAL)
        task.rejection_reason = "earlier"
        task.submission_note = "please check"
        engine.review(admin, task, TaskStatus.COMPLETED)
        assert task.status is TaskStatus.COMPLETED
        assert task.rejection_reason is None
        assert task.submission_note == "please check"

    def test_overdue_task_must_be_submitted_before_approval(
        self, engine: TaskApprovalEngine, admin: UserResult, staff: UserResult
    ) -> None:
        task = make_task(status=TaskStatus.OVERDUE)
        with pytest.raises(InvalidTransitionException):
            engine.review(admin, task, TaskStatus.COMPLETED)
        assert task.status is TaskStatus.OVERDUE
        engine.save_progress(staff, task, ProgressUpdate(status=TaskStatus.COMPLETED))
        engine.review(admin, task, TaskStatus.COMPLETED)
        assert task.status is TaskStatus.COMPLETED

    @pytest.mark.parametrize("status", [TaskStatus.PROCESSING, TaskStatus.OVERDUE])
    def test_reject_not_allowed_from(
        self, engine: TaskApprovalEngine, admin: UserResult, status: TaskStatus
    ) -> None:
        task = make_task(status=status)
        with pytest.raises(InvalidTransitionException):
            engine.review(admin, task, TaskStatus.IN_PROGRESS)
        assert task.status is status
        assert task.rejection_reason is None

    def test_reject_with_reason(
        self, engine: TaskApprovalEngine, admin: UserResult
    ) -> None:
        task = make_task(status=TaskStatus.WAITING_APPROVAL)
        engine.review(admin, task, TaskStatus.IN_PROGRESS, "missing signature")
        assert task.status is TaskStatus.IN_PROGRESS
        assert task.rejection_reason == "missing signature"

    @pytest.mark.parametrize("reason", [None, "", "   "])
    def test_reject_uses_default_reason(
        self, engine: TaskApprovalEngine, admin: UserResult, reason: str | None
    ) -> None:
        task = make_task(status=TaskStatus.WAITING_APPROVAL)
        engine.review(admin, task, TaskStatus.PENDING, reason)
        assert task.status is TaskStatus.PENDING
        assert task.rejection_reason == "Rejected by Admin"

    def test_manager_cannot_review_task(
        self, engine: TaskApprovalEngine, manager: UserResult
    ) -> None:
        task = make_task(status=TaskStatus.WAITING_APPROVAL)
        with pytest.raises(AuthorizationException):
            engine.review(manager, task, TaskStatus.COMPLETED)
        assert task.status is TaskStatus.WAITING_APPROVAL

    def test_approve_requires_submission(
        self, engine: TaskApprovalEngine, admin: UserResult
    ) -> None:
        with pytest.raises(InvalidTransitionException):
            engine.review(admin, make_task(status=TaskStatus.IN_PROGRESS), TaskStatus.COMPLETED)

    def test_completed_task_cannot_be_reopened(
        self, engine: TaskApprovalEngine, admin: UserResult
    ) -> None:
        task = make_task(status=TaskStatus.COMPLETED)
        with pytest.raises(InvalidTransitionException):
            engine.review(admin, task, TaskStatus.IN_PROGRESS)

    @pytest.mark.parametrize(
        "decision",
        [TaskStatus.WAITING_APPROVAL, TaskStatus.OVERDUE, TaskStatus.PROCESSING],
    )
    def test_invalid_decision(
        self, engine: TaskApprovalEngine, admin: UserResult, decision: TaskStatus
    ) -> None:
        with pytest.raises(ValidationException):
            engine.review(admin, make_task(status=TaskStatus.WAITING_APPROVAL), decision)
