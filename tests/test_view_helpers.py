# tests/test_view_helpers.py

from core.models import LifecycleState, ResultRecord, ViewState
from utils.view_helpers import can_delete, format_due_date, status_message, summarize_record


def test_unselected_message(sample_user):
    view = ViewState(state=LifecycleState.unselected(), user=sample_user)

    assert status_message(view) == "Please select an assignment from the classroom screen."


def test_logged_out_message(sample_assignment):
    view = ViewState(state=LifecycleState.unselected(), assignment=sample_assignment)

    assert status_message(view) == "Please log in to access this page."


def test_processing_message():
    view = ViewState(state=LifecycleState.processing(5))

    assert "being processed" in status_message(view)


def test_error_message_uses_reason():
    view = ViewState(state=LifecycleState.error("Could not reach the server."))

    assert status_message(view) == "Could not reach the server."


def test_format_due_date(sample_assignment):
    assert format_due_date(sample_assignment) == "Due: 1987-06-21"
    assert format_due_date(None) is None


def test_can_delete_only_known_idle_submission():
    assert can_delete(ViewState(state=LifecycleState.processing(5)))
    assert not can_delete(ViewState(state=LifecycleState.deleting(5)))
    assert not can_delete(ViewState(state=LifecycleState.awaiting_upload()))


def test_summarize_record():
    record = ResultRecord(time=(0.0, 1.0, 2.5), score=(10.0, 90.0, 80.0))

    assert summarize_record(record) == {
        "samples": 3,
        "final_score": 80.0,
        "best_score": 90.0,
        "duration": 2.5,
    }


def test_summarize_empty_record():
    assert summarize_record(ResultRecord(time=(), score=()))["samples"] == 0
