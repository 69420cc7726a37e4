"""
View helpers.

Pure functions that turn a ViewState into text for a front end.
No rendering happens here.
"""

from typing import Optional, Dict, Any

from core.models import Assignment, LifecycleStatus, ResultRecord, ViewState


MESSAGES = {
    LifecycleStatus.UNSELECTED: "Please select an assignment from the classroom screen.",
    LifecycleStatus.LOADING: "Loading...",
    LifecycleStatus.AWAITING_UPLOAD: "Upload Your File",
    LifecycleStatus.PROCESSING: "Your submission is being processed. Results will be displayed when available.",
    LifecycleStatus.COMPLETED: "Your results are ready.",
    LifecycleStatus.DELETING: "Deleting submission...",
}


def status_message(view: ViewState) -> str:
    """Main message for the current state."""
    state = view.state
    if state.status == LifecycleStatus.UNSELECTED and view.assignment is not None and view.user is None:
        return "Please log in to access this page."
    if state.status == LifecycleStatus.ERROR:
        return state.reason or "Something went wrong. Please try again."
    return MESSAGES[state.status]


def format_due_date(assignment: Optional[Assignment]) -> Optional[str]:
    """Due date line, e.g. "Due: 2025-06-21", or None if there is no due date."""
    if assignment is None or assignment.due_date is None:
        return None
    return f"Due: {assignment.due_date.strftime('%Y-%m-%d')}"


def can_delete(view: ViewState) -> bool:
    """Whether the delete button should be enabled."""
    return view.state.known_submission_id is not None and not view.state.is_busy


def summarize_record(record: ResultRecord) -> Dict[str, Any]:
    """Short summary of a graded result."""
    if not len(record):
        return {"samples": 0, "final_score": None, "best_score": None, "duration": None}
    return {
        "samples": len(record),
        "final_score": record.score[-1],
        "best_score": max(record.score),
        "duration": record.time[-1] - record.time[0],
    }
