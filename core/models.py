"""
Data models for the submission lifecycle client.

This module defines all data structures used throughout the system:
- User and assignment context passed in by the front end
- Submissions as returned by the assignment-submission API
- Decoded grading results
- Lifecycle state and the view snapshot emitted to presentation
"""

import json
from enum import Enum
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple, Iterator, Dict, Any


class LifecycleStatus(str, Enum):
    """Submission lifecycle states exposed by the controller."""
    UNSELECTED = "unselected"            # No user or no assignment selected
    LOADING = "loading"                  # Submission list request in flight
    AWAITING_UPLOAD = "awaiting_upload"  # User has not submitted yet
    PROCESSING = "processing"            # Submitted, grading result not available yet
    COMPLETED = "completed"              # Submitted and graded
    DELETING = "deleting"                # Delete request in flight
    ERROR = "error"                      # Last operation failed


class DeleteOutcome(str, Enum):
    """Result of a delete request."""
    DELETED = "deleted"
    FAILED = "failed"
    CANCELLED = "cancelled"    # User declined the confirmation
    REJECTED = "rejected"      # No such submission known to the controller
    SUPERSEDED = "superseded"  # A newer operation took over while confirming


def _parse_timestamp(value: Any) -> Optional[datetime]:
    if not value:
        return None
    if isinstance(value, datetime):
        return value
    text = str(value).strip()
    # fromisoformat() before 3.11 does not accept a trailing Z
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


@dataclass(frozen=True)
class User:
    """User currently signed in to the front end."""
    user_id: int
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None

    @property
    def display_name(self) -> str:
        name = " ".join(part for part in (self.first_name, self.last_name) if part)
        return name or f"user {self.user_id}"


@dataclass(frozen=True)
class Assignment:
    """Assignment selected in the classroom context."""
    assignment_id: int
    title: str
    description: Optional[str] = None
    due_date: Optional[datetime] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Assignment":
        """Build an assignment from its API representation."""
        return cls(
            assignment_id=data["assignment_id"],
            title=data.get("title") or "",
            description=data.get("description") or None,
            due_date=_parse_timestamp(data.get("due_date")),
        )


@dataclass(frozen=True)
class Submission:
    """A submission row as stored by the server."""
    submission_id: int
    user_id: int
    assignment_id: int
    results: Optional[str]               # Raw grading payload, may be absent or malformed
    submitted_at: Optional[datetime] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Submission":
        """
        Build a submission from one row of the submissions API.

        Raises:
            KeyError: if the row has no submission_id
            ValueError: if submitted_at is not an ISO-8601 timestamp
        """
        results = data.get("results")
        if results is not None and not isinstance(results, str):
            # Server already sent structured JSON; keep it opaque for the codec
            results = json.dumps(results)
        return cls(
            submission_id=data["submission_id"],
            user_id=data.get("user_id"),
            assignment_id=data.get("assignment_id"),
            results=results,
            submitted_at=_parse_timestamp(data.get("submitted_at") or data.get("created_at")),
        )


@dataclass(frozen=True)
class ResultRecord:
    """Decoded grading result: score samples over time."""
    time: Tuple[float, ...]
    score: Tuple[float, ...]

    def samples(self) -> Iterator[Tuple[float, float]]:
        """Iterate over (time, score) pairs in order."""
        return zip(self.time, self.score)

    def to_dict(self) -> Dict[str, list]:
        return {"time": list(self.time), "score": list(self.score)}

    def __len__(self) -> int:
        return len(self.time)


@dataclass(frozen=True)
class LifecycleState:
    """
    Controller's authoritative view of one (user, assignment) pair.

    Always built through one of the named constructors so that the
    per-status invariants hold:
    - completed carries a record and a submission_id
    - processing carries a submission_id and no record
    - error carries a reason, and a submission_id only if one was known
    """
    status: LifecycleStatus
    submission_id: Optional[int] = None
    record: Optional[ResultRecord] = None
    reason: Optional[str] = None
    status_code: Optional[int] = None

    @classmethod
    def unselected(cls) -> "LifecycleState":
        return cls(LifecycleStatus.UNSELECTED)

    @classmethod
    def loading(cls) -> "LifecycleState":
        return cls(LifecycleStatus.LOADING)

    @classmethod
    def awaiting_upload(cls) -> "LifecycleState":
        return cls(LifecycleStatus.AWAITING_UPLOAD)

    @classmethod
    def processing(cls, submission_id: int) -> "LifecycleState":
        return cls(LifecycleStatus.PROCESSING, submission_id=submission_id)

    @classmethod
    def completed(cls, submission_id: int, record: ResultRecord) -> "LifecycleState":
        return cls(LifecycleStatus.COMPLETED, submission_id=submission_id, record=record)

    @classmethod
    def deleting(cls, submission_id: int) -> "LifecycleState":
        return cls(LifecycleStatus.DELETING, submission_id=submission_id)

    @classmethod
    def error(
        cls,
        reason: str,
        status_code: Optional[int] = None,
        submission_id: Optional[int] = None
    ) -> "LifecycleState":
        return cls(
            LifecycleStatus.ERROR,
            submission_id=submission_id,
            reason=reason,
            status_code=status_code,
        )

    @property
    def known_submission_id(self) -> Optional[int]:
        """Submission the controller currently believes exists on the server."""
        if self.status in (LifecycleStatus.PROCESSING, LifecycleStatus.COMPLETED, LifecycleStatus.ERROR):
            return self.submission_id
        return None

    @property
    def is_busy(self) -> bool:
        return self.status in (LifecycleStatus.LOADING, LifecycleStatus.DELETING)


@dataclass(frozen=True)
class ViewState:
    """Snapshot handed to presentation on every state change."""
    state: LifecycleState
    user: Optional[User] = None
    assignment: Optional[Assignment] = None
    notice: Optional[str] = None  # Last delete failure, survives the resync refresh
