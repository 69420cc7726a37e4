"""
Admin submission controller.

Lists every submission of an assignment and lets an admin delete any of
them. Uses the same rules as the user-facing controller: confirm first,
always reload from the server after a delete, drop stale responses.
"""

import logging
from dataclasses import dataclass
from typing import Optional, List

from core.errors import LogicError, NetworkFailure
from core.models import Assignment, DeleteOutcome, ResultRecord, Submission
from prompts.base import ConfirmationPrompt
from services.lifecycle_controller import DEFAULT_CONFIRM_MESSAGE
from services.result_codec import ResultPayloadCodec
from services.submission_repository import SubmissionRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AdminSubmissionRow:
    """One submission in the admin list, with its result if graded."""
    submission: Submission
    record: Optional[ResultRecord] = None

    @property
    def final_score(self) -> Optional[float]:
        if self.record is None or not len(self.record):
            return None
        return self.record.score[-1]


class AdminSubmissionController:
    """Admin view over all submissions of one assignment."""

    def __init__(
        self,
        repository: SubmissionRepository,
        prompt: ConfirmationPrompt,
        codec: Optional[ResultPayloadCodec] = None,
        strict_logic_errors: bool = False,
        confirm_message: str = DEFAULT_CONFIRM_MESSAGE
    ):
        self.repository = repository
        self.prompt = prompt
        self.codec = codec or ResultPayloadCodec()
        self.strict_logic_errors = strict_logic_errors
        self.confirm_message = confirm_message

        self.assignment: Optional[Assignment] = None
        self.rows: List[AdminSubmissionRow] = []
        self.error: Optional[NetworkFailure] = None
        self.loading = False
        self.deleting_id: Optional[int] = None
        self.last_logic_error: Optional[LogicError] = None
        self._token = 0

    async def refresh(self, assignment: Optional[Assignment]) -> List[AdminSubmissionRow]:
        """Reload all submissions of an assignment."""
        self._token += 1
        token = self._token
        self.assignment = assignment
        self.deleting_id = None

        if assignment is None:
            self.rows = []
            self.error = None
            self.loading = False
            return self.rows

        self.loading = True
        try:
            submissions = await self.repository.list_assignment_submissions(assignment.assignment_id)
        except NetworkFailure as e:
            if token != self._token:
                return self.rows
            logger.error(f"Error fetching submissions for assignment {assignment.assignment_id}: {e}")
            self.rows = []
            self.error = e
            self.loading = False
            return self.rows

        if token != self._token:
            logger.debug(f"Dropping stale admin refresh response (token {token}, latest {self._token})")
            return self.rows

        self.rows = [
            AdminSubmissionRow(
                submission=submission,
                record=self.codec.decode(submission.results, submission.submission_id).record,
            )
            for submission in submissions
        ]
        self.error = None
        self.loading = False
        return self.rows

    async def request_delete(self, submission_id: int) -> DeleteOutcome:
        """Delete any listed submission after confirmation, then reload."""
        if not any(row.submission.submission_id == submission_id for row in self.rows):
            error = LogicError(f"Submission {submission_id} is not in the admin list")
            self.last_logic_error = error
            if self.strict_logic_errors:
                raise error
            logger.error(str(error))
            return DeleteOutcome.REJECTED

        assignment = self.assignment
        token_before_prompt = self._token

        if not await self.prompt.confirm(self.confirm_message):
            return DeleteOutcome.CANCELLED
        if self._token != token_before_prompt:
            return DeleteOutcome.SUPERSEDED

        self._token += 1
        token = self._token
        self.deleting_id = submission_id

        failure: Optional[NetworkFailure] = None
        try:
            await self.repository.delete_submission(submission_id)
        except NetworkFailure as e:
            logger.error(f"Admin failed to delete submission {submission_id}: {e}")
            failure = e

        if token != self._token:
            return DeleteOutcome.FAILED if failure else DeleteOutcome.DELETED

        await self.refresh(assignment)
        if failure is not None and self.error is None:
            # keep the delete failure visible after the reload
            self.error = failure
        return DeleteOutcome.FAILED if failure else DeleteOutcome.DELETED
