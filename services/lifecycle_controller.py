"""
Submission lifecycle controller.

Owns the LifecycleState of one (user, assignment) pair and keeps it in
line with the server:
- refresh() rebuilds the state from the latest submission list
- request_delete() confirms with the user, deletes, then refreshes again

State is never patched locally after a mutation; it is always rebuilt from
a fresh server response. Every operation takes a request token, and a
response whose token is no longer the latest is dropped, so a slow reply
cannot overwrite the result of a newer operation.
"""

import logging
from typing import Optional, List, Callable

from core.errors import LogicError, NetworkFailure
from core.models import (
    Assignment,
    DeleteOutcome,
    LifecycleState,
    Submission,
    User,
    ViewState,
)
from prompts.base import ConfirmationPrompt
from services.result_codec import ResultPayloadCodec
from services.submission_repository import SubmissionRepository

logger = logging.getLogger(__name__)

DEFAULT_CONFIRM_MESSAGE = "Are you sure you want to delete this submission?"
DELETE_FAILED_NOTICE = "Failed to delete submission. Please try again."

StateListener = Callable[[ViewState], None]


def pick_canonical(submissions: List[Submission]) -> Submission:
    """
    Choose the submission that represents the user's work.

    The server should keep at most one submission per (user, assignment).
    If it returns more, the most recently submitted one wins; rows without
    a timestamp fall back to server order.
    """
    if len(submissions) == 1:
        return submissions[0]

    logger.warning(
        f"Expected one submission, got {len(submissions)}: "
        f"{[s.submission_id for s in submissions]}"
    )
    if all(s.submitted_at is not None for s in submissions):
        try:
            return max(submissions, key=lambda s: s.submitted_at)
        except TypeError:
            # naive and aware timestamps mixed
            pass
    return submissions[0]


class SubmissionLifecycleController:
    """Single source of truth for a user's submission on one assignment."""

    def __init__(
        self,
        repository: SubmissionRepository,
        prompt: ConfirmationPrompt,
        codec: Optional[ResultPayloadCodec] = None,
        strict_logic_errors: bool = False,
        confirm_message: str = DEFAULT_CONFIRM_MESSAGE
    ):
        """
        Initialize controller.

        Args:
            repository: Submissions API client
            prompt: Asks the user before a delete
            codec: Result payload decoder
            strict_logic_errors: Raise LogicError on invalid calls instead of
                logging and ignoring them (use in development)
            confirm_message: Question shown before deleting
        """
        self.repository = repository
        self.prompt = prompt
        self.codec = codec or ResultPayloadCodec()
        self.strict_logic_errors = strict_logic_errors
        self.confirm_message = confirm_message

        self.last_logic_error: Optional[LogicError] = None

        self._state = LifecycleState.unselected()
        self._user: Optional[User] = None
        self._assignment: Optional[Assignment] = None
        self._notice: Optional[str] = None
        self._token = 0
        self._listeners: List[StateListener] = []

    @property
    def state(self) -> LifecycleState:
        return self._state

    @property
    def view(self) -> ViewState:
        return ViewState(
            state=self._state,
            user=self._user,
            assignment=self._assignment,
            notice=self._notice,
        )

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """
        Register a callback for every state change.

        Returns:
            Function that removes the callback again
        """
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def refresh(self, user: Optional[User], assignment: Optional[Assignment]) -> LifecycleState:
        """
        Reload the submission state for a user and assignment.

        Passing None for either clears the selection. Supersedes any
        operation still in flight.
        """
        self._notice = None
        return await self._refresh(user, assignment)

    async def clear(self) -> LifecycleState:
        """Drop the current selection."""
        return await self.refresh(None, None)

    async def request_delete(self, submission_id: int) -> DeleteOutcome:
        """
        Delete the current submission after the user confirms.

        The submission must be the one the controller currently knows
        about. Whatever the delete result, the state is then reloaded
        from the server.
        """
        known_id = self._state.known_submission_id
        if known_id is None:
            return self._logic_error(
                f"Delete requested for submission {submission_id} "
                f"but no submission is known (state {self._state.status.value})"
            )
        if known_id != submission_id:
            return self._logic_error(
                f"Delete requested for submission {submission_id} "
                f"but the current submission is {known_id}"
            )

        user, assignment = self._user, self._assignment
        token_before_prompt = self._token

        confirmed = await self.prompt.confirm(self.confirm_message)
        if not confirmed:
            logger.info(f"Deletion of submission {submission_id} cancelled by user")
            return DeleteOutcome.CANCELLED

        if self._token != token_before_prompt or self._state.known_submission_id != submission_id:
            logger.info(f"Deletion of submission {submission_id} dropped, state changed while confirming")
            return DeleteOutcome.SUPERSEDED

        token = self._next_token()
        # a new attempt replaces the banner of the previous one
        self._notice = None
        self._set_state(LifecycleState.deleting(submission_id))

        outcome = DeleteOutcome.DELETED
        try:
            await self.repository.delete_submission(submission_id)
        except NetworkFailure as e:
            outcome = DeleteOutcome.FAILED
            logger.error(f"Error deleting submission {submission_id}: {e}")
            if token == self._token:
                self._notice = DELETE_FAILED_NOTICE
                self._set_state(LifecycleState.error(e.user_message, e.status, submission_id))

        if token != self._token:
            logger.debug(f"Delete of submission {submission_id} finished after a newer operation, not resyncing")
            return outcome

        await self._refresh(user, assignment)
        return outcome

    async def _refresh(self, user: Optional[User], assignment: Optional[Assignment]) -> LifecycleState:
        token = self._next_token()
        self._user = user
        self._assignment = assignment

        if user is None or assignment is None:
            self._set_state(LifecycleState.unselected())
            return self._state

        self._set_state(LifecycleState.loading())
        try:
            submissions = await self.repository.list_submissions(user.user_id, assignment.assignment_id)
        except NetworkFailure as e:
            if token != self._token:
                logger.debug(f"Dropping stale refresh failure (token {token}, latest {self._token})")
                return self._state
            logger.error(
                f"Error fetching submissions for user {user.user_id}, "
                f"assignment {assignment.assignment_id}: {e}"
            )
            self._set_state(LifecycleState.error(e.user_message, e.status))
            return self._state

        if token != self._token:
            logger.debug(f"Dropping stale refresh response (token {token}, latest {self._token})")
            return self._state

        self._set_state(self._state_from_submissions(submissions))
        return self._state

    def _state_from_submissions(self, submissions: List[Submission]) -> LifecycleState:
        if not submissions:
            return LifecycleState.awaiting_upload()

        submission = pick_canonical(submissions)
        decoded = self.codec.decode(submission.results, submission.submission_id)
        if decoded.is_ok:
            return LifecycleState.completed(submission.submission_id, decoded.record)
        return LifecycleState.processing(submission.submission_id)

    def _next_token(self) -> int:
        self._token += 1
        return self._token

    def _set_state(self, state: LifecycleState):
        self._state = state
        view = self.view
        for listener in list(self._listeners):
            try:
                listener(view)
            except Exception as e:
                logger.error(f"State listener failed: {e}", exc_info=True)

    def _logic_error(self, message: str) -> DeleteOutcome:
        error = LogicError(message)
        self.last_logic_error = error
        if self.strict_logic_errors:
            raise error
        logger.error(message)
        return DeleteOutcome.REJECTED
