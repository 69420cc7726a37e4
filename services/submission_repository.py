"""
Submission repository for the assignment-submission API.

Performs authenticated fetch/delete requests and normalizes every failure
into a NetworkFailure. Retries are not done here: a failure is reported
once and the user decides whether to try again.
"""

import asyncio
import logging
from typing import Optional, List, Dict, Any

import aiohttp

from auth.base import AuthHeaderProvider
from core.errors import AuthFailure, FailureKind, NetworkFailure
from core.models import Submission

logger = logging.getLogger(__name__)


class SubmissionRepository:
    """Async client for the submissions endpoints."""

    # API routes, relative to the base URL
    ROUTE_USER_SUBMISSIONS = "/submissions/user/{user_id}/assignment/{assignment_id}"
    ROUTE_ASSIGNMENT_SUBMISSIONS = "/submissions/assignment/{assignment_id}"
    ROUTE_SUBMISSION = "/submissions/{submission_id}"

    def __init__(
        self,
        base_url: str,
        auth: AuthHeaderProvider,
        session: Optional[aiohttp.ClientSession] = None,
        timeout_seconds: float = 15.0
    ):
        """
        Initialize the repository.

        Args:
            base_url: API root, e.g. https://example.com/api
            auth: Provider of per-request auth headers
            session: Shared client session; if omitted, one is created on
                first use and closed by close()
            timeout_seconds: Total timeout of a single request
        """
        self.base_url = base_url.rstrip("/")
        self.auth = auth
        self._session = session
        self._owns_session = session is None
        self.timeout = aiohttp.ClientTimeout(total=timeout_seconds)

    async def __aenter__(self) -> "SubmissionRepository":
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    async def close(self):
        """Close the session if the repository created it."""
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
        if self._owns_session:
            self._session = None

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is not None and self._session.closed and not self._owns_session:
            logger.error("Shared client session was closed by its owner")
            raise NetworkFailure("Client session is closed", kind=FailureKind.TRANSPORT)
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
        return self._session

    async def list_submissions(self, user_id: int, assignment_id: int) -> List[Submission]:
        """
        Get the user's submissions for an assignment.

        Returns an empty list when the user has not submitted yet.

        Raises:
            NetworkFailure: on any failed request
        """
        path = self.ROUTE_USER_SUBMISSIONS.format(user_id=user_id, assignment_id=assignment_id)
        return await self._fetch_submissions(path)

    async def list_assignment_submissions(self, assignment_id: int) -> List[Submission]:
        """
        Get every user's submissions for an assignment (admin view).

        Raises:
            NetworkFailure: on any failed request
        """
        path = self.ROUTE_ASSIGNMENT_SUBMISSIONS.format(assignment_id=assignment_id)
        return await self._fetch_submissions(path)

    async def delete_submission(self, submission_id: int) -> None:
        """
        Delete a submission.

        Not idempotent: deleting an already deleted submission fails.

        Raises:
            NetworkFailure: on any failed request
        """
        path = self.ROUTE_SUBMISSION.format(submission_id=submission_id)
        await self._request("DELETE", path)
        logger.info(f"Submission {submission_id} deleted")

    async def _fetch_submissions(self, path: str) -> List[Submission]:
        payload = await self._request("GET", path, expect_json=True)
        if not isinstance(payload, dict):
            raise NetworkFailure("Unexpected response shape", kind=FailureKind.PROTOCOL)

        if payload.get("success") is False:
            message = payload.get("message") or "Request was not successful"
            logger.warning(f"GET {path} reported failure: {message}")
            status = payload.get("status")
            raise NetworkFailure(
                message,
                status=status if isinstance(status, int) and not isinstance(status, bool) else None,
                kind=FailureKind.HTTP,
            )

        rows = payload.get("data") or []
        if not isinstance(rows, list):
            raise NetworkFailure("Submission list is not an array", kind=FailureKind.PROTOCOL)

        if not all(isinstance(row, dict) for row in rows):
            logger.error(f"GET {path} returned a submission row that is not an object")
            raise NetworkFailure("Submission row is not an object", kind=FailureKind.PROTOCOL)

        try:
            return [Submission.from_api(row) for row in rows]
        except (KeyError, TypeError, ValueError) as e:
            logger.error(f"Malformed submission row from GET {path}: {e}", exc_info=True)
            raise NetworkFailure(f"Malformed submission data: {e}", kind=FailureKind.PROTOCOL) from e

    async def _request(self, method: str, path: str, expect_json: bool = False) -> Any:
        url = f"{self.base_url}{path}"

        try:
            headers: Dict[str, str] = await self.auth.get_headers()
        except AuthFailure as e:
            logger.warning(f"{method} {path} skipped, no auth headers: {e}")
            raise NetworkFailure(str(e) or "Not authenticated", kind=FailureKind.AUTH) from e

        session = self._get_session()
        try:
            async with session.request(method, url, headers=headers, timeout=self.timeout) as resp:
                if resp.status < 200 or resp.status >= 300:
                    logger.error(f"{method} {path} failed with status {resp.status}")
                    raise NetworkFailure(
                        "Failed to delete submission" if method == "DELETE" else "Failed to fetch submissions",
                        status=resp.status,
                        kind=FailureKind.HTTP,
                    )
                if not expect_json:
                    return None
                try:
                    return await resp.json(content_type=None)
                except (ValueError, RecursionError) as e:
                    logger.error(f"{method} {path} returned invalid JSON: {e}")
                    raise NetworkFailure("Invalid JSON in response", status=resp.status,
                                         kind=FailureKind.PROTOCOL) from e
        except asyncio.TimeoutError as e:
            logger.error(f"{method} {path} timed out")
            raise NetworkFailure("Request timed out", kind=FailureKind.TRANSPORT) from e
        except aiohttp.ClientError as e:
            logger.error(f"{method} {path} transport error: {e}")
            raise NetworkFailure(f"Network error: {e}", kind=FailureKind.TRANSPORT) from e
