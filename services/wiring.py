"""
Builds clients and controllers from Config.

The only place outside entry-point scripts that reads configuration.
"""

from typing import Optional

import aiohttp

from auth.base import AuthHeaderProvider
from auth.static_token import StaticTokenAuthProvider
from core.config import Config
from prompts.base import ConfirmationPrompt
from services.admin_controller import AdminSubmissionController
from services.lifecycle_controller import SubmissionLifecycleController
from services.submission_repository import SubmissionRepository


def create_repository(
    auth: Optional[AuthHeaderProvider] = None,
    session: Optional[aiohttp.ClientSession] = None
) -> SubmissionRepository:
    """Create a repository for the configured API."""
    return SubmissionRepository(
        base_url=Config.SUBMISSIONS_API_BASE_URL,
        auth=auth or StaticTokenAuthProvider(Config.SUBMISSIONS_API_TOKEN),
        session=session,
        timeout_seconds=Config.REQUEST_TIMEOUT_SECONDS,
    )


def create_controller(repository: SubmissionRepository, prompt: ConfirmationPrompt) -> SubmissionLifecycleController:
    return SubmissionLifecycleController(
        repository=repository,
        prompt=prompt,
        strict_logic_errors=Config.strict_logic_errors(),
        confirm_message=Config.DELETE_CONFIRM_MESSAGE,
    )


def create_admin_controller(repository: SubmissionRepository, prompt: ConfirmationPrompt) -> AdminSubmissionController:
    return AdminSubmissionController(
        repository=repository,
        prompt=prompt,
        strict_logic_errors=Config.strict_logic_errors(),
        confirm_message=Config.DELETE_CONFIRM_MESSAGE,
    )
