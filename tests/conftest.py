# tests/conftest.py

from datetime import datetime

import pytest

from core.models import Assignment, User
from prompts.mock_prompt import MockConfirmationPrompt
from services.lifecycle_controller import SubmissionLifecycleController
from fakes import FakeRepository, make_submission


@pytest.fixture
def sample_user():
    return User(user_id=7, first_name="Sean", last_name="Cameron", email="scameron@mmm.edu")


@pytest.fixture
def other_user():
    return User(user_id=8, first_name="Alice", last_name="Smith")


@pytest.fixture
def sample_assignment():
    return Assignment(
        assignment_id=12,
        title="Line follower",
        description="Upload your controller script",
        due_date=datetime(1987, 6, 21, 23, 59),
    )


@pytest.fixture
def graded_submission():
    return make_submission(results='{"time":[0],"score":[100]}')


@pytest.fixture
def ungraded_submission():
    return make_submission(results=None)


@pytest.fixture
def repository():
    return FakeRepository()


@pytest.fixture
def approving_prompt():
    return MockConfirmationPrompt(default=True)


@pytest.fixture
def declining_prompt():
    return MockConfirmationPrompt(default=False)


@pytest.fixture
def controller(repository, approving_prompt):
    return SubmissionLifecycleController(repository, approving_prompt)
