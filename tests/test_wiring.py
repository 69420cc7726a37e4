# tests/test_wiring.py

from auth.static_token import StaticTokenAuthProvider
from core.config import Config
from prompts.mock_prompt import MockConfirmationPrompt
from services.admin_controller import AdminSubmissionController
from services.lifecycle_controller import SubmissionLifecycleController
from services.wiring import create_admin_controller, create_controller, create_repository


def test_repository_uses_config(monkeypatch):
    monkeypatch.setattr(Config, "SUBMISSIONS_API_BASE_URL", "https://grader.example.com/api/")
    monkeypatch.setattr(Config, "SUBMISSIONS_API_TOKEN", "abc")
    monkeypatch.setattr(Config, "REQUEST_TIMEOUT_SECONDS", 3.0)

    repository = create_repository()

    assert repository.base_url == "https://grader.example.com/api"
    assert isinstance(repository.auth, StaticTokenAuthProvider)
    assert repository.auth.token == "abc"
    assert repository.timeout.total == 3.0


def test_controllers_follow_strict_flag(monkeypatch):
    monkeypatch.setattr(Config, "STRICT_LOGIC_ERRORS", "1")
    monkeypatch.setattr(Config, "DELETE_CONFIRM_MESSAGE", "Delete it?")
    repository = create_repository()
    prompt = MockConfirmationPrompt()

    controller = create_controller(repository, prompt)
    admin = create_admin_controller(repository, prompt)

    assert isinstance(controller, SubmissionLifecycleController)
    assert isinstance(admin, AdminSubmissionController)
    assert controller.strict_logic_errors and admin.strict_logic_errors
    assert controller.confirm_message == "Delete it?"


def test_validate_rejects_non_http_url(monkeypatch):
    monkeypatch.delenv("SUBMISSIONS_API_BASE_URL", raising=False)
    monkeypatch.setattr(Config, "SUBMISSIONS_API_BASE_URL", "ftp://nowhere")

    assert Config.validate() is False


def test_validate_strips_trailing_slash(monkeypatch):
    # validate() writes the class attribute; register it so it is restored
    monkeypatch.setattr(Config, "SUBMISSIONS_API_BASE_URL", Config.SUBMISSIONS_API_BASE_URL)
    monkeypatch.setenv("SUBMISSIONS_API_BASE_URL", " https://grader.example.com/api/ ")

    assert Config.validate() is True
    assert Config.SUBMISSIONS_API_BASE_URL == "https://grader.example.com/api"
