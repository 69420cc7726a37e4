"""
Configuration management for the submission lifecycle client.

Loads configuration from environment variables and provides
centralized access to all client settings. Only the wiring layer
(services/wiring.py) and entry-point scripts read it; the controller
and repository receive everything through their constructors.
"""

import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def _get_env_value(key: str, default: str = "") -> str:
    """Read an environment variable, stripping surrounding whitespace."""
    value = os.environ.get(key, "")
    if not value:
        value = os.getenv(key, default)
    # Trailing spaces are a common copy/paste mistake in .env files
    return value.strip() if value else default


class Config:
    """Client configuration."""

    # Submissions API
    SUBMISSIONS_API_BASE_URL: str = _get_env_value("SUBMISSIONS_API_BASE_URL", "http://localhost:3000/api")
    SUBMISSIONS_API_TOKEN: str = _get_env_value("SUBMISSIONS_API_TOKEN", "")

    # Total time allowed for a single HTTP request, in seconds
    REQUEST_TIMEOUT_SECONDS: float = float(_get_env_value("REQUEST_TIMEOUT_SECONDS", "15") or "15")

    # "1" makes the controller raise on invalid call sequences (development);
    # otherwise they are logged and ignored
    STRICT_LOGIC_ERRORS: str = _get_env_value("STRICT_LOGIC_ERRORS", "0")

    DELETE_CONFIRM_MESSAGE: str = _get_env_value(
        "DELETE_CONFIRM_MESSAGE",
        "Are you sure you want to delete this submission?"
    )

    LOG_LEVEL: str = _get_env_value("LOG_LEVEL", "INFO")

    @classmethod
    def strict_logic_errors(cls) -> bool:
        return str(cls.STRICT_LOGIC_ERRORS).strip() == "1"

    @classmethod
    def validate(cls) -> bool:
        """Validate that required configuration is present."""
        base_url = _get_env_value("SUBMISSIONS_API_BASE_URL", "") or cls.SUBMISSIONS_API_BASE_URL
        cls.SUBMISSIONS_API_BASE_URL = base_url.strip().rstrip("/") if base_url else ""
        return cls.SUBMISSIONS_API_BASE_URL.startswith(("http://", "https://"))
