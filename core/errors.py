"""
Error taxonomy for the submission lifecycle client.

- DecodeFailure: benign, a result payload is absent or not decodable yet
- NetworkFailure: an API call failed; retryable by the user
- AuthFailure: auth headers could not be produced
- LogicError: a controller operation was called in an invalid sequence
"""

from enum import Enum
from dataclasses import dataclass
from typing import Optional

from core.models import ResultRecord


class DecodeFailure(str, Enum):
    """Why a result payload could not be decoded."""
    ABSENT = "absent"        # No payload yet, grading still running
    MALFORMED = "malformed"  # Payload present but not a valid result record


@dataclass(frozen=True)
class DecodeResult:
    """Either a decoded record or the reason there is none."""
    record: Optional[ResultRecord] = None
    failure: Optional[DecodeFailure] = None

    @classmethod
    def ok(cls, record: ResultRecord) -> "DecodeResult":
        return cls(record=record)

    @classmethod
    def fail(cls, failure: DecodeFailure) -> "DecodeResult":
        return cls(failure=failure)

    @property
    def is_ok(self) -> bool:
        return self.record is not None


class FailureKind(str, Enum):
    """Where a network operation failed."""
    HTTP = "http"            # Server answered with a failure status or success=false
    TRANSPORT = "transport"  # No response at all (connectivity, timeout)
    AUTH = "auth"            # Auth headers could not be obtained
    PROTOCOL = "protocol"    # Response could not be understood


class NetworkFailure(Exception):
    """A submissions API call failed."""

    def __init__(self, message: str, status: Optional[int] = None, kind: FailureKind = FailureKind.HTTP):
        super().__init__(message)
        self.message = message
        self.status = status
        self.kind = kind

    @property
    def user_message(self) -> str:
        """Text safe to show in an error banner."""
        if self.kind == FailureKind.TRANSPORT:
            return "Could not reach the server. Check your connection and try again."
        if self.kind == FailureKind.AUTH:
            return "You are not signed in. Please log in and try again."
        if self.status == 404:
            return "The submission could not be found. Please try again."
        return "Something went wrong while contacting the server. Please try again."

    def __str__(self) -> str:
        if self.status is not None:
            return f"{self.message} (status {self.status})"
        return self.message


class AuthFailure(Exception):
    """Auth headers could not be produced."""


class LogicError(Exception):
    """Controller operation called in an invalid sequence."""
