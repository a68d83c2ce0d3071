"""Typed outcomes returned by the submission core.

Expected conditions (bad input, lookup misses, missing operator session)
are returned as values so callers branch on type instead of catching
exceptions.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Tuple


class UploadRejection(str, Enum):
    """Why an upload was refused"""
    MISSING_FILE = "MISSING_FILE"
    UNSUPPORTED_TYPE = "UNSUPPORTED_TYPE"
    EMPTY_FILE = "EMPTY_FILE"
    FILE_TOO_LARGE = "FILE_TOO_LARGE"


@dataclass(frozen=True)
class SubmissionCreated:
    """Intake succeeded. ``token`` is shown to the submitter exactly once."""
    token: str
    submission_id: int


@dataclass(frozen=True)
class InvalidSubmission:
    """One or more required descriptive fields were absent or blank."""
    missing_fields: Tuple[str, ...]

    @property
    def message(self) -> str:
        return "Missing required fields: " + ", ".join(self.missing_fields)


@dataclass(frozen=True)
class InvalidUpload:
    """The photograph was rejected before anything was stored."""
    reason: UploadRejection
    message: str


@dataclass(frozen=True)
class StorageExhausted:
    """Every token generated for this intake collided with an existing one."""
    attempts: int


@dataclass(frozen=True)
class NotFound:
    """Lookup miss. Carries no detail about near matches."""


@dataclass(frozen=True)
class NotAuthorized:
    """Operator-only operation attempted from an anonymous session."""


@dataclass(frozen=True)
class Authenticated:
    expires_at: datetime


@dataclass(frozen=True)
class AuthenticationFailed:
    message: str = "Invalid password"


@dataclass(frozen=True)
class AppraisalRecorded:
    """Appraisal write finished. ``updated`` is False when no record matched."""
    submission_id: int
    updated: bool
