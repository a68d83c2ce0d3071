"""Submission Store Port - Domain interface for persisted submissions.

The store is the sole owner of persisted state. It assigns ids and
creation timestamps, enforces token uniqueness and exposes exactly one
mutation: overwriting the appraisal fields.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Set

from ..records import NewSubmission, SubmissionRecord


class DuplicateTokenError(Exception):
    """Insert refused because the token is already in use."""
    pass


class SubmissionStorePort(ABC):

    @abstractmethod
    def insert(self, submission: NewSubmission) -> SubmissionRecord:
        """Insert a new submission.

        Raises:
            DuplicateTokenError: If the token collides with an existing row.
                Nothing is written in that case.
        """
        pass

    @abstractmethod
    def get_by_token(self, token: str) -> Optional[SubmissionRecord]:
        pass

    @abstractmethod
    def get_by_id(self, submission_id: int) -> Optional[SubmissionRecord]:
        pass

    @abstractmethod
    def list_all(self) -> List[SubmissionRecord]:
        """All submissions, newest first."""
        pass

    @abstractmethod
    def search_by_artist(self, query: str) -> List[SubmissionRecord]:
        """Submissions whose artist name contains ``query``, newest first."""
        pass

    @abstractmethod
    def update_appraisal(
        self,
        submission_id: int,
        appraisal: Optional[str],
        estimate_low: Optional[str],
        estimate_high: Optional[str],
    ) -> bool:
        """Overwrite the appraisal fields.

        Returns:
            bool: True if a row was updated, False if no row has this id
        """
        pass

    @abstractmethod
    def artifact_references(self) -> Set[str]:
        """Every artifact_path currently referenced by a submission."""
        pass
