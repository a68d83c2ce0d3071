"""Submission repository - SQLAlchemy implementation of SubmissionStorePort"""

import logging
from typing import List, Optional, Set

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...domain.submissions.ports.submission_store import (
    DuplicateTokenError,
    SubmissionStorePort,
)
from ...domain.submissions.records import NewSubmission, SubmissionRecord
from ...models.submission import Submission

logger = logging.getLogger(__name__)

LIKE_ESCAPE = "\\"


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so the query matches them literally.

    Example:
        >>> escape_like('100%_done')
        '100\\\\%\\\\_done'
    """
    return (
        value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


def to_record(row: Submission) -> SubmissionRecord:
    return SubmissionRecord(
        id=row.id,
        token=row.token,
        artifact_path=row.artifact_path,
        artist_name=row.artist_name,
        title=row.title,
        creation_date=row.creation_date,
        medium=row.medium,
        dimensions=row.dimensions,
        edition_size=row.edition_size,
        provenance=row.provenance,
        exhibition_history=row.exhibition_history,
        purchase_price=row.purchase_price,
        appraisal=row.appraisal,
        estimate_low=row.estimate_low,
        estimate_high=row.estimate_high,
        created_at=row.created_at,
    )


class SqlAlchemySubmissionStore(SubmissionStorePort):
    """Repository for submission table operations.

    Each mutating call is its own transaction: it commits on success and
    rolls back on failure, so callers never hold a half-written row.
    """

    def __init__(self, db: Session):
        """Initialize repository with database session.

        Args:
            db: SQLAlchemy database session
        """
        self.db = db

    def _newest_first(self):
        return select(Submission).order_by(Submission.created_at.desc(), Submission.id.desc())

    def insert(self, submission: NewSubmission) -> SubmissionRecord:
        row = Submission(
            token=submission.token,
            artifact_path=submission.artifact_path,
            artist_name=submission.artist_name,
            title=submission.title,
            creation_date=submission.creation_date,
            medium=submission.medium,
            dimensions=submission.dimensions,
            edition_size=submission.edition_size,
            provenance=submission.provenance,
            exhibition_history=submission.exhibition_history,
            purchase_price=submission.purchase_price,
        )
        self.db.add(row)

        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            # Only a token collision is retryable; anything else propagates
            if self.get_by_token(submission.token) is not None:
                raise DuplicateTokenError("Token already in use")
            raise

        self.db.refresh(row)
        return to_record(row)

    def get_by_token(self, token: str) -> Optional[SubmissionRecord]:
        row = self.db.execute(
            select(Submission).where(Submission.token == token)
        ).scalar_one_or_none()
        return to_record(row) if row is not None else None

    def get_by_id(self, submission_id: int) -> Optional[SubmissionRecord]:
        row = self.db.get(Submission, submission_id)
        return to_record(row) if row is not None else None

    def list_all(self) -> List[SubmissionRecord]:
        rows = self.db.execute(self._newest_first()).scalars().all()
        return [to_record(row) for row in rows]

    def search_by_artist(self, query: str) -> List[SubmissionRecord]:
        pattern = f"%{escape_like(query)}%"
        stmt = self._newest_first().where(
            Submission.artist_name.like(pattern, escape=LIKE_ESCAPE)
        )
        rows = self.db.execute(stmt).scalars().all()
        return [to_record(row) for row in rows]

    def update_appraisal(
        self,
        submission_id: int,
        appraisal: Optional[str],
        estimate_low: Optional[str],
        estimate_high: Optional[str],
    ) -> bool:
        result = self.db.execute(
            update(Submission)
            .where(Submission.id == submission_id)
            .values(
                appraisal=appraisal,
                estimate_low=estimate_low,
                estimate_high=estimate_high,
            )
            .execution_options(synchronize_session=False)
        )
        self.db.commit()
        return result.rowcount > 0

    def artifact_references(self) -> Set[str]:
        return set(self.db.execute(select(Submission.artifact_path)).scalars().all())
