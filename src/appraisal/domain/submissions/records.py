"""Domain values for submissions, independent of the ORM."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class NewSubmission:
    """Everything the store needs to insert a submission."""
    token: str
    artifact_path: str
    artist_name: str
    title: str
    creation_date: str
    medium: str
    dimensions: str
    edition_size: Optional[str] = None
    provenance: Optional[str] = None
    exhibition_history: Optional[str] = None
    purchase_price: Optional[str] = None


@dataclass(frozen=True)
class SubmissionRecord:
    """A persisted submission as read back from the store."""
    id: int
    token: str
    artifact_path: str
    artist_name: str
    title: str
    creation_date: str
    medium: str
    dimensions: str
    edition_size: Optional[str]
    provenance: Optional[str]
    exhibition_history: Optional[str]
    purchase_price: Optional[str]
    appraisal: Optional[str]
    estimate_low: Optional[str]
    estimate_high: Optional[str]
    created_at: Optional[datetime]

    @property
    def is_appraised(self) -> bool:
        return self.appraisal is not None
