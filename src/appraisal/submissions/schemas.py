"""Submission API request/response schemas"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from ..domain.submissions.records import SubmissionRecord

PHOTO_URL_PREFIX = "/api/v1/uploads"


def photo_url_for(artifact_path: str) -> str:
    """Public URL of a stored photograph, from its relative reference."""
    return f"{PHOTO_URL_PREFIX}/{artifact_path.rsplit('/', 1)[-1]}"


class SubmissionCreatedResponse(BaseModel):
    """Response for a successful intake. The token is never shown again."""
    token: str = Field(..., description="Retrieval code for the submitter")
    submission_id: int = Field(..., description="Store-assigned submission id")
    result_url: str = Field(..., description="Where the submitter can check the result")


class PublicSubmissionResponse(BaseModel):
    """Result view for token holders. Carries neither the token nor the id."""
    artist_name: str
    title: str
    creation_date: str
    medium: str
    dimensions: str
    edition_size: Optional[str] = None
    provenance: Optional[str] = None
    exhibition_history: Optional[str] = None
    purchase_price: Optional[str] = None
    photo_url: str
    appraised: bool = Field(..., description="Whether the operator has recorded an appraisal")
    appraisal: Optional[str] = None
    estimate_low: Optional[str] = None
    estimate_high: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_record(cls, record: SubmissionRecord) -> "PublicSubmissionResponse":
        return cls(
            artist_name=record.artist_name,
            title=record.title,
            creation_date=record.creation_date,
            medium=record.medium,
            dimensions=record.dimensions,
            edition_size=record.edition_size,
            provenance=record.provenance,
            exhibition_history=record.exhibition_history,
            purchase_price=record.purchase_price,
            photo_url=photo_url_for(record.artifact_path),
            appraised=record.is_appraised,
            appraisal=record.appraisal,
            estimate_low=record.estimate_low,
            estimate_high=record.estimate_high,
            created_at=record.created_at,
        )


class AdminSubmissionResponse(BaseModel):
    """Full submission as shown in the operator console"""
    id: int
    token: str
    artifact_path: str
    photo_url: str
    artist_name: str
    title: str
    creation_date: str
    medium: str
    dimensions: str
    edition_size: Optional[str] = None
    provenance: Optional[str] = None
    exhibition_history: Optional[str] = None
    purchase_price: Optional[str] = None
    appraisal: Optional[str] = None
    estimate_low: Optional[str] = None
    estimate_high: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_record(cls, record: SubmissionRecord) -> "AdminSubmissionResponse":
        return cls(
            id=record.id,
            token=record.token,
            artifact_path=record.artifact_path,
            photo_url=photo_url_for(record.artifact_path),
            artist_name=record.artist_name,
            title=record.title,
            creation_date=record.creation_date,
            medium=record.medium,
            dimensions=record.dimensions,
            edition_size=record.edition_size,
            provenance=record.provenance,
            exhibition_history=record.exhibition_history,
            purchase_price=record.purchase_price,
            appraisal=record.appraisal,
            estimate_low=record.estimate_low,
            estimate_high=record.estimate_high,
            created_at=record.created_at,
        )


class AdminSubmissionListResponse(BaseModel):
    items: List[AdminSubmissionResponse]
    total: int
    search: Optional[str] = None


class AppraisalRequest(BaseModel):
    """Appraisal fields; stored verbatim as free text"""
    appraisal: Optional[str] = Field(None, description="Operator's assessment")
    estimate_low: Optional[str] = Field(None, description="Low estimate")
    estimate_high: Optional[str] = Field(None, description="High estimate")


class AppraisalResponse(BaseModel):
    submission_id: int
    updated: bool = Field(..., description="False when no submission has this id")


class ErrorResponse(BaseModel):
    """Error body shared by the submission endpoints"""
    error: str = Field(..., description="Error code (e.g. INVALID_SUBMISSION, FILE_TOO_LARGE)")
    message: str = Field(..., description="Human-readable error message")
    missing_fields: Optional[List[str]] = Field(None, description="Required fields that were blank")
    max_size_bytes: Optional[int] = Field(None, description="Upload ceiling (FILE_TOO_LARGE only)")
