"""Anonymous submission endpoints.

POST /submissions takes the intake form and photograph and answers with
the retrieval token, which is shown exactly once. GET /submissions/{token}
is the result view for whoever holds that token.
"""

import logging
import mimetypes
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from fastapi.responses import JSONResponse, StreamingResponse
from starlette.background import BackgroundTask

from ..config import Settings
from ..dependencies import get_app_settings, get_artifact_storage, get_retrieval, get_workflow
from ..domain.outcomes import (
    InvalidSubmission,
    InvalidUpload,
    NotFound,
    StorageExhausted,
    UploadRejection,
)
from ..domain.submissions.ports.artifact_storage import ArtifactStoragePort
from ..domain.submissions.retrieval import SubmissionRetrieval
from ..domain.submissions.uploads import IncomingUpload
from ..domain.submissions.validation import is_valid_artifact_name
from ..domain.submissions.workflow import SubmissionWorkflow
from .schemas import ErrorResponse, PublicSubmissionResponse, SubmissionCreatedResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Submissions"])

NOT_FOUND_MESSAGE = "No submission found with that code"

UPLOAD_REJECTION_STATUS = {
    UploadRejection.MISSING_FILE: status.HTTP_400_BAD_REQUEST,
    UploadRejection.EMPTY_FILE: status.HTTP_400_BAD_REQUEST,
    UploadRejection.UNSUPPORTED_TYPE: status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
    UploadRejection.FILE_TOO_LARGE: 413,
}


def _error(status_code: int, body: ErrorResponse) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


@router.post(
    "/submissions",
    status_code=status.HTTP_201_CREATED,
    response_model=SubmissionCreatedResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Missing fields, missing or empty photo"},
        413: {"model": ErrorResponse, "description": "Photo too large"},
        415: {"model": ErrorResponse, "description": "Photo is not an allowed image type"},
        500: {"model": ErrorResponse, "description": "Could not allocate a retrieval code"},
    },
)
def create_submission(
    workflow: Annotated[SubmissionWorkflow, Depends(get_workflow)],
    settings: Annotated[Settings, Depends(get_app_settings)],
    artist_name: Annotated[Optional[str], Form()] = None,
    title: Annotated[Optional[str], Form()] = None,
    creation_date: Annotated[Optional[str], Form()] = None,
    medium: Annotated[Optional[str], Form()] = None,
    dimensions: Annotated[Optional[str], Form()] = None,
    edition_size: Annotated[Optional[str], Form()] = None,
    provenance: Annotated[Optional[str], Form()] = None,
    exhibition_history: Annotated[Optional[str], Form()] = None,
    purchase_price: Annotated[Optional[str], Form()] = None,
    photo: Annotated[Optional[UploadFile], File()] = None,
):
    """Submit an artwork for appraisal.

    Required fields are validated before the photo is looked at, so a
    rejected form never leaves an artifact behind.
    """
    fields = {
        "artist_name": artist_name,
        "title": title,
        "creation_date": creation_date,
        "medium": medium,
        "dimensions": dimensions,
        "edition_size": edition_size,
        "provenance": provenance,
        "exhibition_history": exhibition_history,
        "purchase_price": purchase_price,
    }

    upload = None
    if photo is not None and photo.filename:
        upload = IncomingUpload(
            filename=photo.filename,
            content_type=photo.content_type,
            stream=photo.file,
        )

    outcome = workflow.create_submission(fields, upload)

    if isinstance(outcome, InvalidSubmission):
        return _error(
            status.HTTP_400_BAD_REQUEST,
            ErrorResponse(
                error="INVALID_SUBMISSION",
                message=outcome.message,
                missing_fields=list(outcome.missing_fields),
            ),
        )

    if isinstance(outcome, InvalidUpload):
        body = ErrorResponse(error=outcome.reason.value, message=outcome.message)
        if outcome.reason is UploadRejection.FILE_TOO_LARGE:
            body.max_size_bytes = settings.MAX_UPLOAD_SIZE_BYTES
        return _error(UPLOAD_REJECTION_STATUS[outcome.reason], body)

    if isinstance(outcome, StorageExhausted):
        return _error(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            ErrorResponse(
                error="STORAGE_EXHAUSTED",
                message="Could not allocate a retrieval code. Please try again.",
            ),
        )

    return SubmissionCreatedResponse(
        token=outcome.token,
        submission_id=outcome.submission_id,
        result_url=f"/api/v1/submissions/{outcome.token}",
    )


@router.get(
    "/submissions/{token}",
    response_model=PublicSubmissionResponse,
    responses={404: {"description": NOT_FOUND_MESSAGE}},
)
def get_submission_result(
    token: str,
    retrieval: Annotated[SubmissionRetrieval, Depends(get_retrieval)],
):
    """Result view for the holder of a retrieval code."""
    outcome = retrieval.get_submission_by_token(token)
    if isinstance(outcome, NotFound):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND_MESSAGE)
    return PublicSubmissionResponse.from_record(outcome)


@router.get("/uploads/{name}", responses={404: {"description": "Photo not found"}})
def get_uploaded_photo(
    name: str,
    storage: Annotated[ArtifactStoragePort, Depends(get_artifact_storage)],
):
    """Stream a stored photograph by its artifact name."""
    if not is_valid_artifact_name(name):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Photo not found")

    try:
        stream = storage.retrieve_artifact(name)
    except FileNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Photo not found")

    media_type, _ = mimetypes.guess_type(name)
    return StreamingResponse(
        stream,
        media_type=media_type or "application/octet-stream",
        background=BackgroundTask(stream.close),
    )
