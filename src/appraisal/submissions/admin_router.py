"""Operator console endpoints.

Every endpoint here is operator-only. Anonymous callers are sent to the
login surface with 303 See Other rather than an error status, matching
what a browser form post expects.
"""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import RedirectResponse

from ..auth.dependencies import OperatorSessionDep
from ..dependencies import get_retrieval, get_workflow
from ..domain.outcomes import NotAuthorized, NotFound
from ..domain.submissions.retrieval import SubmissionRetrieval
from ..domain.submissions.workflow import SubmissionWorkflow
from .schemas import (
    AdminSubmissionListResponse,
    AdminSubmissionResponse,
    AppraisalRequest,
    AppraisalResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin/submissions", tags=["Operator"])

LOGIN_PATH = "/api/v1/admin"

_REDIRECT_RESPONSES = {303: {"description": "No operator session; redirect to login"}}


def _to_login() -> RedirectResponse:
    return RedirectResponse(url=LOGIN_PATH, status_code=status.HTTP_303_SEE_OTHER)


@router.get("", response_model=AdminSubmissionListResponse, responses=_REDIRECT_RESPONSES)
def list_submissions(
    session: OperatorSessionDep,
    retrieval: Annotated[SubmissionRetrieval, Depends(get_retrieval)],
    search: Annotated[Optional[str], Query(description="Substring of the artist name")] = None,
):
    """List all submissions, newest first, optionally filtered by artist."""
    if search:
        outcome = retrieval.search_submissions_by_artist(session, search)
    else:
        outcome = retrieval.list_all_submissions(session)

    if isinstance(outcome, NotAuthorized):
        return _to_login()

    return AdminSubmissionListResponse(
        items=[AdminSubmissionResponse.from_record(r) for r in outcome],
        total=len(outcome),
        search=search or None,
    )


@router.get(
    "/{submission_id}",
    response_model=AdminSubmissionResponse,
    responses={**_REDIRECT_RESPONSES, 404: {"description": "Submission not found"}},
)
def get_submission(
    submission_id: int,
    session: OperatorSessionDep,
    retrieval: Annotated[SubmissionRetrieval, Depends(get_retrieval)],
):
    outcome = retrieval.get_submission_by_id(session, submission_id)
    if isinstance(outcome, NotAuthorized):
        return _to_login()
    if isinstance(outcome, NotFound):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Submission not found")
    return AdminSubmissionResponse.from_record(outcome)


@router.post(
    "/{submission_id}/appraisal",
    response_model=AppraisalResponse,
    responses=_REDIRECT_RESPONSES,
)
def record_appraisal(
    submission_id: int,
    body: AppraisalRequest,
    session: OperatorSessionDep,
    workflow: Annotated[SubmissionWorkflow, Depends(get_workflow)],
):
    """Overwrite the appraisal and estimates of a submission.

    An unknown id is not an error: nothing is written and ``updated`` is
    false in the response.
    """
    outcome = workflow.appraise_submission(
        session,
        submission_id,
        appraisal=body.appraisal,
        estimate_low=body.estimate_low,
        estimate_high=body.estimate_high,
    )
    if isinstance(outcome, NotAuthorized):
        return _to_login()
    return AppraisalResponse(submission_id=outcome.submission_id, updated=outcome.updated)
