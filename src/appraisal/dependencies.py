"""Global FastAPI dependencies.

Collaborators are built once in ``create_app`` and kept on ``app.state``.
These dependencies hand them to endpoints and wire the per-request pieces
(store bound to the request's database session, workflow, retrieval).
"""

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from .config import Settings
from .database import get_db
from .domain.submissions.ports.artifact_storage import ArtifactStoragePort
from .domain.submissions.retrieval import SubmissionRetrieval
from .domain.submissions.uploads import UploadValidator
from .domain.submissions.workflow import SubmissionWorkflow
from .infrastructure.repositories.submission_repository import SqlAlchemySubmissionStore


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_artifact_storage(request: Request) -> ArtifactStoragePort:
    return request.app.state.artifact_storage


def get_submission_store(db: Annotated[Session, Depends(get_db)]) -> SqlAlchemySubmissionStore:
    return SqlAlchemySubmissionStore(db)


def get_workflow(
    settings: Annotated[Settings, Depends(get_app_settings)],
    store: Annotated[SqlAlchemySubmissionStore, Depends(get_submission_store)],
    storage: Annotated[ArtifactStoragePort, Depends(get_artifact_storage)],
) -> SubmissionWorkflow:
    validator = UploadValidator(
        storage=storage,
        allowed_mime_types=settings.ALLOWED_MIME_TYPES,
        max_size_bytes=settings.MAX_UPLOAD_SIZE_BYTES,
    )
    return SubmissionWorkflow(
        store=store,
        validator=validator,
        max_insert_attempts=settings.TOKEN_INSERT_MAX_ATTEMPTS,
    )


def get_retrieval(
    store: Annotated[SqlAlchemySubmissionStore, Depends(get_submission_store)],
) -> SubmissionRetrieval:
    return SubmissionRetrieval(store)
