"""Submission Workflow - intake and the appraisal transition.

Intake: required fields → Upload Validator → token → insert (retrying on
token collision). Appraisal: operator session check → overwrite the three
appraisal fields.
"""

import logging
from typing import Callable, Mapping, Optional, Union

from ...auth.session import OperatorSession
from ...observability import metrics
from ..outcomes import (
    AppraisalRecorded,
    InvalidSubmission,
    InvalidUpload,
    NotAuthorized,
    StorageExhausted,
    SubmissionCreated,
)
from .ports.submission_store import DuplicateTokenError, SubmissionStorePort
from .records import NewSubmission
from .tokens import generate_token, token_hint
from .uploads import IncomingUpload, UploadValidator
from .validation import OPTIONAL_FIELDS, REQUIRED_FIELDS, find_missing_fields, optional_value

logger = logging.getLogger(__name__)

DEFAULT_MAX_INSERT_ATTEMPTS = 5

CreateOutcome = Union[SubmissionCreated, InvalidSubmission, InvalidUpload, StorageExhausted]


class SubmissionWorkflow:
    """Orchestrates submission creation and appraisal.

    The store and validator are injected; the workflow holds no state of
    its own between calls.
    """

    def __init__(
        self,
        store: SubmissionStorePort,
        validator: UploadValidator,
        token_generator: Callable[[], str] = generate_token,
        max_insert_attempts: int = DEFAULT_MAX_INSERT_ATTEMPTS,
    ):
        if max_insert_attempts < 1:
            raise ValueError("max_insert_attempts must be at least 1")
        self.store = store
        self.validator = validator
        self.token_generator = token_generator
        self.max_insert_attempts = max_insert_attempts

    def create_submission(
        self,
        fields: Mapping[str, Optional[str]],
        upload: Optional[IncomingUpload],
    ) -> CreateOutcome:
        """Create a submission and mint its retrieval token.

        Args:
            fields: Descriptive form fields keyed by column name
            upload: The photograph, or None if the caller sent no file

        Returns:
            SubmissionCreated with the token to show the submitter once,
            or InvalidSubmission / InvalidUpload / StorageExhausted
        """
        missing = find_missing_fields(fields)
        if missing:
            metrics.submissions_total.labels(outcome="invalid_submission").inc()
            return InvalidSubmission(missing_fields=missing)

        accepted = self.validator.accept(upload)
        if isinstance(accepted, InvalidUpload):
            metrics.submissions_total.labels(outcome="invalid_upload").inc()
            metrics.upload_rejections_total.labels(reason=accepted.reason.value).inc()
            return accepted

        descriptive = {name: fields[name] for name in REQUIRED_FIELDS}
        descriptive.update({name: optional_value(fields.get(name)) for name in OPTIONAL_FIELDS})

        for attempt in range(1, self.max_insert_attempts + 1):
            token = self.token_generator()
            try:
                record = self.store.insert(
                    NewSubmission(token=token, artifact_path=accepted.reference, **descriptive)
                )
            except DuplicateTokenError:
                metrics.token_collisions_total.inc()
                logger.warning(
                    f"Token collision on insert (attempt {attempt}/{self.max_insert_attempts}), "
                    f"regenerating"
                )
                continue

            metrics.submissions_total.labels(outcome="created").inc()
            logger.info(
                f"Created submission: id={record.id}, token={token_hint(token)}, "
                f"artifact={accepted.reference}"
            )
            return SubmissionCreated(token=token, submission_id=record.id)

        metrics.submissions_total.labels(outcome="storage_exhausted").inc()
        logger.error(
            f"Token space exhausted after {self.max_insert_attempts} attempts; "
            f"artifact {accepted.reference} left unreferenced"
        )
        return StorageExhausted(attempts=self.max_insert_attempts)

    def appraise_submission(
        self,
        session: OperatorSession,
        submission_id: int,
        appraisal: Optional[str],
        estimate_low: Optional[str],
        estimate_high: Optional[str],
    ) -> Union[AppraisalRecorded, NotAuthorized]:
        """Overwrite a submission's appraisal fields.

        Values are opaque strings; estimate_low > estimate_high is accepted.
        A missing id is a successful no-op. Concurrent writers race and the
        last one wins.
        """
        if not session.is_authenticated:
            return NotAuthorized()

        updated = self.store.update_appraisal(
            submission_id,
            appraisal=appraisal,
            estimate_low=estimate_low,
            estimate_high=estimate_high,
        )

        if updated:
            metrics.appraisals_total.inc()
            logger.info(f"Recorded appraisal for submission id={submission_id}")
        else:
            logger.info(f"Appraisal for unknown submission id={submission_id} ignored")

        return AppraisalRecorded(submission_id=submission_id, updated=updated)
