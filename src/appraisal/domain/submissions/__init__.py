"""Submissions domain module - intake, capability tokens, appraisal, retrieval"""

from ..outcomes import (
    AppraisalRecorded,
    Authenticated,
    AuthenticationFailed,
    InvalidSubmission,
    InvalidUpload,
    NotAuthorized,
    NotFound,
    StorageExhausted,
    SubmissionCreated,
    UploadRejection,
)
from .records import NewSubmission, SubmissionRecord
from .retrieval import SubmissionRetrieval
from .tokens import TOKEN_LENGTH, generate_token
from .uploads import IncomingUpload, UploadValidator
from .validation import (
    DEFAULT_ALLOWED_MIME_TYPES,
    MAX_UPLOAD_SIZE,
    OPTIONAL_FIELDS,
    REQUIRED_FIELDS,
    find_missing_fields,
    is_supported_image_type,
    validate_file_size,
)
from .workflow import SubmissionWorkflow

__all__ = [
    "AppraisalRecorded",
    "Authenticated",
    "AuthenticationFailed",
    "InvalidSubmission",
    "InvalidUpload",
    "NotAuthorized",
    "NotFound",
    "StorageExhausted",
    "SubmissionCreated",
    "UploadRejection",
    "NewSubmission",
    "SubmissionRecord",
    "SubmissionRetrieval",
    "TOKEN_LENGTH",
    "generate_token",
    "IncomingUpload",
    "UploadValidator",
    "DEFAULT_ALLOWED_MIME_TYPES",
    "MAX_UPLOAD_SIZE",
    "OPTIONAL_FIELDS",
    "REQUIRED_FIELDS",
    "find_missing_fields",
    "is_supported_image_type",
    "validate_file_size",
    "SubmissionWorkflow",
]
