"""Ports (interfaces) implemented by infrastructure adapters"""

from .artifact_storage import (
    ArtifactInfo,
    ArtifactStorageError,
    ArtifactStoragePort,
    StoredArtifact,
)
from .submission_store import DuplicateTokenError, SubmissionStorePort

__all__ = [
    "ArtifactInfo",
    "ArtifactStorageError",
    "ArtifactStoragePort",
    "StoredArtifact",
    "DuplicateTokenError",
    "SubmissionStorePort",
]
