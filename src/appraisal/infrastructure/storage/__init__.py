"""Artifact storage adapters"""

from .local_artifact_adapter import LocalArtifactStorage
from .s3_artifact_adapter import S3ArtifactStorage
from .storage_config import build_artifact_storage, validate_storage_settings

__all__ = [
    "LocalArtifactStorage",
    "S3ArtifactStorage",
    "build_artifact_storage",
    "validate_storage_settings",
]
