"""Artifact storage selection and validation.

ARTIFACT_BACKEND picks the adapter:

    # Local directory (development, single host):
    ARTIFACT_BACKEND=local
    UPLOAD_DIR=uploads

    # S3 / MinIO:
    ARTIFACT_BACKEND=s3
    S3_ENDPOINT_URL=http://localhost:9000   # unset for AWS S3
    S3_ACCESS_KEY_ID=minioadmin
    S3_SECRET_ACCESS_KEY=minioadmin
    S3_BUCKET_NAME=art-appraisal-uploads
    S3_REGION=us-east-1
"""

from ...config import Settings
from ...domain.submissions.ports.artifact_storage import ArtifactStoragePort
from .local_artifact_adapter import LocalArtifactStorage
from .s3_artifact_adapter import S3ArtifactStorage

SUPPORTED_BACKENDS = ("local", "s3")


def validate_storage_settings(settings: Settings) -> None:
    """Validate artifact storage configuration.

    Raises:
        ValueError: If configuration is invalid
    """
    backend = settings.ARTIFACT_BACKEND.lower()
    if backend not in SUPPORTED_BACKENDS:
        raise ValueError(
            f"Unsupported ARTIFACT_BACKEND: {settings.ARTIFACT_BACKEND}. "
            f"Use one of: {', '.join(SUPPORTED_BACKENDS)}"
        )

    if backend == "local":
        if not settings.UPLOAD_DIR:
            raise ValueError("UPLOAD_DIR is required for the local artifact backend")
        return

    if not settings.S3_ACCESS_KEY_ID or not settings.S3_SECRET_ACCESS_KEY:
        raise ValueError("S3_ACCESS_KEY_ID and S3_SECRET_ACCESS_KEY are required")

    if not settings.S3_BUCKET_NAME:
        raise ValueError("S3_BUCKET_NAME is required")

    if settings.S3_ENDPOINT_URL and not settings.S3_ENDPOINT_URL.startswith(("http://", "https://")):
        raise ValueError(
            f"Invalid S3_ENDPOINT_URL: {settings.S3_ENDPOINT_URL}. "
            "Must start with http:// or https://"
        )


def build_artifact_storage(settings: Settings) -> ArtifactStoragePort:
    """Construct the configured artifact storage adapter."""
    validate_storage_settings(settings)

    if settings.ARTIFACT_BACKEND.lower() == "s3":
        return S3ArtifactStorage(
            endpoint_url=settings.S3_ENDPOINT_URL or None,
            access_key=settings.S3_ACCESS_KEY_ID,
            secret_key=settings.S3_SECRET_ACCESS_KEY,
            bucket_name=settings.S3_BUCKET_NAME,
            region=settings.S3_REGION,
            key_prefix=settings.S3_KEY_PREFIX,
        )

    return LocalArtifactStorage(settings.UPLOAD_DIR)
