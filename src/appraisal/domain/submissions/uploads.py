"""Upload Validator - accepts or rejects the submitted photograph.

On acceptance exactly one artifact is written to storage under a random
name. On rejection nothing is written.
"""

import logging
from dataclasses import dataclass
from typing import BinaryIO, Iterable, Optional, Union

from ..outcomes import InvalidUpload, UploadRejection
from .ports.artifact_storage import ArtifactStoragePort, StoredArtifact
from .validation import (
    DEFAULT_ALLOWED_MIME_TYPES,
    MAX_UPLOAD_SIZE,
    generate_artifact_name,
    is_supported_image_type,
    normalize_mime_type,
    validate_file_size,
)

logger = logging.getLogger(__name__)

READ_CHUNK_SIZE = 64 * 1024


@dataclass
class IncomingUpload:
    """A file as received from the caller, not yet validated."""
    filename: Optional[str]
    content_type: Optional[str]
    stream: BinaryIO


class UploadValidator:
    """Enforces the upload policy and binds accepted files to storage."""

    def __init__(
        self,
        storage: ArtifactStoragePort,
        allowed_mime_types: Optional[Iterable[str]] = None,
        max_size_bytes: int = MAX_UPLOAD_SIZE,
    ):
        self.storage = storage
        self.allowed_mime_types = frozenset(
            normalize_mime_type(t) for t in (allowed_mime_types or DEFAULT_ALLOWED_MIME_TYPES)
        )
        self.max_size_bytes = max_size_bytes

    def accept(self, upload: Optional[IncomingUpload]) -> Union[StoredArtifact, InvalidUpload]:
        """Validate an upload and store it.

        Processing:
        1. Reject a missing file
        2. Reject a media type outside the allow-list
        3. Read at most max_size_bytes + 1 bytes, reject empty or oversized content
        4. Write the content under a fresh random name

        Returns:
            StoredArtifact on success, InvalidUpload otherwise

        Raises:
            ArtifactStorageError: If the storage backend fails the write
        """
        if upload is None or upload.stream is None:
            return InvalidUpload(
                reason=UploadRejection.MISSING_FILE,
                message="Please upload a photo of the artwork",
            )

        if not is_supported_image_type(upload.content_type, self.allowed_mime_types):
            logger.info(f"Rejected upload with media type {upload.content_type!r}")
            return InvalidUpload(
                reason=UploadRejection.UNSUPPORTED_TYPE,
                message=self._unsupported_type_message(),
            )

        content = self._read_bounded(upload.stream)
        is_valid, error_msg = validate_file_size(len(content), self.max_size_bytes)
        if not is_valid:
            reason = UploadRejection.EMPTY_FILE if not content else UploadRejection.FILE_TOO_LARGE
            logger.info(f"Rejected upload: {error_msg}")
            return InvalidUpload(reason=reason, message=error_msg)

        name = generate_artifact_name(upload.filename, upload.content_type)
        stored = self.storage.store_artifact(
            name=name,
            content=content,
            mime_type=normalize_mime_type(upload.content_type),
        )

        logger.info(
            f"Stored artifact: reference={stored.reference}, "
            f"size={stored.size_bytes}, sha256={stored.sha256}"
        )
        return stored

    def _read_bounded(self, stream: BinaryIO) -> bytes:
        """Read up to one byte past the ceiling, enough to detect oversize."""
        limit = self.max_size_bytes + 1
        chunks = []
        remaining = limit
        while remaining > 0:
            chunk = stream.read(min(READ_CHUNK_SIZE, remaining))
            if not chunk:
                break
            chunks.append(chunk)
            remaining -= len(chunk)
        return b"".join(chunks)

    def _unsupported_type_message(self) -> str:
        labels = sorted(
            t.split("/", 1)[-1].upper() for t in self.allowed_mime_types
        )
        if len(labels) == 1:
            return f"Only {labels[0]} images are allowed"
        return f"Only {', '.join(labels[:-1])} and {labels[-1]} images are allowed"
