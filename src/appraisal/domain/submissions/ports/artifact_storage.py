"""Artifact Storage Port - Domain interface for storing uploaded photographs.

Artifacts live flat under a single namespace, addressed by a random name
chosen by the Upload Validator. Adapters provide a local directory or an
S3-compatible bucket behind the same contract.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import BinaryIO, List


class ArtifactStorageError(Exception):
    """Base exception for artifact storage operations."""
    pass


@dataclass
class StoredArtifact:
    """Metadata for an artifact written to storage.

    Attributes:
        name: Random artifact name including extension (e.g. '3f9c...e1.jpg')
        reference: Relative path persisted on the submission (e.g. 'uploads/3f9c...e1.jpg')
        sha256: SHA256 hash of the content (hex format)
        size_bytes: Content size in bytes
        mime_type: Claimed media type of the upload
    """
    name: str
    reference: str
    sha256: str
    size_bytes: int
    mime_type: str


@dataclass
class ArtifactInfo:
    """Listing entry used by the orphan sweep."""
    name: str
    reference: str
    modified_at: datetime


class ArtifactStoragePort(ABC):
    """Port interface for artifact storage.

    Names handed to these methods are the bare artifact names produced by
    the Upload Validator, never submitter-supplied paths.
    """

    @abstractmethod
    def store_artifact(self, name: str, content: bytes, mime_type: str) -> StoredArtifact:
        """Write one artifact.

        Args:
            name: Random artifact name (must not already exist)
            content: Full artifact bytes, already validated
            mime_type: Media type to record alongside the content

        Returns:
            StoredArtifact: Reference and integrity metadata

        Raises:
            ArtifactStorageError: If the write fails
        """
        pass

    @abstractmethod
    def retrieve_artifact(self, name: str) -> BinaryIO:
        """Open an artifact for reading.

        Raises:
            FileNotFoundError: If no artifact has this name
            ArtifactStorageError: If retrieval fails

        Note:
            Caller is responsible for closing the returned stream.
        """
        pass

    @abstractmethod
    def delete_artifact(self, name: str) -> bool:
        """Delete an artifact. Returns False if it did not exist."""
        pass

    @abstractmethod
    def artifact_exists(self, name: str) -> bool:
        pass

    @abstractmethod
    def list_artifacts(self) -> List[ArtifactInfo]:
        """List every stored artifact with its modification time."""
        pass

    @abstractmethod
    def check_available(self) -> None:
        """Raise ArtifactStorageError unless the backend can accept writes."""
        pass

    @abstractmethod
    def reference_for(self, name: str) -> str:
        """Relative path stored on the submission for an artifact name."""
        pass

    @abstractmethod
    def name_from_reference(self, reference: str) -> str:
        """Inverse of reference_for."""
        pass
