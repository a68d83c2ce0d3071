"""Local directory adapter for ArtifactStoragePort.

Artifacts are written flat into one directory, which the API serves
under /uploads/{name}.
"""

import hashlib
import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import BinaryIO, List, Union

from ...domain.submissions.ports.artifact_storage import (
    ArtifactInfo,
    ArtifactStorageError,
    ArtifactStoragePort,
    StoredArtifact,
)
from ...domain.submissions.validation import is_valid_artifact_name

logger = logging.getLogger(__name__)

REFERENCE_PREFIX = "uploads"


class LocalArtifactStorage(ArtifactStoragePort):
    """Stores artifacts as files under ``root_dir``.

    Example:
        storage = LocalArtifactStorage("uploads")
        stored = storage.store_artifact("3f9c...e1.jpg", data, "image/jpeg")
        stored.reference  # 'uploads/3f9c...e1.jpg'
    """

    def __init__(self, root_dir: Union[str, Path]):
        self.root_dir = Path(root_dir)
        try:
            self.root_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ArtifactStorageError(f"Cannot create upload directory {self.root_dir}: {e}")

        logger.info(f"Initialized local artifact storage: root={self.root_dir}")

    def _path_for(self, name: str) -> Path:
        if not is_valid_artifact_name(name):
            raise FileNotFoundError(f"Artifact not found: {name}")
        return self.root_dir / name

    def reference_for(self, name: str) -> str:
        return f"{REFERENCE_PREFIX}/{name}"

    def name_from_reference(self, reference: str) -> str:
        return reference.rsplit("/", 1)[-1]

    def store_artifact(self, name: str, content: bytes, mime_type: str) -> StoredArtifact:
        if not is_valid_artifact_name(name):
            raise ArtifactStorageError(f"Refusing to store artifact with unsafe name: {name!r}")

        path = self.root_dir / name
        try:
            # 'xb' fails instead of overwriting an existing artifact
            with open(path, "xb") as f:
                f.write(content)
        except FileExistsError:
            raise ArtifactStorageError(f"Artifact already exists: {name}")
        except OSError as e:
            logger.error(f"Local artifact write failed: name={name}, error={e}")
            raise ArtifactStorageError(f"Failed to store artifact: {e}")

        return StoredArtifact(
            name=name,
            reference=self.reference_for(name),
            sha256=hashlib.sha256(content).hexdigest(),
            size_bytes=len(content),
            mime_type=mime_type,
        )

    def retrieve_artifact(self, name: str) -> BinaryIO:
        path = self._path_for(name)
        try:
            return open(path, "rb")
        except FileNotFoundError:
            raise FileNotFoundError(f"Artifact not found: {name}")
        except OSError as e:
            raise ArtifactStorageError(f"Failed to read artifact: {e}")

    def delete_artifact(self, name: str) -> bool:
        try:
            path = self._path_for(name)
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            raise ArtifactStorageError(f"Failed to delete artifact: {e}")

        logger.info(f"Deleted artifact: name={name}")
        return True

    def artifact_exists(self, name: str) -> bool:
        try:
            return self._path_for(name).is_file()
        except FileNotFoundError:
            return False

    def list_artifacts(self) -> List[ArtifactInfo]:
        artifacts = []
        with os.scandir(self.root_dir) as entries:
            for entry in entries:
                if not entry.is_file() or not is_valid_artifact_name(entry.name):
                    continue
                modified_at = datetime.fromtimestamp(entry.stat().st_mtime, tz=timezone.utc)
                artifacts.append(ArtifactInfo(
                    name=entry.name,
                    reference=self.reference_for(entry.name),
                    modified_at=modified_at,
                ))
        return artifacts

    def check_available(self) -> None:
        if not self.root_dir.is_dir() or not os.access(self.root_dir, os.W_OK):
            raise ArtifactStorageError(f"Upload directory not writable: {self.root_dir}")
