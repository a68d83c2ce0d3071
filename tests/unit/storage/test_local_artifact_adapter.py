"""Unit tests for the local directory artifact adapter"""

import hashlib
import os
import time

import pytest

from appraisal.domain.submissions.ports.artifact_storage import ArtifactStorageError
from appraisal.infrastructure.storage import LocalArtifactStorage

NAME = "0123456789abcdef0123456789abcdef.jpg"
CONTENT = b"\xff\xd8\xff\xe0 local artifact"


@pytest.fixture
def local_storage(tmp_path):
    return LocalArtifactStorage(tmp_path / "uploads")


class TestStore:

    def test_creates_root_directory(self, tmp_path):
        LocalArtifactStorage(tmp_path / "nested" / "uploads")
        assert (tmp_path / "nested" / "uploads").is_dir()

    def test_store_writes_file_and_metadata(self, local_storage):
        stored = local_storage.store_artifact(NAME, CONTENT, "image/jpeg")

        assert stored.name == NAME
        assert stored.reference == f"uploads/{NAME}"
        assert stored.sha256 == hashlib.sha256(CONTENT).hexdigest()
        assert stored.size_bytes == len(CONTENT)
        assert (local_storage.root_dir / NAME).read_bytes() == CONTENT

    def test_never_overwrites(self, local_storage):
        local_storage.store_artifact(NAME, CONTENT, "image/jpeg")

        with pytest.raises(ArtifactStorageError):
            local_storage.store_artifact(NAME, b"other", "image/jpeg")

        assert (local_storage.root_dir / NAME).read_bytes() == CONTENT

    @pytest.mark.parametrize("name", ["../escape.jpg", "sub/dir.jpg", "Upper.JPG", ""])
    def test_refuses_unsafe_names(self, local_storage, name):
        with pytest.raises(ArtifactStorageError):
            local_storage.store_artifact(name, CONTENT, "image/jpeg")


class TestRetrieveAndDelete:

    def test_retrieve(self, local_storage):
        local_storage.store_artifact(NAME, CONTENT, "image/jpeg")

        with local_storage.retrieve_artifact(NAME) as f:
            assert f.read() == CONTENT

    def test_retrieve_missing(self, local_storage):
        with pytest.raises(FileNotFoundError):
            local_storage.retrieve_artifact(NAME)

    def test_retrieve_traversal_is_not_found(self, local_storage):
        with pytest.raises(FileNotFoundError):
            local_storage.retrieve_artifact("../../etc/passwd")

    def test_exists_and_delete(self, local_storage):
        local_storage.store_artifact(NAME, CONTENT, "image/jpeg")
        assert local_storage.artifact_exists(NAME) is True

        assert local_storage.delete_artifact(NAME) is True
        assert local_storage.artifact_exists(NAME) is False
        assert local_storage.delete_artifact(NAME) is False


class TestListing:

    def test_lists_only_artifact_names(self, local_storage):
        local_storage.store_artifact(NAME, CONTENT, "image/jpeg")
        (local_storage.root_dir / ".gitkeep").write_text("")
        os.mkdir(local_storage.root_dir / "0123456789abcdef")

        artifacts = local_storage.list_artifacts()

        assert [a.name for a in artifacts] == [NAME]
        assert artifacts[0].reference == f"uploads/{NAME}"
        assert abs(artifacts[0].modified_at.timestamp() - time.time()) < 60

    def test_check_available(self, local_storage):
        local_storage.check_available()

    def test_reference_round_trip(self, local_storage):
        assert local_storage.name_from_reference(local_storage.reference_for(NAME)) == NAME
