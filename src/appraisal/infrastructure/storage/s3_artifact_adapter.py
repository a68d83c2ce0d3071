"""S3 Artifact Adapter - ArtifactStoragePort backed by boto3.

Works against AWS S3, MinIO and other S3-compatible services. Artifacts
are stored flat under a single key prefix: {prefix}/{name}.
"""

import hashlib
import logging
from io import BytesIO
from typing import BinaryIO, List, Optional

import boto3
from botocore.exceptions import ClientError, NoCredentialsError

from ...domain.submissions.ports.artifact_storage import (
    ArtifactInfo,
    ArtifactStorageError,
    ArtifactStoragePort,
    StoredArtifact,
)
from ...domain.submissions.validation import is_valid_artifact_name

logger = logging.getLogger(__name__)


def _error_code(error: ClientError) -> str:
    return error.response.get("Error", {}).get("Code", "Unknown")


class S3ArtifactStorage(ArtifactStoragePort):
    """S3-compatible artifact storage using boto3.

    Example:
        storage = S3ArtifactStorage(
            endpoint_url="http://localhost:9000",
            access_key="minioadmin",
            secret_key="minioadmin",
            bucket_name="art-appraisal-uploads",
        )
        stored = storage.store_artifact("3f9c...e1.jpg", data, "image/jpeg")
    """

    def __init__(
        self,
        endpoint_url: Optional[str],
        access_key: str,
        secret_key: str,
        bucket_name: str,
        region: str = "us-east-1",
        key_prefix: str = "uploads",
    ):
        """Initialize S3 artifact storage.

        Args:
            endpoint_url: S3 endpoint URL (None for AWS S3, URL for MinIO)
            access_key: S3 access key ID
            secret_key: S3 secret access key
            bucket_name: S3 bucket name
            region: AWS region (default: 'us-east-1')
            key_prefix: Key prefix shared by every artifact

        Raises:
            ArtifactStorageError: If S3 client initialization fails
        """
        try:
            self.s3_client = boto3.client(
                "s3",
                endpoint_url=endpoint_url,
                aws_access_key_id=access_key,
                aws_secret_access_key=secret_key,
                region_name=region,
            )
        except NoCredentialsError as e:
            raise ArtifactStorageError(f"Invalid S3 credentials: {e}")
        except Exception as e:
            raise ArtifactStorageError(f"Failed to initialize S3 client: {e}")

        self.bucket_name = bucket_name
        self.region = region
        self.key_prefix = key_prefix.strip("/")

        logger.info(
            f"Initialized S3 artifact storage: bucket={bucket_name}, "
            f"endpoint={endpoint_url or 'AWS S3'}, prefix={self.key_prefix}"
        )

    def reference_for(self, name: str) -> str:
        return f"{self.key_prefix}/{name}"

    def name_from_reference(self, reference: str) -> str:
        return reference.rsplit("/", 1)[-1]

    def store_artifact(self, name: str, content: bytes, mime_type: str) -> StoredArtifact:
        key = self.reference_for(name)
        sha256_hex = hashlib.sha256(content).hexdigest()

        try:
            self.s3_client.put_object(
                Bucket=self.bucket_name,
                Key=key,
                Body=BytesIO(content),
                ContentType=mime_type,
                Metadata={"sha256": sha256_hex},
            )
        except ClientError as e:
            logger.error(f"S3 upload failed: key={key}, error={_error_code(e)}, message={e}")
            raise ArtifactStorageError(f"Failed to upload artifact: {_error_code(e)}")

        logger.info(f"Uploaded artifact: key={key}, size={len(content)}, mime_type={mime_type}")

        return StoredArtifact(
            name=name,
            reference=key,
            sha256=sha256_hex,
            size_bytes=len(content),
            mime_type=mime_type,
        )

    def retrieve_artifact(self, name: str) -> BinaryIO:
        key = self.reference_for(name)
        try:
            response = self.s3_client.get_object(Bucket=self.bucket_name, Key=key)
        except ClientError as e:
            if _error_code(e) in ("NoSuchKey", "404"):
                raise FileNotFoundError(f"Artifact not found: {name}")
            logger.error(f"S3 retrieval failed: key={key}, error={_error_code(e)}")
            raise ArtifactStorageError(f"Failed to retrieve artifact: {_error_code(e)}")

        return response["Body"]

    def delete_artifact(self, name: str) -> bool:
        if not self.artifact_exists(name):
            return False

        key = self.reference_for(name)
        try:
            self.s3_client.delete_object(Bucket=self.bucket_name, Key=key)
        except ClientError as e:
            logger.error(f"S3 delete failed: key={key}, error={_error_code(e)}")
            raise ArtifactStorageError(f"Failed to delete artifact: {_error_code(e)}")

        logger.info(f"Deleted artifact: key={key}")
        return True

    def artifact_exists(self, name: str) -> bool:
        try:
            self.s3_client.head_object(Bucket=self.bucket_name, Key=self.reference_for(name))
            return True
        except ClientError as e:
            if _error_code(e) in ("404", "NoSuchKey", "NotFound"):
                return False
            raise ArtifactStorageError(f"Failed to check artifact: {_error_code(e)}")

    def list_artifacts(self) -> List[ArtifactInfo]:
        """List artifacts stored directly under the key prefix.

        Nested keys and names the Upload Validator could not have produced
        are skipped, so every entry maps back to exactly the key listed.
        """
        artifacts = []
        prefix = f"{self.key_prefix}/"
        paginator = self.s3_client.get_paginator("list_objects_v2")
        try:
            for page in paginator.paginate(Bucket=self.bucket_name, Prefix=prefix):
                for obj in page.get("Contents", []):
                    name = obj["Key"][len(prefix):]
                    if not is_valid_artifact_name(name):
                        continue
                    artifacts.append(ArtifactInfo(
                        name=name,
                        reference=obj["Key"],
                        modified_at=obj["LastModified"],
                    ))
        except ClientError as e:
            raise ArtifactStorageError(f"Failed to list artifacts: {_error_code(e)}")
        return artifacts

    def check_available(self) -> None:
        """Raise ArtifactStorageError unless the bucket is reachable."""
        try:
            self.s3_client.head_bucket(Bucket=self.bucket_name)
        except ClientError as e:
            raise ArtifactStorageError(f"Bucket unavailable: {_error_code(e)}")
