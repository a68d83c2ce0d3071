"""Shared test data and builders."""

import io

from appraisal.domain.submissions.uploads import IncomingUpload

OPERATOR_PASSWORD = "correct horse battery staple"

JPEG_MAGIC = b"\xff\xd8\xff\xe0"

VALID_FIELDS = {
    "artist_name": "Jane Doe",
    "title": "Untitled I",
    "creation_date": "1998",
    "medium": "Oil on canvas",
    "dimensions": "60 x 80 cm",
}


def jpeg_bytes(size: int = 1024) -> bytes:
    """Bytes of the requested length that start like a JPEG."""
    return JPEG_MAGIC + b"\x00" * (size - len(JPEG_MAGIC))


def make_upload(
    content: bytes = None,
    filename: str = "artwork.jpg",
    content_type: str = "image/jpeg",
) -> IncomingUpload:
    if content is None:
        content = jpeg_bytes()
    return IncomingUpload(filename=filename, content_type=content_type, stream=io.BytesIO(content))
