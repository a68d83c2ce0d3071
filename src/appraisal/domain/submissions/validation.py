"""Validation utilities for submission intake.

Covers the descriptive form fields and the photograph upload policy
(media type allow-list, size ceiling, storage-safe artifact names).
"""

import os
import re
import secrets
from typing import Iterable, Mapping, Optional, Tuple


REQUIRED_FIELDS: Tuple[str, ...] = (
    "artist_name",
    "title",
    "creation_date",
    "medium",
    "dimensions",
)

OPTIONAL_FIELDS: Tuple[str, ...] = (
    "edition_size",
    "provenance",
    "exhibition_history",
    "purchase_price",
)

# Raster image types accepted by default
DEFAULT_ALLOWED_MIME_TYPES = frozenset({"image/jpeg", "image/png"})

# 10 MiB
MAX_UPLOAD_SIZE = 10 * 1024 * 1024

# Fallback extensions when the submitted filename has none we can trust
MIME_EXTENSIONS = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/webp": ".webp",
}

ARTIFACT_NAME_BYTES = 16

_SAFE_EXTENSION = re.compile(r"^\.[a-z0-9]{1,10}$")

# Random hex name plus optional short extension, nothing else
_ARTIFACT_NAME = re.compile(r"^[0-9a-f]{16,64}(\.[a-z0-9]{1,10})?$")


def find_missing_fields(fields: Mapping[str, Optional[str]]) -> Tuple[str, ...]:
    """Return the required fields that are absent or blank, in form order.

    Example:
        >>> find_missing_fields({'artist_name': 'Jane Doe', 'title': ' '})
        ('title', 'creation_date', 'medium', 'dimensions')
    """
    missing = []
    for name in REQUIRED_FIELDS:
        value = fields.get(name)
        if value is None or not str(value).strip():
            missing.append(name)
    return tuple(missing)


def optional_value(value: Optional[str]) -> Optional[str]:
    """Empty optional input is stored as NULL."""
    if value is None or value == "":
        return None
    return value


def normalize_mime_type(mime_type: Optional[str]) -> str:
    """Strip parameters and case from a Content-Type value."""
    if not mime_type:
        return ""
    return mime_type.split(";", 1)[0].strip().lower()


def is_supported_image_type(mime_type: Optional[str], allowed: Optional[Iterable[str]] = None) -> bool:
    """Check if the claimed media type is on the allow-list

    Example:
        >>> is_supported_image_type('image/jpeg')
        True
        >>> is_supported_image_type('application/pdf')
        False
    """
    allowed_types = DEFAULT_ALLOWED_MIME_TYPES if allowed is None else {
        normalize_mime_type(t) for t in allowed
    }
    return normalize_mime_type(mime_type) in allowed_types


def validate_file_size(size_bytes: int, max_size: Optional[int] = None) -> Tuple[bool, Optional[str]]:
    """Validate file size is within limits

    Args:
        size_bytes: File size in bytes
        max_size: Maximum allowed size (defaults to MAX_UPLOAD_SIZE)

    Returns:
        Tuple of (is_valid, error_message)

    Example:
        >>> validate_file_size(1024)
        (True, None)
        >>> validate_file_size(0)
        (False, 'File is empty (0 bytes)')
    """
    if max_size is None:
        max_size = MAX_UPLOAD_SIZE

    if size_bytes == 0:
        return False, "File is empty (0 bytes)"

    if size_bytes > max_size:
        return False, f"File exceeds maximum size of {max_size // (1024 * 1024)} MB"

    return True, None


def artifact_extension(filename: Optional[str], mime_type: Optional[str]) -> str:
    """Pick the extension for a stored artifact.

    The original extension is kept (lower-cased) when it is short and
    alphanumeric; otherwise the extension for the media type is used.

    Example:
        >>> artifact_extension('Sunset.JPEG', 'image/jpeg')
        '.jpeg'
        >>> artifact_extension('../../etc/passwd', 'image/png')
        '.png'
    """
    _, ext = os.path.splitext(os.path.basename(filename or ""))
    ext = ext.lower()
    if _SAFE_EXTENSION.match(ext):
        return ext
    return MIME_EXTENSIONS.get(normalize_mime_type(mime_type), "")


def generate_artifact_name(filename: Optional[str], mime_type: Optional[str]) -> str:
    """Random storage name that preserves the upload's extension.

    Nothing from the submitted filename except the extension survives, so
    the public artifact path never reveals submitter-chosen text.
    """
    return secrets.token_hex(ARTIFACT_NAME_BYTES) + artifact_extension(filename, mime_type)


def is_valid_artifact_name(name: Optional[str]) -> bool:
    """True only for names this module could have generated.

    Example:
        >>> is_valid_artifact_name('../secret.jpg')
        False
    """
    return bool(_ARTIFACT_NAME.match(name or ""))
