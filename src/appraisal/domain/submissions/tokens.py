"""Capability tokens for anonymous result retrieval.

A token is the only credential an anonymous submitter holds. It is drawn
from the operating system CSPRNG and rendered as fixed-length hex.
Uniqueness is not checked here; the store's unique constraint enforces it.
"""

import secrets

# 16 bytes = 128 bits of randomness, 32 hex characters
TOKEN_BYTES = 16
TOKEN_LENGTH = TOKEN_BYTES * 2


def generate_token() -> str:
    """Generate a new retrieval token.

    Example:
        >>> len(generate_token())
        32
    """
    return secrets.token_hex(TOKEN_BYTES)


def token_hint(token: str) -> str:
    """Short, non-sensitive prefix of a token for log lines."""
    return f"{token[:6]}..."
