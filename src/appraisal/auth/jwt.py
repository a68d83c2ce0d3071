"""JWT encoding of the operator session.

The operator session travels between requests as a signed JWT in an
HttpOnly cookie. The token carries no secret material, only the fact
that the operator authenticated, when that lapses, and a fingerprint of
the credential it was issued against.

Claims:
- sub: always "operator"
- type: "operator_session" (rejects tokens minted for anything else)
- cred: HMAC-SHA256 of OPERATOR_PASSWORD under the signing key
- iat: Unix timestamp of authentication
- exp: Unix timestamp when the session reverts to anonymous

Security Properties:
- Algorithm: HS256 by default (SESSION_ALGORITHM)
- Secret: SESSION_SECRET, or a random per-process key when unset
  (sessions then end on restart)
- Changing or unsetting OPERATOR_PASSWORD invalidates every live session
- No refresh: the operator logs in again after expiry
"""

import hashlib
import hmac
import logging
import secrets
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import jwt

from ..config import Settings
from .session import OperatorSession

logger = logging.getLogger(__name__)

SESSION_SUBJECT = "operator"
SESSION_TOKEN_TYPE = "operator_session"

# Used when SESSION_SECRET is unset; never leaves this process
_PROCESS_SECRET = secrets.token_urlsafe(32)


def signing_key(settings: Settings) -> str:
    return settings.SESSION_SECRET or _PROCESS_SECRET


def credential_fingerprint(settings: Settings) -> str:
    """Keyed digest of the operator credential the session is bound to.

    Raises:
        ValueError: If no operator credential is configured
    """
    if not settings.OPERATOR_PASSWORD:
        raise ValueError("OPERATOR_PASSWORD is not configured")
    return hmac.new(
        signing_key(settings).encode("utf-8"),
        settings.OPERATOR_PASSWORD.encode("utf-8"),
        hashlib.sha256,
    ).hexdigest()


def create_session_token(expires_at: datetime, settings: Settings) -> str:
    """Sign a session token that is valid until ``expires_at``.

    Raises:
        ValueError: If no operator credential is configured
    """
    now = datetime.now(timezone.utc)
    payload = {
        "sub": SESSION_SUBJECT,
        "type": SESSION_TOKEN_TYPE,
        "cred": credential_fingerprint(settings),
        "iat": int(now.timestamp()),
        "exp": int(expires_at.timestamp()),
    }
    return jwt.encode(payload, signing_key(settings), algorithm=settings.SESSION_ALGORITHM)


def decode_session_token(token: str, settings: Settings) -> Dict[str, Any]:
    """Decode and validate a session token.

    Raises:
        jwt.ExpiredSignatureError: If the session has expired
        jwt.InvalidTokenError: If the token is invalid, tampered, of the wrong
            type, or issued against a different (or no) operator credential
    """
    payload = jwt.decode(
        token,
        signing_key(settings),
        algorithms=[settings.SESSION_ALGORITHM],
        options={"require": ["exp", "sub", "cred"]},
    )
    if payload.get("type") != SESSION_TOKEN_TYPE or payload.get("sub") != SESSION_SUBJECT:
        raise jwt.InvalidTokenError("Not an operator session token")

    if not settings.OPERATOR_PASSWORD:
        raise jwt.InvalidTokenError("Operator login is disabled")
    if not hmac.compare_digest(str(payload["cred"]), credential_fingerprint(settings)):
        raise jwt.InvalidTokenError("Session was issued for a different operator credential")
    return payload


def session_from_token(token: Optional[str], settings: Settings) -> OperatorSession:
    """Rebuild the caller's OperatorSession from its cookie value.

    Anything other than a valid, unexpired operator token bound to the
    current credential yields an anonymous session.
    """
    if not token:
        return OperatorSession.anonymous()

    try:
        payload = decode_session_token(token, settings)
    except jwt.ExpiredSignatureError:
        logger.info("Operator session expired")
        return OperatorSession.anonymous()
    except jwt.InvalidTokenError as e:
        logger.warning(f"Rejected operator session token: {e}")
        return OperatorSession.anonymous()

    expires_at = datetime.fromtimestamp(payload["exp"], tz=timezone.utc)
    return OperatorSession(expires_at=expires_at)
