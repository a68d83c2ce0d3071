"""Operator login surface.

GET /admin doubles as the redirect target for anonymous callers hitting
operator-only endpoints; it reports whether the caller's session is live.
"""

import logging
from datetime import timedelta
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, status

from ..config import Settings
from ..dependencies import get_app_settings
from ..domain.outcomes import AuthenticationFailed
from ..observability import metrics
from .dependencies import OperatorSessionDep
from .jwt import create_session_token
from .schemas import LoginRequest, LoginResponse, SessionStatusResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["Operator"])


@router.get("", response_model=SessionStatusResponse)
def session_status(session: OperatorSessionDep):
    """Report the caller's operator session state."""
    if session.is_authenticated:
        return SessionStatusResponse(authenticated=True, expires_at=session.expires_at)
    return SessionStatusResponse(authenticated=False)


@router.post("/login", response_model=LoginResponse)
def login(
    credentials: LoginRequest,
    response: Response,
    session: OperatorSessionDep,
    settings: Annotated[Settings, Depends(get_app_settings)],
):
    """Authenticate the operator and set the session cookie.

    Raises:
        HTTPException: 401 if the credential does not match
    """
    lifetime = timedelta(minutes=settings.SESSION_EXPIRE_MINUTES)
    outcome = session.authenticate(
        credentials.password,
        settings.OPERATOR_PASSWORD,
        lifetime=lifetime,
    )

    if isinstance(outcome, AuthenticationFailed):
        metrics.operator_logins_total.labels(result="failure").inc()
        logger.warning("Operator login failed")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=outcome.message,
        )

    metrics.operator_logins_total.labels(result="success").inc()
    logger.info(f"Operator authenticated, session expires at {outcome.expires_at.isoformat()}")

    max_age = int(lifetime.total_seconds())
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=create_session_token(outcome.expires_at, settings),
        max_age=max_age,
        httponly=True,
        samesite="lax",
        secure=settings.SESSION_COOKIE_SECURE,
    )

    return LoginResponse(authenticated=True, expires_at=outcome.expires_at, expires_in=max_age)


@router.post("/logout", response_model=SessionStatusResponse)
def logout(
    response: Response,
    session: OperatorSessionDep,
    settings: Annotated[Settings, Depends(get_app_settings)],
):
    """End the operator session and clear the cookie.

    Sessions are stateless, so this only removes the cookie from the
    caller's browser. A copied token stays valid until its exp claim;
    rotating OPERATOR_PASSWORD or SESSION_SECRET revokes every live session.
    """
    session.logout()
    response.delete_cookie(
        key=settings.SESSION_COOKIE_NAME,
        httponly=True,
        samesite="lax",
        secure=settings.SESSION_COOKIE_SECURE,
    )
    return SessionStatusResponse(authenticated=False)
