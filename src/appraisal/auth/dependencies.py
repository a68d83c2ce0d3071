"""FastAPI dependencies for the operator session.

Usage:
    @router.get("/admin/submissions")
    def list_submissions(session: OperatorSessionDep):
        if not session.is_authenticated:
            ...
"""

from typing import Annotated

from fastapi import Depends, Request

from ..config import Settings
from ..dependencies import get_app_settings
from .jwt import session_from_token
from .session import OperatorSession


def get_operator_session(
    request: Request,
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> OperatorSession:
    """Build the caller's session from the session cookie.

    Never raises: a missing or bad cookie is simply an anonymous session,
    and the operations themselves decide what anonymous callers may do.
    """
    token = request.cookies.get(settings.SESSION_COOKIE_NAME)
    return session_from_token(token, settings)


# Type alias for dependency injection
OperatorSessionDep = Annotated[OperatorSession, Depends(get_operator_session)]
