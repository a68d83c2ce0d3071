"""Operator session state machine.

Two states, per caller:

    ANONYMOUS --authenticate(correct credential)--> AUTHENTICATED
    AUTHENTICATED --expiry or logout--> ANONYMOUS

There is one operator and one shared credential. A wrong credential
leaves the session ANONYMOUS. Nothing here is global; each request builds
its own OperatorSession from the cookie it carries.
"""

import hmac
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Callable, Optional, Union

from ..domain.outcomes import Authenticated, AuthenticationFailed

DEFAULT_SESSION_LIFETIME = timedelta(hours=2)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SessionState(str, Enum):
    ANONYMOUS = "ANONYMOUS"
    AUTHENTICATED = "AUTHENTICATED"


def credential_matches(presented: Optional[str], expected: Optional[str]) -> bool:
    """Constant-time credential comparison.

    An unset operator credential never matches, so a deployment without
    OPERATOR_PASSWORD has no way in.
    """
    if not expected or presented is None:
        return False
    return hmac.compare_digest(presented.encode("utf-8"), expected.encode("utf-8"))


class OperatorSession:
    """Per-caller operator session.

    Attributes:
        expires_at: When an AUTHENTICATED session reverts to ANONYMOUS
                    (None while ANONYMOUS)
    """

    def __init__(
        self,
        expires_at: Optional[datetime] = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.expires_at = expires_at
        self._clock = clock

    @classmethod
    def anonymous(cls, clock: Callable[[], datetime] = _utcnow) -> "OperatorSession":
        return cls(expires_at=None, clock=clock)

    @property
    def state(self) -> SessionState:
        if self.expires_at is None:
            return SessionState.ANONYMOUS
        if self._clock() >= self.expires_at:
            # Expired sessions fall back for good
            self.expires_at = None
            return SessionState.ANONYMOUS
        return SessionState.AUTHENTICATED

    @property
    def is_authenticated(self) -> bool:
        return self.state is SessionState.AUTHENTICATED

    def authenticate(
        self,
        credential: Optional[str],
        operator_secret: Optional[str],
        lifetime: timedelta = DEFAULT_SESSION_LIFETIME,
    ) -> Union[Authenticated, AuthenticationFailed]:
        """Attempt the ANONYMOUS → AUTHENTICATED transition.

        A failed attempt does not end an already authenticated session;
        it simply reports AuthenticationFailed.
        """
        if not credential_matches(credential, operator_secret):
            return AuthenticationFailed()

        self.expires_at = self._clock() + lifetime
        return Authenticated(expires_at=self.expires_at)

    def logout(self) -> None:
        self.expires_at = None

    def __repr__(self):
        return f"<OperatorSession state={self.state.value} expires_at={self.expires_at}>"
