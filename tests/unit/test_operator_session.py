"""Unit tests for the operator session and its cookie encoding"""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from appraisal.auth.jwt import (
    SESSION_TOKEN_TYPE,
    create_session_token,
    credential_fingerprint,
    decode_session_token,
    session_from_token,
    signing_key,
)
from appraisal.auth.session import (
    OperatorSession,
    SessionState,
    credential_matches,
)
from appraisal.domain.outcomes import Authenticated, AuthenticationFailed

SECRET = "operator-secret"


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta):
        self.now += delta


@pytest.fixture
def clock():
    return FakeClock(datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc))


class TestCredentialComparison:

    def test_matching_credential(self):
        assert credential_matches(SECRET, SECRET) is True

    def test_wrong_credential(self):
        assert credential_matches("operator-secreT", SECRET) is False
        assert credential_matches("", SECRET) is False

    def test_unset_secret_never_matches(self):
        """Test a deployment without OPERATOR_PASSWORD cannot be logged into"""
        assert credential_matches("", None) is False
        assert credential_matches("", "") is False
        assert credential_matches("anything", None) is False


class TestOperatorSession:
    """Test the ANONYMOUS/AUTHENTICATED state machine"""

    def test_starts_anonymous(self, clock):
        session = OperatorSession.anonymous(clock=clock)
        assert session.state is SessionState.ANONYMOUS
        assert session.is_authenticated is False

    def test_correct_credential_authenticates(self, clock):
        session = OperatorSession.anonymous(clock=clock)

        outcome = session.authenticate(SECRET, SECRET)

        assert outcome == Authenticated(expires_at=clock.now + timedelta(hours=2))
        assert session.state is SessionState.AUTHENTICATED

    def test_wrong_credential_stays_anonymous(self, clock):
        session = OperatorSession.anonymous(clock=clock)

        outcome = session.authenticate("guess", SECRET)

        assert isinstance(outcome, AuthenticationFailed)
        assert outcome.message == "Invalid password"
        assert session.state is SessionState.ANONYMOUS

    def test_session_expires_after_two_hours(self, clock):
        session = OperatorSession.anonymous(clock=clock)
        session.authenticate(SECRET, SECRET)

        clock.advance(timedelta(hours=1, minutes=59))
        assert session.is_authenticated is True

        clock.advance(timedelta(minutes=1))
        assert session.is_authenticated is False
        assert session.expires_at is None

    def test_activity_does_not_extend_session(self, clock):
        session = OperatorSession.anonymous(clock=clock)
        session.authenticate(SECRET, SECRET)
        expires_at = session.expires_at

        clock.advance(timedelta(minutes=30))
        assert session.is_authenticated is True
        assert session.expires_at == expires_at

    def test_custom_lifetime(self, clock):
        session = OperatorSession.anonymous(clock=clock)
        outcome = session.authenticate(SECRET, SECRET, lifetime=timedelta(minutes=5))
        assert outcome.expires_at == clock.now + timedelta(minutes=5)

    def test_logout(self, clock):
        session = OperatorSession.anonymous(clock=clock)
        session.authenticate(SECRET, SECRET)

        session.logout()

        assert session.state is SessionState.ANONYMOUS


class TestSessionToken:
    """Test the signed cookie that carries the session between requests"""

    def test_round_trip_restores_authenticated_session(self, settings):
        expires_at = datetime.now(timezone.utc).replace(microsecond=0) + timedelta(hours=2)
        token = create_session_token(expires_at, settings)

        session = session_from_token(token, settings)

        assert session.is_authenticated is True
        assert session.expires_at == expires_at

    def test_claims(self, settings):
        expires_at = datetime.now(timezone.utc) + timedelta(hours=2)
        payload = decode_session_token(create_session_token(expires_at, settings), settings)

        assert payload["sub"] == "operator"
        assert payload["type"] == SESSION_TOKEN_TYPE
        assert payload["exp"] == int(expires_at.timestamp())

    def test_expired_token_is_anonymous(self, settings):
        expired = datetime.now(timezone.utc) - timedelta(seconds=5)
        token = create_session_token(expired, settings)

        assert session_from_token(token, settings).is_authenticated is False

    def test_tampered_token_is_anonymous(self, settings):
        expires_at = datetime.now(timezone.utc) + timedelta(hours=2)
        token = jwt.encode(
            {"sub": "operator", "type": SESSION_TOKEN_TYPE, "exp": int(expires_at.timestamp())},
            "some-other-secret-of-sufficient-length",
            algorithm="HS256",
        )

        assert session_from_token(token, settings).is_authenticated is False

    def test_wrong_token_type_is_anonymous(self, settings):
        expires_at = datetime.now(timezone.utc) + timedelta(hours=2)
        token = jwt.encode(
            {"sub": "operator", "type": "access", "exp": int(expires_at.timestamp())},
            settings.SESSION_SECRET,
            algorithm=settings.SESSION_ALGORITHM,
        )

        with pytest.raises(jwt.InvalidTokenError):
            decode_session_token(token, settings)
        assert session_from_token(token, settings).is_authenticated is False

    def test_missing_or_garbage_cookie_is_anonymous(self, settings):
        assert session_from_token(None, settings).is_authenticated is False
        assert session_from_token("", settings).is_authenticated is False
        assert session_from_token("not-a-jwt", settings).is_authenticated is False


class TestSessionBinding:
    """A session cookie is only honoured for the credential it was issued against"""

    WELL_KNOWN_SECRET = "dev-session-secret-CHANGE-IN-PRODUCTION"

    @staticmethod
    def future_exp() -> int:
        return int((datetime.now(timezone.utc) + timedelta(hours=1)).timestamp())

    def test_unset_secret_uses_random_process_key(self, settings):
        unset = settings.model_copy(update={"SESSION_SECRET": None})

        key = signing_key(unset)

        assert key
        assert key != self.WELL_KNOWN_SECRET
        assert signing_key(unset) == key
        token = create_session_token(datetime.now(timezone.utc) + timedelta(hours=1), unset)
        assert session_from_token(token, unset).is_authenticated is True

    def test_token_signed_with_guessable_secret_rejected(self, settings):
        unset = settings.model_copy(update={"SESSION_SECRET": None})
        forged = jwt.encode(
            {"sub": "operator", "type": SESSION_TOKEN_TYPE, "exp": self.future_exp()},
            self.WELL_KNOWN_SECRET,
            algorithm="HS256",
        )

        assert session_from_token(forged, unset).is_authenticated is False

    def test_token_without_credential_claim_rejected(self, settings):
        """Test a correctly signed token still needs the credential fingerprint"""
        token = jwt.encode(
            {"sub": "operator", "type": SESSION_TOKEN_TYPE, "exp": self.future_exp()},
            settings.SESSION_SECRET,
            algorithm=settings.SESSION_ALGORITHM,
        )

        assert session_from_token(token, settings).is_authenticated is False

    def test_token_with_wrong_fingerprint_rejected(self, settings):
        token = jwt.encode(
            {"sub": "operator", "type": SESSION_TOKEN_TYPE, "cred": "0" * 64, "exp": self.future_exp()},
            settings.SESSION_SECRET,
            algorithm=settings.SESSION_ALGORITHM,
        )

        assert session_from_token(token, settings).is_authenticated is False

    def test_password_change_revokes_sessions(self, settings):
        token = create_session_token(datetime.now(timezone.utc) + timedelta(hours=1), settings)
        rotated = settings.model_copy(update={"OPERATOR_PASSWORD": "a brand new credential"})

        assert session_from_token(token, settings).is_authenticated is True
        assert session_from_token(token, rotated).is_authenticated is False

    def test_unset_password_refuses_every_session(self, settings):
        token = create_session_token(datetime.now(timezone.utc) + timedelta(hours=1), settings)
        disabled = settings.model_copy(update={"OPERATOR_PASSWORD": None})

        assert session_from_token(token, disabled).is_authenticated is False
        with pytest.raises(ValueError):
            create_session_token(datetime.now(timezone.utc) + timedelta(hours=1), disabled)

    def test_fingerprint_depends_on_key_and_credential(self, settings):
        other_key = settings.model_copy(update={"SESSION_SECRET": "another-signing-key-of-some-length"})
        other_password = settings.model_copy(update={"OPERATOR_PASSWORD": "different"})

        fingerprint = credential_fingerprint(settings)

        assert settings.OPERATOR_PASSWORD not in fingerprint
        assert fingerprint != credential_fingerprint(other_key)
        assert fingerprint != credential_fingerprint(other_password)
