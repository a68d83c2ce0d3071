"""Pytest fixtures for the appraisal service.

Provides reusable test fixtures for:
- Settings pointing at a throwaway SQLite database and upload directory
- A store, artifact storage, workflow and retrieval wired like the app
- Anonymous and authenticated operator sessions
- HTTP test clients, with and without an operator session cookie

Usage:
    def test_list_requires_operator(client):
        response = client.get("/api/v1/admin/submissions", follow_redirects=False)
        assert response.status_code == 303
"""

from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from appraisal.auth.session import OperatorSession
from appraisal.config import Settings
from appraisal.database import build_engine, build_session_factory, init_db
from appraisal.domain.submissions.retrieval import SubmissionRetrieval
from appraisal.domain.submissions.uploads import UploadValidator
from appraisal.domain.submissions.workflow import SubmissionWorkflow
from appraisal.infrastructure.repositories import SqlAlchemySubmissionStore
from appraisal.infrastructure.storage import LocalArtifactStorage
from appraisal.main import create_app

from support import OPERATOR_PASSWORD


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        _env_file=None,
        DATABASE_URL=f"sqlite:///{tmp_path / 'test.db'}",
        UPLOAD_DIR=str(tmp_path / "uploads"),
        OPERATOR_PASSWORD=OPERATOR_PASSWORD,
        SESSION_SECRET="test-session-secret-key-long-enough-for-hs256",
        LOG_JSON=False,
        LOG_LEVEL="WARNING",
    )


@pytest.fixture
def engine(settings):
    engine = build_engine(settings.DATABASE_URL)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(engine) -> Generator[Session, None, None]:
    """Database session bound to the per-test SQLite file."""
    session = build_session_factory(engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def store(db_session) -> SqlAlchemySubmissionStore:
    return SqlAlchemySubmissionStore(db_session)


@pytest.fixture
def artifact_storage(settings) -> LocalArtifactStorage:
    return LocalArtifactStorage(settings.UPLOAD_DIR)


@pytest.fixture
def validator(artifact_storage) -> UploadValidator:
    return UploadValidator(storage=artifact_storage)


@pytest.fixture
def workflow(store, validator) -> SubmissionWorkflow:
    return SubmissionWorkflow(store=store, validator=validator)


@pytest.fixture
def retrieval(store) -> SubmissionRetrieval:
    return SubmissionRetrieval(store)


@pytest.fixture
def anonymous_session() -> OperatorSession:
    return OperatorSession.anonymous()


@pytest.fixture
def operator_session() -> OperatorSession:
    session = OperatorSession.anonymous()
    session.authenticate(OPERATOR_PASSWORD, OPERATOR_PASSWORD)
    return session


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app) -> Generator[TestClient, None, None]:
    """Anonymous HTTP client."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def operator_client(app) -> Generator[TestClient, None, None]:
    """HTTP client holding a live operator session cookie."""
    with TestClient(app) as test_client:
        response = test_client.post("/api/v1/admin/login", json={"password": OPERATOR_PASSWORD})
        assert response.status_code == 200
        yield test_client
