"""Unit tests for the SQLAlchemy submission store"""

import pytest
from sqlalchemy import select

from appraisal.domain.submissions.ports.submission_store import DuplicateTokenError
from appraisal.domain.submissions.records import NewSubmission
from appraisal.infrastructure.repositories.submission_repository import escape_like
from appraisal.models import ImmutableFieldError, Submission


def new_submission(token, **overrides):
    values = dict(
        token=token,
        artifact_path=f"uploads/{token}.jpg",
        artist_name="Jane Doe",
        title="Untitled I",
        creation_date="1998",
        medium="Oil on canvas",
        dimensions="60 x 80 cm",
    )
    values.update(overrides)
    return NewSubmission(**values)


class TestInsert:

    def test_assigns_increasing_ids(self, store):
        first = store.insert(new_submission("1" * 32))
        second = store.insert(new_submission("2" * 32))

        assert second.id > first.id
        assert first.created_at is not None

    def test_duplicate_token_rejected(self, store):
        store.insert(new_submission("1" * 32))

        with pytest.raises(DuplicateTokenError):
            store.insert(new_submission("1" * 32, title="Other"))

        assert len(store.list_all()) == 1

    def test_store_usable_after_duplicate(self, store):
        store.insert(new_submission("1" * 32))
        with pytest.raises(DuplicateTokenError):
            store.insert(new_submission("1" * 32))

        record = store.insert(new_submission("2" * 32))
        assert store.get_by_id(record.id).token == "2" * 32


class TestQueries:

    def test_get_by_token_exact_match_only(self, store):
        store.insert(new_submission("1" * 32))

        assert store.get_by_token("1" * 32) is not None
        assert store.get_by_token("1" * 31) is None
        assert store.get_by_token("1" * 32 + "1") is None

    def test_search_escapes_wildcards(self, store):
        store.insert(new_submission("1" * 32, artist_name="100% Studio"))
        store.insert(new_submission("2" * 32, artist_name="1000 Hands"))
        store.insert(new_submission("3" * 32, artist_name="Jane_Doe"))
        store.insert(new_submission("4" * 32, artist_name="JaneXDoe"))

        assert [r.artist_name for r in store.search_by_artist("0%")] == ["100% Studio"]
        assert [r.artist_name for r in store.search_by_artist("e_D")] == ["Jane_Doe"]

    def test_escape_like(self):
        assert escape_like("a%b_c\\d") == "a\\%b\\_c\\\\d"

    def test_artifact_references(self, store):
        store.insert(new_submission("1" * 32))
        store.insert(new_submission("2" * 32))

        assert store.artifact_references() == {
            f"uploads/{'1' * 32}.jpg",
            f"uploads/{'2' * 32}.jpg",
        }


class TestAppraisalUpdate:

    def test_updates_only_appraisal_columns(self, store):
        record = store.insert(new_submission("1" * 32))

        assert store.update_appraisal(record.id, "Genuine", "100", "200") is True

        updated = store.get_by_id(record.id)
        assert (updated.appraisal, updated.estimate_low, updated.estimate_high) == ("Genuine", "100", "200")
        assert updated.title == record.title
        assert updated.created_at == record.created_at

    def test_unknown_id(self, store):
        assert store.update_appraisal(42, "Genuine", "1", "2") is False
        assert store.list_all() == []


class TestWriteOnceColumns:
    """ORM-level changes to anything but the appraisal columns are refused"""

    def test_descriptive_field_change_rejected(self, store, db_session):
        record = store.insert(new_submission("1" * 32))
        row = db_session.execute(select(Submission).where(Submission.id == record.id)).scalar_one()

        row.title = "Retitled"
        with pytest.raises(ImmutableFieldError):
            db_session.flush()
        db_session.rollback()

        assert store.get_by_id(record.id).title == "Untitled I"

    def test_token_change_rejected(self, store, db_session):
        record = store.insert(new_submission("1" * 32))
        row = db_session.get(Submission, record.id)

        row.token = "2" * 32
        with pytest.raises(ImmutableFieldError):
            db_session.flush()
        db_session.rollback()

    def test_appraisal_change_through_orm_allowed(self, store, db_session):
        record = store.insert(new_submission("1" * 32))
        row = db_session.get(Submission, record.id)

        row.appraisal = "Genuine"
        db_session.commit()

        assert store.get_by_id(record.id).appraisal == "Genuine"
