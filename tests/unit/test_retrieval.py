"""Unit tests for token lookup and the operator-only reads"""

from appraisal.domain.outcomes import NotAuthorized, NotFound
from appraisal.domain.submissions.records import SubmissionRecord

from support import VALID_FIELDS, make_upload


def submit(workflow, **overrides):
    return workflow.create_submission(dict(VALID_FIELDS, **overrides), make_upload())


class TestTokenLookup:

    def test_known_token(self, workflow, retrieval):
        created = submit(workflow)
        record = retrieval.get_submission_by_token(created.token)
        assert isinstance(record, SubmissionRecord)
        assert record.token == created.token

    def test_unknown_token(self, retrieval):
        assert retrieval.get_submission_by_token("0" * 32) == NotFound()

    def test_near_miss_looks_like_any_other_miss(self, workflow, retrieval):
        created = submit(workflow)

        prefix = retrieval.get_submission_by_token(created.token[:-1])
        altered = retrieval.get_submission_by_token(created.token[:-1] + "x")
        unrelated = retrieval.get_submission_by_token("not-even-hex")

        assert prefix == altered == unrelated == NotFound()

    def test_lookup_needs_no_session(self, workflow, retrieval, anonymous_session):
        created = submit(workflow)
        assert retrieval.get_submission_by_token(created.token).id == created.submission_id


class TestOperatorReads:
    """Guarded operations refuse anonymous callers and work once authenticated"""

    def test_list_all_guarded(self, workflow, retrieval, anonymous_session, operator_session):
        submit(workflow)

        assert retrieval.list_all_submissions(anonymous_session) == NotAuthorized()
        assert len(retrieval.list_all_submissions(operator_session)) == 1

    def test_list_all_newest_first(self, workflow, retrieval, operator_session):
        first = submit(workflow, title="First")
        second = submit(workflow, title="Second")

        records = retrieval.list_all_submissions(operator_session)

        assert [r.id for r in records] == [second.submission_id, first.submission_id]

    def test_search_guarded(self, workflow, retrieval, anonymous_session):
        submit(workflow)
        assert retrieval.search_submissions_by_artist(anonymous_session, "Jane") == NotAuthorized()

    def test_search_substring(self, workflow, retrieval, operator_session):
        submit(workflow, artist_name="Jane Doe")
        submit(workflow, artist_name="John Smith")

        records = retrieval.search_submissions_by_artist(operator_session, "ane")

        assert [r.artist_name for r in records] == ["Jane Doe"]

    def test_empty_search_lists_everything(self, workflow, retrieval, operator_session):
        submit(workflow, artist_name="Jane Doe")
        submit(workflow, artist_name="John Smith")

        assert len(retrieval.search_submissions_by_artist(operator_session, "")) == 2

    def test_get_by_id_guarded(self, workflow, retrieval, anonymous_session, operator_session):
        created = submit(workflow)

        assert retrieval.get_submission_by_id(anonymous_session, created.submission_id) == NotAuthorized()
        assert retrieval.get_submission_by_id(operator_session, created.submission_id).token == created.token

    def test_get_by_id_missing(self, retrieval, operator_session):
        assert retrieval.get_submission_by_id(operator_session, 12345) == NotFound()

    def test_anonymous_gets_not_authorized_even_for_missing_id(self, retrieval, anonymous_session):
        assert retrieval.get_submission_by_id(anonymous_session, 12345) == NotAuthorized()
