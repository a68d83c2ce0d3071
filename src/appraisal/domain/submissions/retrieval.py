"""Retrieval/Search Service - read-only access to submissions.

Token lookup is open to anyone holding the token. Everything else is
operator-only and checks the session before touching the store.
"""

from typing import List, Union

from ...auth.session import OperatorSession
from ..outcomes import NotAuthorized, NotFound
from .ports.submission_store import SubmissionStorePort
from .records import SubmissionRecord


class SubmissionRetrieval:

    def __init__(self, store: SubmissionStorePort):
        self.store = store

    def get_submission_by_token(self, token: str) -> Union[SubmissionRecord, NotFound]:
        """Exact token lookup.

        Every token, well-formed or not, goes through the same single
        indexed query, and every miss returns the same empty NotFound.
        """
        record = self.store.get_by_token(token)
        if record is None:
            return NotFound()
        return record

    def list_all_submissions(
        self, session: OperatorSession
    ) -> Union[List[SubmissionRecord], NotAuthorized]:
        if not session.is_authenticated:
            return NotAuthorized()
        return self.store.list_all()

    def search_submissions_by_artist(
        self, session: OperatorSession, query: str
    ) -> Union[List[SubmissionRecord], NotAuthorized]:
        """Substring match on artist name, newest first. Empty query lists all."""
        if not session.is_authenticated:
            return NotAuthorized()
        if not query:
            return self.store.list_all()
        return self.store.search_by_artist(query)

    def get_submission_by_id(
        self, session: OperatorSession, submission_id: int
    ) -> Union[SubmissionRecord, NotFound, NotAuthorized]:
        if not session.is_authenticated:
            return NotAuthorized()
        record = self.store.get_by_id(submission_id)
        if record is None:
            return NotFound()
        return record
