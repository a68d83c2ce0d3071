from .submission_repository import SqlAlchemySubmissionStore

__all__ = ["SqlAlchemySubmissionStore"]
