"""SQLAlchemy models"""

from .base import Base
from .submission import Submission, ImmutableFieldError, APPRAISAL_COLUMNS

__all__ = ["Base", "Submission", "ImmutableFieldError", "APPRAISAL_COLUMNS"]
