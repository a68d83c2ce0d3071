"""Submission SQLAlchemy model

A submission is one artwork sent in for appraisal: descriptive metadata,
a reference to the stored photograph, a secret retrieval token and the
operator's appraisal fields.
"""

from sqlalchemy import Column, DateTime, Index, Integer, Text, event, inspect
from sqlalchemy.orm import Session
from sqlalchemy.sql import func

from .base import Base

# The only columns that may change after insert
APPRAISAL_COLUMNS = frozenset({"appraisal", "estimate_low", "estimate_high"})


class ImmutableFieldError(Exception):
    """Raised when a flush would modify a write-once submission column."""


class Submission(Base):
    """Submission model.

    Addressable by ``id`` (operator, sequential) and by ``token``
    (anonymous, unguessable). Descriptive fields and ``artifact_path`` are
    write-once; appraisal fields stay NULL until the operator acts.
    """
    __tablename__ = "submission"
    __table_args__ = (
        Index("ix_submission_created_at", "created_at"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    token = Column(Text, nullable=False, unique=True)
    artifact_path = Column(Text, nullable=False)

    # Required descriptive fields
    artist_name = Column(Text, nullable=False)
    title = Column(Text, nullable=False)
    creation_date = Column(Text, nullable=False)
    medium = Column(Text, nullable=False)
    dimensions = Column(Text, nullable=False)

    # Optional descriptive fields
    edition_size = Column(Text, nullable=True)
    provenance = Column(Text, nullable=True)
    exhibition_history = Column(Text, nullable=True)
    purchase_price = Column(Text, nullable=True)

    # Free-text appraisal, set by the operator
    appraisal = Column(Text, nullable=True)
    estimate_low = Column(Text, nullable=True)
    estimate_high = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    def __repr__(self):
        return f"<Submission id={self.id} artist_name={self.artist_name!r}>"


@event.listens_for(Session, "before_flush")
def reject_write_once_changes(session, flush_context, instances):
    """Refuse to flush changes to anything but the appraisal columns.

    New rows are unaffected; only persistent submissions are checked.
    """
    for instance in session.dirty:
        if not isinstance(instance, Submission):
            continue

        state = inspect(instance)
        for attr in state.attrs:
            if attr.key in APPRAISAL_COLUMNS:
                continue
            if attr.history.has_changes():
                raise ImmutableFieldError(
                    f"Submission.{attr.key} is write-once (id={instance.id})"
                )
