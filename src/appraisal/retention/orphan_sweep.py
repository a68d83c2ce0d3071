"""Orphaned artifact sweep.

Intake writes the photograph before inserting the submission row, and
the two are not atomic. A crash in between, or token space exhaustion,
leaves an artifact nothing points to. This sweep finds and removes them.

Artifacts younger than the grace period are left alone so an intake that
is still between its write and its insert is never raced.

All operations are idempotent and can be safely retried.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Callable, List

from ..domain.submissions.ports.artifact_storage import ArtifactStoragePort
from ..domain.submissions.ports.submission_store import SubmissionStorePort
from ..observability import metrics

logger = logging.getLogger(__name__)

DEFAULT_GRACE_PERIOD = timedelta(minutes=60)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class SweepReport:
    """Counts from one sweep.

    Attributes:
        scanned: Artifacts found in storage
        referenced: Artifacts some submission points to
        removed: Unreferenced artifacts deleted (or that would be, on a dry run)
        skipped_recent: Unreferenced artifacts younger than the grace period
        removed_names: Names counted in ``removed``
    """
    scanned: int = 0
    referenced: int = 0
    removed: int = 0
    skipped_recent: int = 0
    removed_names: List[str] = field(default_factory=list)


class OrphanSweeper:
    """Deletes stored artifacts that no submission references."""

    def __init__(
        self,
        store: SubmissionStorePort,
        storage: ArtifactStoragePort,
        grace_period: timedelta = DEFAULT_GRACE_PERIOD,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.store = store
        self.storage = storage
        self.grace_period = grace_period
        self._clock = clock

    def run(self, dry_run: bool = False) -> SweepReport:
        """Execute one sweep.

        Args:
            dry_run: Count what would be removed without deleting anything

        Returns:
            SweepReport with the sweep's counts
        """
        report = SweepReport()
        references = self.store.artifact_references()
        cutoff = self._clock() - self.grace_period

        for artifact in self.storage.list_artifacts():
            report.scanned += 1

            if artifact.reference in references:
                report.referenced += 1
                continue

            if self.storage.reference_for(artifact.name) != artifact.reference:
                # Deleting by name would hit a different key than the one listed
                logger.warning(f"Skipping artifact with foreign reference: {artifact.reference}")
                continue

            if artifact.modified_at > cutoff:
                report.skipped_recent += 1
                continue

            if dry_run:
                logger.info(f"[dry run] Would remove orphaned artifact: {artifact.reference}")
            elif self.storage.delete_artifact(artifact.name):
                metrics.orphaned_artifacts_removed_total.inc()
                logger.info(f"Removed orphaned artifact: {artifact.reference}")
            else:
                # Deleted concurrently by someone else
                continue

            report.removed += 1
            report.removed_names.append(artifact.name)

        logger.info(
            f"Orphan sweep finished: scanned={report.scanned}, referenced={report.referenced}, "
            f"removed={report.removed}, skipped_recent={report.skipped_recent}, dry_run={dry_run}"
        )
        return report
