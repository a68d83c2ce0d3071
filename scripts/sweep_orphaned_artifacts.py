#!/usr/bin/env python
"""Remove stored photographs that no submission references.

Intended to run periodically (cron or similar) next to the API.

Usage:
    python scripts/sweep_orphaned_artifacts.py [--dry-run] [--grace-minutes N]

Environment Variables:
    DATABASE_URL: SQLAlchemy connection string
    ARTIFACT_BACKEND, UPLOAD_DIR, S3_*: Artifact storage, as for the API
    ORPHAN_GRACE_MINUTES: Default grace period (default: 60)
"""

import argparse
import sys
from datetime import timedelta
from pathlib import Path

# Add src to Python path
project_src = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(project_src))

from appraisal.config import get_settings
from appraisal.database import build_engine, build_session_factory, session_scope
from appraisal.infrastructure.repositories import SqlAlchemySubmissionStore
from appraisal.infrastructure.storage import build_artifact_storage
from appraisal.observability.logging_config import configure_logging
from appraisal.retention import OrphanSweeper


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Report what would be removed without deleting anything",
    )
    parser.add_argument(
        "--grace-minutes",
        type=int,
        default=None,
        help="Only remove artifacts older than this (default: ORPHAN_GRACE_MINUTES)",
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    """Run one sweep and print its report."""
    args = parse_args(argv)
    settings = get_settings()
    configure_logging(level=settings.LOG_LEVEL, json_format=settings.LOG_JSON)

    grace_minutes = args.grace_minutes
    if grace_minutes is None:
        grace_minutes = settings.ORPHAN_GRACE_MINUTES
    if grace_minutes < 0:
        print("ERROR: --grace-minutes must not be negative")
        return 1

    engine = build_engine(settings.DATABASE_URL)
    storage = build_artifact_storage(settings)

    try:
        with session_scope(build_session_factory(engine)) as db:
            sweeper = OrphanSweeper(
                store=SqlAlchemySubmissionStore(db),
                storage=storage,
                grace_period=timedelta(minutes=grace_minutes),
            )
            report = sweeper.run(dry_run=args.dry_run)
    finally:
        engine.dispose()

    prefix = "[dry run] " if args.dry_run else ""
    print(f"{prefix}Scanned:        {report.scanned}")
    print(f"{prefix}Referenced:     {report.referenced}")
    print(f"{prefix}Removed:        {report.removed}")
    print(f"{prefix}Skipped recent: {report.skipped_recent}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
