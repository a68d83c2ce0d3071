"""Health check utilities.

Provides health and readiness checks for the database and artifact storage.
"""

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from sqlalchemy import text
from sqlalchemy.orm import Session

from ..domain.submissions.ports.artifact_storage import ArtifactStoragePort

logger = logging.getLogger(__name__)


class HealthStatus(str, Enum):
    """Health check status enum."""
    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"


@dataclass
class ComponentHealth:
    """Health status for a single component."""
    status: HealthStatus
    message: Optional[str] = None
    latency_ms: Optional[float] = None


def check_database_health(db: Session) -> ComponentHealth:
    """Check database connectivity with a trivial query."""
    start = time.perf_counter()
    try:
        db.execute(text("SELECT 1"))
    except Exception as e:
        logger.error(f"Database health check failed: {e}", exc_info=True)
        return ComponentHealth(status=HealthStatus.UNHEALTHY, message=f"Database error: {e}")

    return ComponentHealth(
        status=HealthStatus.HEALTHY,
        message="Database connection OK",
        latency_ms=round((time.perf_counter() - start) * 1000, 2),
    )


def check_artifact_storage_health(storage: ArtifactStoragePort) -> ComponentHealth:
    """Check that the artifact backend can accept writes."""
    start = time.perf_counter()
    try:
        storage.check_available()
    except Exception as e:
        logger.error(f"Artifact storage health check failed: {e}")
        return ComponentHealth(status=HealthStatus.UNHEALTHY, message=str(e))

    return ComponentHealth(
        status=HealthStatus.HEALTHY,
        message="Artifact storage OK",
        latency_ms=round((time.perf_counter() - start) * 1000, 2),
    )


def get_overall_health(components: Dict[str, ComponentHealth]) -> HealthStatus:
    if any(c.status == HealthStatus.UNHEALTHY for c in components.values()):
        return HealthStatus.UNHEALTHY
    return HealthStatus.HEALTHY
