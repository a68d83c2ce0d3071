"""Observability API endpoints.

Provides metrics, health checks, and readiness checks for monitoring.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Response
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from sqlalchemy.orm import Session

from ..database import get_db
from ..dependencies import get_artifact_storage
from ..domain.submissions.ports.artifact_storage import ArtifactStoragePort
from .health import (
    HealthStatus,
    check_artifact_storage_health,
    check_database_health,
    get_overall_health,
)

router = APIRouter(tags=["Observability"])


@router.get("/metrics", include_in_schema=False)
def metrics():
    """Expose Prometheus metrics in text exposition format."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)


@router.get("/health", summary="Health check endpoint")
def health_check(
    db: Annotated[Session, Depends(get_db)],
    storage: Annotated[ArtifactStoragePort, Depends(get_artifact_storage)],
):
    """Check database and artifact storage.

    Returns 200 if all components are healthy, 503 otherwise.
    """
    components = {
        "database": check_database_health(db),
        "artifact_storage": check_artifact_storage_health(storage),
    }
    overall_status = get_overall_health(components)

    response_data = {
        "status": overall_status.value,
        "components": {
            name: {
                "status": comp.status.value,
                "message": comp.message,
                "latency_ms": comp.latency_ms,
            }
            for name, comp in components.items()
        }
    }

    status_code = 200 if overall_status == HealthStatus.HEALTHY else 503
    return JSONResponse(content=response_data, status_code=status_code)


@router.get("/ready", summary="Readiness check endpoint")
def readiness_check(db: Annotated[Session, Depends(get_db)]):
    """Ready once the database answers."""
    db_health = check_database_health(db)

    if db_health.status == HealthStatus.HEALTHY:
        return {"status": "ready", "message": "Application is ready to serve traffic"}

    return JSONResponse(
        content={"status": "not_ready", "message": db_health.message},
        status_code=503,
    )
