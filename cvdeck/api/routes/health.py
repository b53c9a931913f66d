"""Health check and metrics endpoints."""

import time
from datetime import UTC, datetime

from fastapi import APIRouter, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from cvdeck import __version__
from cvdeck.api.dependencies import ServicesDep
from cvdeck.api.models.health import ComponentHealth, HealthResponse, HealthStatus
from cvdeck.observability.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()
metrics_router = APIRouter()


def _store_health(store: object, name: str) -> ComponentHealth:
    """Stores are healthy once constructed; the pool is probed separately."""
    if store is None:
        return ComponentHealth(name=name, status="unhealthy", message="Store not initialized")
    return ComponentHealth(name=name, status="healthy", message=type(store).__name__)


@router.get("/health", response_model=HealthResponse)
async def health_check(services: ServicesDep) -> HealthResponse:
    """Report overall and per-component health."""
    components = [
        _store_health(services.profile_store, "profile_store"),
        _store_health(services.contact_store, "contact_store"),
    ]

    if services.postgres_pool is not None:
        start = time.perf_counter()
        healthy = await services.postgres_pool.health_check()
        components.append(
            ComponentHealth(
                name="postgres",
                status="healthy" if healthy else "unhealthy",
                latency_ms=(time.perf_counter() - start) * 1000,
            )
        )

    # Email is optional, so a missing notifier only degrades the service
    components.append(
        ComponentHealth(
            name="email",
            status="healthy" if services.notifier is not None else "degraded",
            message=None if services.notifier is not None else "Notifications disabled",
        )
    )

    overall: HealthStatus
    if any(c.status == "unhealthy" for c in components):
        overall = "unhealthy"
    elif any(c.status == "degraded" for c in components):
        overall = "degraded"
    else:
        overall = "healthy"

    logger.debug("health_check_completed", status=overall)

    return HealthResponse(
        status=overall,
        version=__version__,
        components=components,
        timestamp=datetime.now(UTC),
    )


@metrics_router.get("/metrics")
async def get_metrics() -> Response:
    """Prometheus metrics in text exposition format."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
