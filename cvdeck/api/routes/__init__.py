"""API route registration."""

from fastapi import APIRouter, FastAPI

from cvdeck.observability.logging import get_logger

logger = get_logger(__name__)


def create_api_router() -> APIRouter:
    """Create the /api router with all public routes."""
    router = APIRouter(prefix="/api")

    from cvdeck.api.routes.chat import router as chat_router
    from cvdeck.api.routes.contact import router as contact_router
    from cvdeck.api.routes.profile import router as profile_router

    router.include_router(contact_router, tags=["Contact"])
    router.include_router(chat_router, tags=["Chat"])
    router.include_router(profile_router, tags=["Profile"])

    return router


def register_routes(app: FastAPI, *, metrics_enabled: bool = True) -> None:
    """Register all routes with the FastAPI application.

    Args:
        app: FastAPI application instance
        metrics_enabled: Expose the Prometheus endpoint
    """
    app.include_router(create_api_router())

    # Health and metrics live at root level
    from cvdeck.api.routes.health import metrics_router
    from cvdeck.api.routes.health import router as health_router

    app.include_router(health_router, tags=["Health"])
    if metrics_enabled:
        app.include_router(metrics_router, tags=["Health"])

    logger.info("routes_registered", metrics=metrics_enabled)
