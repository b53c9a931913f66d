"""FastAPI application factory.

Creates and configures the FastAPI application with middleware,
exception handlers, the service lifespan and route registration.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from cvdeck import __version__
from cvdeck.api.exceptions import CVDeckAPIError
from cvdeck.api.middleware.rate_limit import RateLimitMiddleware
from cvdeck.api.models.errors import ErrorCode, ErrorDetail, ErrorResponse
from cvdeck.api.routes import register_routes
from cvdeck.bootstrap import Services, build_services
from cvdeck.config import get_settings
from cvdeck.config.settings import Settings
from cvdeck.contact.errors import ContactValidationError
from cvdeck.db.errors import StoreError
from cvdeck.notifications.email import EmailError
from cvdeck.observability.logging import get_logger, setup_logging
from cvdeck.providers.llm.base import ProviderError

logger = get_logger(__name__)

INVALID_FORM_MESSAGE = "Invalid form data. Please check your inputs."
DATABASE_ERROR_MESSAGE = "Database operation failed. Please try again later."
EMAIL_ERROR_MESSAGE = "Failed to send notification email. Your message was saved."
LLM_ERROR_MESSAGE = "The chat model is unavailable. Please try again later."
INTERNAL_ERROR_MESSAGE = "Something went wrong. Please try again later."


def _error_response(
    status_code: int,
    code: ErrorCode,
    message: str,
    details: list[ErrorDetail] | None = None,
) -> JSONResponse:
    body = ErrorResponse(message=message, code=code, details=details)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", exclude_none=True),
    )


def create_app(
    settings: Settings | None = None,
    services: Services | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Configuration, loaded from TOML and environment by default
        services: Prebuilt service container. When omitted the lifespan
            builds one at startup and closes it at shutdown.

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()
    log_config = settings.observability.logging
    setup_logging(
        level=log_config.level,
        format=log_config.format,
        redact_pii=log_config.redact_pii,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if services is not None:
            app.state.services = services
            yield
            return

        built = await build_services(settings)
        app.state.services = built
        try:
            yield
        finally:
            await built.aclose()

    app = FastAPI(
        title="CV Deck API",
        description="Portfolio API with a persona chat and passive contact capture",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    if services is not None:
        app.state.services = services

    app.add_middleware(
        RateLimitMiddleware,
        enabled=settings.api.rate_limit.enabled,
        requests_per_minute=settings.api.rate_limit.requests_per_minute,
    )

    # Added last so it wraps the limiter and 429s carry CORS headers
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_credentials=settings.api.cors_allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _register_exception_handlers(app)

    register_routes(app, metrics_enabled=settings.observability.metrics.enabled)

    logger.info(
        "app_created",
        debug=settings.debug,
        cors_origins=settings.api.cors_origins,
    )

    return app


def _register_exception_handlers(app: FastAPI) -> None:
    """Register global exception handlers.

    Every error body has the shape ``{success: false, message, code, details?}``.
    """

    @app.exception_handler(CVDeckAPIError)
    async def api_error_handler(request: Request, exc: CVDeckAPIError) -> JSONResponse:
        logger.warning(
            "api_error",
            error_code=exc.error_code.value,
            message=exc.message,
            path=request.url.path,
        )
        return _error_response(exc.status_code, exc.error_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        details = [
            ErrorDetail(
                field=".".join(str(loc) for loc in error["loc"]),
                message=error["msg"],
            )
            for error in exc.errors()
        ]
        logger.warning(
            "validation_error",
            fields=[d.field for d in details],
            path=request.url.path,
        )
        return _error_response(400, ErrorCode.INVALID_REQUEST, INVALID_FORM_MESSAGE, details)

    @app.exception_handler(ContactValidationError)
    async def contact_validation_error_handler(
        request: Request, exc: ContactValidationError
    ) -> JSONResponse:
        logger.warning("contact_validation_error", message=exc.message, path=request.url.path)
        return _error_response(400, ErrorCode.INVALID_REQUEST, exc.message)

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
        logger.error("database_error", error=exc.message, path=request.url.path)
        return _error_response(500, ErrorCode.DATABASE_ERROR, DATABASE_ERROR_MESSAGE)

    @app.exception_handler(EmailError)
    async def email_error_handler(request: Request, exc: EmailError) -> JSONResponse:
        logger.error("email_error", error=exc.message, path=request.url.path)
        return _error_response(
            500,
            ErrorCode.EMAIL_ERROR,
            exc.message or EMAIL_ERROR_MESSAGE,
        )

    @app.exception_handler(ProviderError)
    async def provider_error_handler(request: Request, exc: ProviderError) -> JSONResponse:
        logger.error("llm_provider_error", error=str(exc), path=request.url.path)
        return _error_response(502, ErrorCode.LLM_ERROR, LLM_ERROR_MESSAGE)

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(
            "unexpected_error",
            error=str(exc),
            error_type=type(exc).__name__,
            path=request.url.path,
        )
        return _error_response(500, ErrorCode.INTERNAL_ERROR, INTERNAL_ERROR_MESSAGE)

    logger.debug("exception_handlers_registered")
