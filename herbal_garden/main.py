"""
Herbal Garden Backend
=====================
Remedy chat, plant identification, plant catalog and garden layout.

- Core: This file (logging, app factory, middleware, error handlers, router includes)
- Routers: herbal_garden/routers/*.py (domain-specific API routes)
- Lifespan: herbal_garden/core/lifespan.py (fail-closed startup)
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from garden_shared.errors import APIException, ValidationErrorDetail, create_validation_error
from garden_shared.logging.structured import setup_plain_logging, setup_structured_logging
from herbal_garden import __version__
from herbal_garden.config.settings import Settings, get_settings
from herbal_garden.core.dependencies import ServiceContainer
from herbal_garden.core.lifespan import lifespan
from herbal_garden.routers import chat, garden, health, identify, plants

logger = logging.getLogger(__name__)


# =============================================================================
# Logging Configuration
# =============================================================================
def configure_logging(settings: Settings) -> None:
    if settings.STRUCTURED_LOGGING:
        setup_structured_logging(settings.SERVICE_NAME, settings.LOG_LEVEL)
        logger.info("Structured logging enabled for %s", settings.SERVICE_NAME)
    else:
        setup_plain_logging(settings.LOG_LEVEL)
        logger.info("Standard logging enabled")


# =============================================================================
# Error Handlers
# =============================================================================
async def api_exception_handler(request: Request, exc: APIException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_response())


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    field_errors = [
        ValidationErrorDetail(
            field=".".join(str(part) for part in err.get("loc", ()) if part != "body") or "body",
            message=err.get("msg", "Invalid value"),
        )
        for err in exc.errors()
    ]
    error = create_validation_error("Request validation failed", field_errors)
    return JSONResponse(status_code=error.status_code, content=error.to_response())


# =============================================================================
# App Factory
# =============================================================================
def create_app(settings: Settings | None = None, container: ServiceContainer | None = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Settings to use, defaults to the cached environment settings
        container: Pre-built services; when given, startup skips the API key
            check and client construction

    Returns:
        Configured FastAPI app
    """
    settings = settings or (container.settings if container else get_settings())

    app = FastAPI(
        title="Herbal Garden API",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.container = container

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins_list,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(APIException, api_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    app.include_router(health.router)
    app.include_router(chat.router)
    app.include_router(identify.router)
    app.include_router(plants.router)
    app.include_router(garden.router)

    return app


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    settings = get_settings()
    configure_logging(settings)
    uvicorn.run(create_app(settings), host=settings.HOST, port=settings.PORT, log_config=None)


if __name__ == "__main__":
    run()
