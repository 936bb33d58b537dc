"""
Core Lifespan Module - Application Lifecycle Management.

This module manages FastAPI application startup and shutdown events.

Follows fail-closed principles - startup is blocked when the API keys for
the vector index or the generative model are missing.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from garden_shared.errors import ConfigurationError
from garden_shared.logging.safe_logging import token_presence
from herbal_garden.core.dependencies import build_container

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan context manager for startup/shutdown.

    Performs the following during startup:
    1. Fail-closed check for GEMINI_API_KEY and PINECONE_API_KEY
    2. Service container construction, unless one was injected

    During shutdown:
    - Closes outbound HTTP clients

    Args:
        app: FastAPI application instance.

    Yields:
        Control back to FastAPI after startup is complete.

    Raises:
        ConfigurationError: If a required API key is missing.
    """
    settings = app.state.settings
    logger.info("Starting herbal garden backend...")

    if getattr(app.state, "container", None) is None:
        missing = settings.missing_server_keys()
        if missing:
            logger.error(
                "Missing required configuration: %s (%s, %s)",
                ", ".join(missing),
                token_presence("GEMINI_API_KEY", settings.GEMINI_API_KEY),
                token_presence("PINECONE_API_KEY", settings.PINECONE_API_KEY),
            )
            raise ConfigurationError(
                f"Missing {' and '.join(missing)}. Set them in the environment or .env.",
                details={"missing": missing},
            )
        app.state.container = build_container(settings)
        logger.info("Services initialized for index %s", settings.PINECONE_INDEX_NAME)

    yield

    await app.state.container.close()
    logger.info("Herbal garden backend shutdown complete")
