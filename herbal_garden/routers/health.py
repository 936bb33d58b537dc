"""
Health check router.

Provides /health for container orchestration and the browser client.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends

from herbal_garden.config.settings import Settings
from herbal_garden.core.dependencies import get_app_settings

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Health"])


@router.get("/health")
def health(settings: Settings = Depends(get_app_settings)) -> dict[str, Any]:
    """Basic health check naming the configured index."""
    return {"status": "ok", "index": settings.PINECONE_INDEX_NAME}
