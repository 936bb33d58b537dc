"""
Plant Catalog Router.

Static bed catalog plus AI-generated plant insights.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends

from garden_shared.errors import APIException, ErrorCode, UpstreamParseError, UpstreamServiceError, UpstreamUnavailableError
from herbal_garden.core.dependencies import ServiceContainer, get_container

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/plants", tags=["plants"])

NETWORK_ERROR_MESSAGE = "Network error. Please check your internet connection."
PARSE_ERROR_MESSAGE = "Failed to parse AI response. Please try again."
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred. Please try again."


@router.get("")
def list_plants(container: ServiceContainer = Depends(get_container)) -> dict[str, Any]:
    """Every bed and the plant growing in it."""
    return container.catalog.all()


@router.get("/{bed_id}")
def get_plant(bed_id: str, container: ServiceContainer = Depends(get_container)) -> dict[str, Any]:
    return container.catalog.get(bed_id)


@router.get("/{bed_id}/insights")
async def plant_insights(bed_id: str, container: ServiceContainer = Depends(get_container)) -> dict[str, Any]:
    """Description, cultivation and traditional uses of a bed's plant."""
    entry = container.catalog.get(bed_id)

    try:
        return await container.insights.get_insights(entry["name"])
    except UpstreamParseError as e:
        logger.error("Insights parse error: %s", e, extra={"bed_id": bed_id})
        raise UpstreamParseError(PARSE_ERROR_MESSAGE) from e
    except UpstreamUnavailableError as e:
        logger.error("Insights network error: %s", e, extra={"bed_id": bed_id})
        raise UpstreamUnavailableError(NETWORK_ERROR_MESSAGE) from e
    except UpstreamServiceError:
        raise
    except Exception as e:
        logger.exception("Insights error: %s", e, extra={"bed_id": bed_id})
        raise APIException(UNEXPECTED_ERROR_MESSAGE, error_code=ErrorCode.INTERNAL_ERROR) from e
