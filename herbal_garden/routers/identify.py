"""
Plant Identification Router.

Accepts a photo upload, identifies the plant with the vision model and
records geotagged sightings.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, File, Form, UploadFile

from garden_shared.errors import APIException, ErrorCode, PayloadTooLargeError, UpstreamParseError, ValidationError
from herbal_garden.core.dependencies import ServiceContainer, get_container
from herbal_garden.services.geotag import resolve_coordinates

logger = logging.getLogger(__name__)

router = APIRouter(tags=["identify"])


@router.post("/identify-plant")
async def identify_plant(
    image: UploadFile | None = File(None),
    latitude: str | None = Form(None),
    longitude: str | None = Form(None),
    plant_id: str | None = Form(None, alias="plantId"),
    container: ServiceContainer = Depends(get_container),
) -> dict[str, Any]:
    """Identify the plant in an uploaded image."""
    if image is None:
        raise ValidationError("No image file provided", details={"field": "image"})

    max_bytes = container.settings.max_upload_bytes
    data = await image.read(max_bytes + 1)
    if len(data) > max_bytes:
        raise PayloadTooLargeError(
            f"Image exceeds the {container.settings.MAX_UPLOAD_MB}MB upload limit",
            details={"max_bytes": max_bytes},
        )
    if not data:
        raise ValidationError("No image file provided", details={"field": "image"})

    coords = resolve_coordinates(data, latitude, longitude)

    try:
        return await container.identify.identify(data, image.content_type, coords, plant_id)
    except UpstreamParseError as e:
        logger.error("/identify-plant parse error: %s", e)
        raise UpstreamParseError("Failed to parse AI response") from e
    except Exception as e:
        logger.exception("/identify-plant error: %s", e)
        raise APIException("Failed to identify plant", error_code=ErrorCode.INTERNAL_ERROR) from e
