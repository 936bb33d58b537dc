"""
Plant Identification Service.

Sends an uploaded photo to the vision model and, when the photo carries a
location, records the sighting in the vector index.
"""

import logging
import secrets
from datetime import datetime, timezone
from typing import Any

import httpx

from garden_shared.clients.base import CircuitOpenError
from herbal_garden.clients.gemini import ImagePart
from herbal_garden.clients.generation import TextGenerator
from herbal_garden.clients.pinecone import VectorIndexClient
from herbal_garden.services.geotag import Coordinates
from herbal_garden.services.parsing import parse_model_json
from herbal_garden.services.prompts import IDENTIFY_PROMPT

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "image/jpeg"
UNKNOWN_PLANT = "Unknown"
NO_MEDICAL_VALUE = "No medicinal information available"


def build_sighting_record(
    plant_id: str,
    coords: Coordinates,
    identified_plant: str,
    medical_value: str,
    observed_at: datetime | None = None,
) -> dict[str, Any]:
    """Record describing one geotagged identification."""
    observed_at = observed_at or datetime.now(timezone.utc)
    return {
        "_id": f"sighting-{plant_id}-{secrets.token_hex(4)}",
        "chunk_text": (
            f"{identified_plant} was photographed near bed '{plant_id}' "
            f"at latitude {coords.latitude}, longitude {coords.longitude}. {medical_value}"
        ),
        "plantId": plant_id,
        "identified_plant": identified_plant,
        "medical_value": medical_value,
        "latitude": coords.latitude,
        "longitude": coords.longitude,
        "timestamp": observed_at.isoformat(),
    }


class PlantIdentifyService:
    """Identifies plants in photos and stores geotagged sightings."""

    def __init__(
        self,
        generator: TextGenerator,
        index: VectorIndexClient | None = None,
        sightings_namespace: str = "sightings",
    ):
        self.generator = generator
        self.index = index
        self.sightings_namespace = sightings_namespace

    async def identify(
        self,
        image_bytes: bytes,
        mime_type: str | None = None,
        coords: Coordinates | None = None,
        plant_id: str | None = None,
    ) -> dict[str, Any]:
        """
        Identify the plant in an image.

        Args:
            image_bytes: Raw uploaded image
            mime_type: Upload content type, defaults to image/jpeg
            coords: Where the photo was taken, if known
            plant_id: Bed the photo was uploaded from

        Returns:
            Identification with location fields and ``location_stored``

        Raises:
            UpstreamParseError: Model answer was not a JSON object
        """
        image = ImagePart(data=image_bytes, mime_type=mime_type or DEFAULT_MIME_TYPE)
        result = await self.generator.generate(IDENTIFY_PROMPT, image=image)
        parsed = parse_model_json(result.text)

        identified_plant = parsed.get("identified_plant") or UNKNOWN_PLANT
        medical_value = parsed.get("medical_value") or NO_MEDICAL_VALUE
        plant_id = plant_id or "unknown"
        logger.info("Identified %s", identified_plant, extra={"model": result.model, "bed_id": plant_id})

        location_stored = False
        if coords is not None:
            location_stored = await self._store_sighting(plant_id, coords, identified_plant, medical_value)

        return {
            "identified_plant": identified_plant,
            "medical_value": medical_value,
            "latitude": coords.latitude if coords else None,
            "longitude": coords.longitude if coords else None,
            "plant_id": plant_id,
            "location_stored": location_stored,
        }

    async def _store_sighting(
        self,
        plant_id: str,
        coords: Coordinates,
        identified_plant: str,
        medical_value: str,
    ) -> bool:
        if self.index is None:
            return False

        record = build_sighting_record(plant_id, coords, identified_plant, medical_value)
        try:
            await self.index.upsert_records(self.sightings_namespace, [record])
        except (httpx.HTTPError, CircuitOpenError, ValueError) as e:
            logger.error(
                "Failed to store sighting %s: %s",
                record["_id"],
                e,
                extra={"namespace": self.sightings_namespace},
            )
            return False
        return True
