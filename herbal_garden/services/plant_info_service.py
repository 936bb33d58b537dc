"""
Plant Catalog and AI Insights.

The catalog is a static JSON file keyed by bed id. Insights are generated
per plant on demand and cached in memory once they succeed.
"""

import json
import logging
from pathlib import Path
from typing import Any

from garden_shared.errors import NotFoundError, UpstreamServiceError
from herbal_garden.clients.generation import TextGenerator
from herbal_garden.services.parsing import parse_model_json
from herbal_garden.services.prompts import plant_info_prompt

logger = logging.getLogger(__name__)

REQUIRED_INSIGHT_FIELDS = ("description", "cultivation_method", "medical_uses")
INSIGHT_DISCLAIMER = (
    "This information is for educational purposes only. "
    "Consult a qualified healthcare professional before using any herbal remedy."
)


class PlantCatalog:
    """Read-only catalog of the garden's beds and their plants."""

    def __init__(self, entries: dict[str, dict[str, Any]]):
        self._entries = entries

    @classmethod
    def from_file(cls, path: Path) -> "PlantCatalog":
        with open(path, encoding="utf-8") as fh:
            entries = json.load(fh)
        logger.info("Loaded %d catalog entries from %s", len(entries), path)
        return cls(entries)

    def all(self) -> dict[str, dict[str, Any]]:
        return {bed_id: dict(entry) for bed_id, entry in self._entries.items()}

    def get(self, bed_id: str) -> dict[str, Any]:
        """
        Catalog entry for one bed.

        Raises:
            NotFoundError: Unknown bed id
        """
        entry = self._entries.get(bed_id)
        if entry is None:
            raise NotFoundError(f"Unknown bed '{bed_id}'", details={"bed_id": bed_id})
        return dict(entry)

    def model_for(self, bed_id: str) -> str:
        return self.get(bed_id)["model"]


class PlantInsightService:
    """AI-generated description, cultivation and uses for a plant."""

    def __init__(self, generator: TextGenerator):
        self.generator = generator
        self._cache: dict[str, dict[str, Any]] = {}

    async def get_insights(self, plant_name: str) -> dict[str, Any]:
        """
        Insights for a plant, from cache when available.

        Raises:
            UpstreamParseError: Model answer was not a JSON object
            UpstreamServiceError: Answer lacked a required field
            UpstreamUnavailableError: No model could be reached
        """
        if plant_name in self._cache:
            return self._cache[plant_name]

        result = await self.generator.generate(plant_info_prompt(plant_name))
        parsed = parse_model_json(result.text)

        if not all(parsed.get(key) for key in REQUIRED_INSIGHT_FIELDS):
            raise UpstreamServiceError("Incomplete response from AI", details={"plant": plant_name})

        insights = {key: parsed[key] for key in REQUIRED_INSIGHT_FIELDS}
        insights["disclaimer"] = parsed.get("disclaimer") or INSIGHT_DISCLAIMER

        self._cache[plant_name] = insights
        logger.info("Cached insights for %s", plant_name, extra={"model": result.model})
        return insights
