"""
Per-bed plant display settings.

Each bed starts from its model's defaults; updates are partial and
validated against fixed bounds. State lives in memory only.
"""

import logging
import threading
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from garden_shared.errors import NotFoundError

logger = logging.getLogger(__name__)

SCALE_BOUNDS = (0.1, 5.0)
Y_OFFSET_BOUNDS = (-2.0, 2.0)
BRIGHTNESS_BOUNDS = (0.5, 3.0)
GRID_BOUNDS = (1, 12)


class PlantSettings(BaseModel):
    """Display settings for the plants in one bed."""

    model_config = ConfigDict(validate_assignment=True)

    scale: float = Field(default=0.6, ge=SCALE_BOUNDS[0], le=SCALE_BOUNDS[1])
    y_offset: float = Field(default=0.2, ge=Y_OFFSET_BOUNDS[0], le=Y_OFFSET_BOUNDS[1])
    brightness: float = Field(default=1.0, ge=BRIGHTNESS_BOUNDS[0], le=BRIGHTNESS_BOUNDS[1])
    grid_rows: int = Field(default=3, ge=GRID_BOUNDS[0], le=GRID_BOUNDS[1])
    grid_cols: int = Field(default=3, ge=GRID_BOUNDS[0], le=GRID_BOUNDS[1])


class PlantSettingsUpdate(BaseModel):
    """Partial update; omitted fields keep their current value."""

    model_config = ConfigDict(extra="forbid")

    scale: float | None = Field(default=None, ge=SCALE_BOUNDS[0], le=SCALE_BOUNDS[1])
    y_offset: float | None = Field(default=None, ge=Y_OFFSET_BOUNDS[0], le=Y_OFFSET_BOUNDS[1])
    brightness: float | None = Field(default=None, ge=BRIGHTNESS_BOUNDS[0], le=BRIGHTNESS_BOUNDS[1])
    grid_rows: int | None = Field(default=None, ge=GRID_BOUNDS[0], le=GRID_BOUNDS[1])
    grid_cols: int | None = Field(default=None, ge=GRID_BOUNDS[0], le=GRID_BOUNDS[1])


FALLBACK_SETTINGS = PlantSettings()

DEFAULT_PLANT_SETTINGS: dict[str, PlantSettings] = {
    "a_cloesup_shot_of_tulsi_plant.glb": PlantSettings(scale=0.75, y_offset=0.2, grid_rows=3, grid_cols=3),
    "coriander-compressed.glb": PlantSettings(scale=1.2, y_offset=0.2, grid_rows=4, grid_cols=4),
    "Curry leaves 3d model.glb": PlantSettings(scale=0.5, y_offset=0.2, grid_rows=4, grid_cols=4),
    "neem_plant_0218122341_texture_obj.glb": PlantSettings(scale=0.45, y_offset=0.1, grid_rows=4, grid_cols=4),
    "amla_plant_containing_fruits.glb": PlantSettings(scale=0.4, y_offset=0.2, grid_rows=4, grid_cols=4),
    "lemon_grass.glb": PlantSettings(scale=3.5, y_offset=0.15, grid_rows=12, grid_cols=12),
    "mint_freshness.glb": PlantSettings(scale=0.6, y_offset=0.2, grid_rows=3, grid_cols=3),
    "aloe_vera_plant (1).glb": PlantSettings(scale=0.55, y_offset=-0.3, grid_rows=3, grid_cols=3),
}


def defaults_for_model(model: str | None) -> PlantSettings:
    return (DEFAULT_PLANT_SETTINGS.get(model or "") or FALLBACK_SETTINGS).model_copy()


class PlantSettingsStore:
    """
    In-memory settings for every bed.

    Args:
        bed_models: Bed id to model filename, usually from the plant catalog
    """

    def __init__(self, bed_models: dict[str, str]):
        self._bed_models = dict(bed_models)
        self._lock = threading.Lock()
        self._settings: dict[str, PlantSettings] = {
            bed_id: defaults_for_model(model) for bed_id, model in self._bed_models.items()
        }

    def _require(self, bed_id: str) -> None:
        if bed_id not in self._settings:
            raise NotFoundError(f"Unknown bed '{bed_id}'", details={"bed_id": bed_id})

    def get(self, bed_id: str) -> PlantSettings:
        """
        Raises:
            NotFoundError: Unknown bed id
        """
        self._require(bed_id)
        return self._settings[bed_id].model_copy()

    def all(self) -> dict[str, PlantSettings]:
        with self._lock:
            return {bed_id: s.model_copy() for bed_id, s in self._settings.items()}

    def update(self, bed_id: str, changes: PlantSettingsUpdate | dict[str, Any]) -> PlantSettings:
        """
        Apply a partial update to one bed.

        Args:
            bed_id: Bed to update
            changes: Validated update, or a dict validated here

        Returns:
            The bed's settings after the update

        Raises:
            NotFoundError: Unknown bed id
            pydantic.ValidationError: A value is out of bounds or unknown
        """
        self._require(bed_id)
        if not isinstance(changes, PlantSettingsUpdate):
            changes = PlantSettingsUpdate.model_validate(changes)

        values = changes.model_dump(exclude_none=True)
        with self._lock:
            updated = self._settings[bed_id].model_copy(update=values)
            self._settings[bed_id] = PlantSettings.model_validate(updated.model_dump())
        logger.info("Updated settings %s", sorted(values), extra={"bed_id": bed_id})
        return self._settings[bed_id].model_copy()

    def reset(self, bed_id: str) -> PlantSettings:
        """Restore one bed to its model defaults."""
        self._require(bed_id)
        with self._lock:
            self._settings[bed_id] = defaults_for_model(self._bed_models.get(bed_id))
        logger.info("Reset settings", extra={"bed_id": bed_id})
        return self._settings[bed_id].model_copy()

    def reset_all(self) -> dict[str, PlantSettings]:
        with self._lock:
            self._settings = {bed_id: defaults_for_model(model) for bed_id, model in self._bed_models.items()}
        logger.info("Reset settings for all %d beds", len(self._settings))
        return self.all()
