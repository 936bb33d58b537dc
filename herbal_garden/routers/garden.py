"""
Garden Router - Scene geometry and per-bed display settings.

Read-only layout (beds, grass, plant grids, fog) plus the mutable per-bed
plant settings and a stateless camera step.
"""

import logging
from dataclasses import asdict
from typing import Any

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field

from garden_shared.errors import NotFoundError
from herbal_garden.core.dependencies import ServiceContainer, get_container
from herbal_garden.garden import camera, fog, layout
from herbal_garden.garden.settings_store import PlantSettingsUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/garden", tags=["garden"])


# =============================================================================
# Request Models
# =============================================================================


class Vector3(BaseModel):
    x: float = 0.0
    y: float = camera.EYE_HEIGHT
    z: float = 0.0


class CameraStepRequest(BaseModel):
    """One frame of first-person movement."""

    position: Vector3 = Field(default_factory=Vector3)
    yaw: float = 0.0
    velocity: tuple[float, float] = (0.0, 0.0)
    keys: camera.MoveKeys = Field(default_factory=camera.MoveKeys)
    delta: float = Field(default=1 / 60, ge=0.0)
    elapsed: float = 0.0


# =============================================================================
# Layout
# =============================================================================


@router.get("/layout")
def garden_layout(container: ServiceContainer = Depends(get_container)) -> dict[str, Any]:
    """Beds with their plants, paths and scene constants."""
    catalog = container.catalog.all()
    beds = []
    for bed in layout.get_beds():
        entry = catalog.get(bed.bed_id, {})
        beds.append({**bed.to_dict(), "plant": entry.get("name"), "model": entry.get("model")})

    return {
        "beds": beds,
        "boundary": layout.GARDEN_BOUNDARY,
        "collision_boundary": camera.COLLISION_BOUNDARY,
        "paths": {"half_width": layout.PATH_HALF_WIDTH, "half_length": layout.PATH_HALF_LENGTH},
        "fountain_radius": layout.FOUNTAIN_RADIUS,
        "fog": {"color": fog.FOG_COLOR, "base_density": fog.BASE_DENSITY, "edge_density": fog.EDGE_DENSITY},
        "eye_height": camera.EYE_HEIGHT,
    }


@router.get("/grass")
def grass(
    seed: int = Query(layout.GRASS_SEED, ge=0, le=layout.MAX_GRASS_SEED),
    count: int = Query(layout.GRASS_ATTEMPTS, ge=1, le=20000),
) -> dict[str, Any]:
    """Grass blades for ``count`` placement attempts."""
    blades = layout.generate_grass(seed=seed, attempts=count)
    return {"seed": seed, "attempts": count, "count": len(blades), "blades": [asdict(b) for b in blades]}


@router.get("/beds/{bed_id}/plants")
def bed_plants(bed_id: str, container: ServiceContainer = Depends(get_container)) -> dict[str, Any]:
    """Plant placements for a bed using its current grid settings."""
    bed = layout.get_bed(bed_id)
    if bed is None:
        raise NotFoundError(f"Unknown bed '{bed_id}'", details={"bed_id": bed_id})

    model = container.catalog.model_for(bed_id)
    settings = container.plant_settings.get(bed_id)
    placements = layout.generate_plant_grid(model, settings.grid_rows, settings.grid_cols, bed.inner_size)

    return {
        "bed_id": bed_id,
        "model_path": layout.model_path(model),
        "bed_position": bed.position,
        "settings": settings.model_dump(),
        "plants": [asdict(p) for p in placements],
    }


@router.get("/fog")
def fog_density(x: float = 0.0, z: float = 0.0) -> dict[str, Any]:
    return {"color": fog.FOG_COLOR, "density": fog.fog_density(x, z)}


@router.post("/camera/step")
def camera_step(req: CameraStepRequest) -> dict[str, Any]:
    """Advance the walking camera by one frame."""
    state = camera.CameraState(
        x=req.position.x,
        y=req.position.y,
        z=req.position.z,
        yaw=req.yaw,
        velocity=req.velocity,
    )
    nxt = camera.step(state, req.keys, req.delta, req.elapsed)
    return {
        "position": {"x": nxt.x, "y": nxt.y, "z": nxt.z},
        "yaw": nxt.yaw,
        "velocity": nxt.velocity,
        "fog_density": fog.fog_density(nxt.x, nxt.z),
    }


# =============================================================================
# Plant Settings
# =============================================================================


@router.get("/settings")
def all_settings(container: ServiceContainer = Depends(get_container)) -> dict[str, Any]:
    return {bed_id: s.model_dump() for bed_id, s in container.plant_settings.all().items()}


@router.post("/settings/reset")
def reset_all_settings(container: ServiceContainer = Depends(get_container)) -> dict[str, Any]:
    return {bed_id: s.model_dump() for bed_id, s in container.plant_settings.reset_all().items()}


@router.get("/settings/{bed_id}")
def bed_settings(bed_id: str, container: ServiceContainer = Depends(get_container)) -> dict[str, Any]:
    return container.plant_settings.get(bed_id).model_dump()


@router.patch("/settings/{bed_id}")
def update_bed_settings(
    bed_id: str,
    changes: PlantSettingsUpdate,
    container: ServiceContainer = Depends(get_container),
) -> dict[str, Any]:
    """Partially update one bed's settings."""
    return container.plant_settings.update(bed_id, changes).model_dump()


@router.post("/settings/{bed_id}/reset")
def reset_bed_settings(bed_id: str, container: ServiceContainer = Depends(get_container)) -> dict[str, Any]:
    return container.plant_settings.reset(bed_id).model_dump()
