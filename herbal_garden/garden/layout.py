"""
Garden Layout.

Deterministic geometry for the garden scene: bed positions, instanced grass
blades and the per-bed plant grid. Every random choice comes from
``SeededRandom`` so a given seed always yields the same scene.
"""

import math
from dataclasses import asdict, dataclass

# =============================================================================
# CONSTANTS
# =============================================================================

BED_SIZE = 5.0
BED_OFFSET = 7.0
BED_BORDER_THICKNESS = 0.25
BED_INNER_SIZE = BED_SIZE - BED_BORDER_THICKNESS * 2
COMMUNITY_BOX_HEIGHT = 0.45
COMMUNITY_BOX_GAP = 0.6

BED_POSITIONS: dict[str, tuple[float, float, float]] = {
    "nw-1": (-7.0, 0.0, -7.0),
    "nw-2": (-7.0, 0.0, -13.0),
    "ne-1": (7.0, 0.0, -7.0),
    "ne-2": (7.0, 0.0, -13.0),
    "sw-1": (-7.0, 0.0, 7.0),
    "sw-2": (-7.0, 0.0, 13.0),
    "se-1": (7.0, 0.0, 7.0),
    "se-2": (7.0, 0.0, 13.0),
}

GARDEN_BOUNDARY = 16.5
GRASS_SEED = 12345
# Largest seed for which seed * 9301 + 49297 is exact as a float64
MAX_GRASS_SEED = (2**53 - 49297) // 9301
GRASS_ATTEMPTS = 2000
GRASS_COLORS = ("#3d6b35", "#4a7a42", "#5a8a4a", "#456b3a", "#3a5f32", "#4d7d45")

PATH_HALF_WIDTH = 1.8
PATH_HALF_LENGTH = 14.5
BED_CLEARANCE = 2.8
FOUNTAIN_RADIUS = 2.5

PLANT_SPACING = 1.2
PLANT_JITTER = 0.3
LEMONGRASS_MODEL = "lemon_grass.glb"
LEMONGRASS_SPACING = 0.3
LEMONGRASS_JITTER = 0.15


# =============================================================================
# SEEDED RANDOM
# =============================================================================


class SeededRandom:
    """Linear congruential generator shared with the browser scene.

    ``seed = (seed * 9301 + 49297) % 233280`` and each value is
    ``seed / 233280``, so values fall in [0, 1).
    """

    MULTIPLIER = 9301
    INCREMENT = 49297
    MODULUS = 233280

    def __init__(self, seed: int):
        self.seed = seed

    def next(self) -> float:
        self.seed = (self.seed * self.MULTIPLIER + self.INCREMENT) % self.MODULUS
        return self.seed / self.MODULUS

    def take(self, n: int) -> list[float]:
        return [self.next() for _ in range(n)]


# =============================================================================
# BEDS
# =============================================================================


@dataclass
class Bed:
    bed_id: str
    position: tuple[float, float, float]
    size: float = BED_SIZE
    inner_size: float = BED_INNER_SIZE

    @property
    def community_box(self) -> tuple[float, float, float]:
        x, _, z = self.position
        return (x, COMMUNITY_BOX_HEIGHT, z + self.size / 2 + COMMUNITY_BOX_GAP)

    def to_dict(self) -> dict:
        data = asdict(self)
        data["community_box"] = self.community_box
        return data


def get_beds() -> list[Bed]:
    return [Bed(bed_id, position) for bed_id, position in BED_POSITIONS.items()]


def get_bed(bed_id: str) -> Bed | None:
    position = BED_POSITIONS.get(bed_id)
    return Bed(bed_id, position) if position is not None else None


# =============================================================================
# GRASS
# =============================================================================


@dataclass
class GrassBlade:
    position: tuple[float, float, float]
    rotation: tuple[float, float, float]
    scale: tuple[float, float, float]
    color: str


def is_valid_grass_position(x: float, z: float) -> bool:
    """False when (x, z) is outside the garden or on a path, bed or the fountain."""
    if abs(x) > GARDEN_BOUNDARY or abs(z) > GARDEN_BOUNDARY:
        return False

    on_horizontal_path = abs(z) < PATH_HALF_WIDTH and abs(x) < PATH_HALF_LENGTH
    on_vertical_path = abs(x) < PATH_HALF_WIDTH and abs(z) < PATH_HALF_LENGTH
    if on_horizontal_path or on_vertical_path:
        return False

    on_bed_column = abs(x - 7) < BED_CLEARANCE or abs(x + 7) < BED_CLEARANCE
    on_bed_row = (
        abs(z - 7) < BED_CLEARANCE
        or abs(z + 7) < BED_CLEARANCE
        or abs(z - 13) < BED_CLEARANCE
        or abs(z + 13) < BED_CLEARANCE
    )
    if on_bed_column and on_bed_row:
        return False

    return math.sqrt(x * x + z * z) >= FOUNTAIN_RADIUS


def path_edge_distance(x: float, z: float) -> float:
    return min(abs(abs(z) - PATH_HALF_WIDTH), abs(abs(x) - PATH_HALF_WIDTH))


def generate_grass(seed: int = GRASS_SEED, attempts: int = GRASS_ATTEMPTS) -> list[GrassBlade]:
    """
    Scatter grass blades over the open ground.

    Each attempt draws x and z; an invalid spot moves on to the next attempt.
    Valid spots draw a keep roll (denser near path edges), then height,
    yaw, tilt and colour in that order.

    Args:
        seed: Generator seed
        attempts: Number of candidate positions

    Returns:
        Blades in generation order
    """
    rng = SeededRandom(seed)
    blades: list[GrassBlade] = []

    for _ in range(attempts):
        x = (rng.next() - 0.5) * GARDEN_BOUNDARY * 2
        z = (rng.next() - 0.5) * GARDEN_BOUNDARY * 2
        if not is_valid_grass_position(x, z):
            continue

        near_path = path_edge_distance(x, z) < 2
        keep = 0.9 if near_path else 0.6
        if rng.next() > keep:
            continue

        height = 0.5 + rng.next() * 0.3 if near_path else 0.7 + rng.next() * 0.5
        rot_y = rng.next() * math.pi * 2
        rot_z = (rng.next() - 0.5) * 0.35
        color = GRASS_COLORS[math.floor(rng.next() * len(GRASS_COLORS))]

        blades.append(
            GrassBlade(
                position=(x, height * 0.1, z),
                rotation=(0.0, rot_y, rot_z),
                scale=(0.4, height, 0.4),
                color=color,
            )
        )

    return blades


# =============================================================================
# PLANT GRID
# =============================================================================


@dataclass
class PlantPlacement:
    position: tuple[float, float, float]
    rotation: float
    row: int = 0
    col: int = 0


@dataclass
class GridSpec:
    spacing: float
    jitter: float
    seed: int


def model_path(model: str) -> str:
    return f"/models/{model}"


def grid_spec_for(model: str) -> GridSpec:
    """Spacing, jitter and seed for a model's plant grid."""
    path = model_path(model)
    if LEMONGRASS_MODEL in path:
        return GridSpec(spacing=LEMONGRASS_SPACING, jitter=LEMONGRASS_JITTER, seed=len(path) * 1000)
    return GridSpec(spacing=PLANT_SPACING, jitter=PLANT_JITTER, seed=len(path) * 1000)


def generate_plant_grid(
    model: str,
    rows: int,
    cols: int,
    inner_size: float = BED_INNER_SIZE,
) -> list[PlantPlacement]:
    """
    Plant positions inside one bed, relative to the bed centre.

    Placement is row-major. Each plant draws x offset, z offset and rotation.
    A single row or column is centred on the bed.
    """
    spec = grid_spec_for(model)
    spacing = spec.spacing

    spacing_x = (inner_size - spacing) / (cols - 1) if cols > 1 else 0.0
    spacing_z = (inner_size - spacing) / (rows - 1) if rows > 1 else 0.0
    start_x = -inner_size / 2 + spacing / 2 if cols > 1 else 0.0
    start_z = -inner_size / 2 + spacing / 2 if rows > 1 else 0.0

    rng = SeededRandom(spec.seed)
    placements = []
    for row in range(rows):
        for col in range(cols):
            offset_x = (rng.next() - 0.5) * spec.jitter
            offset_z = (rng.next() - 0.5) * spec.jitter
            rotation = rng.next() * math.pi * 2
            placements.append(
                PlantPlacement(
                    position=(start_x + col * spacing_x + offset_x, 0.0, start_z + row * spacing_z + offset_z),
                    rotation=rotation,
                    row=row,
                    col=col,
                )
            )
    return placements
