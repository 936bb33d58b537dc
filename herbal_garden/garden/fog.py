"""Distance-based exponential fog, light at the garden centre and denser at the edges."""

import math

FOG_COLOR = "#e8dfd4"
BASE_DENSITY = 0.045
EDGE_DENSITY = 0.07
FADE_DISTANCE = 15.0


def fog_density(x: float, z: float) -> float:
    """Fog density for a camera at (x, z)."""
    t = min(math.hypot(x, z) / FADE_DISTANCE, 1.0)
    return BASE_DENSITY + (EDGE_DENSITY - BASE_DENSITY) * t * 0.5
