"""
Elevation shaping for realm generation.

Per-cell elevation is octave Perlin noise plus an optional highland
formation: a geometric mask (linear slope, circle or triangle) laid over
the grid's normalised bounding box that pushes highlands into a shape.
"""

import math
from typing import List, Optional, Tuple

import numpy as np
import structlog

from .generation_options import GenerationOptions
from .hex_grid import Hex, grid_bounds
from .perlin import DEFAULT_OCTAVES, PerlinNoise

logger = structlog.get_logger()

NOISE_BASE_SCALE = 0.1
FORMATION_WEIGHT = 1.5

# Triangle vertices in normalised, rotated space
TRIANGLE_VERTICES = ((0.0, -1.0), (1.0, 1.0), (-1.0, 1.0))

INVERTIBLE_FORMATIONS = ("circle", "triangle")


def roughness_scale(roughness: float) -> float:
    """Noise frequency multiplier; rougher terrain samples the noise more densely."""
    return 1 + roughness * 9


def _sign(p1, p2, p3) -> float:
    return (p1[0] - p3[0]) * (p2[1] - p3[1]) - (p2[0] - p3[0]) * (p1[1] - p3[1])


def point_in_triangle(
    point: Tuple[float, float], vertices: Tuple[Tuple[float, float], ...] = TRIANGLE_VERTICES
) -> bool:
    """Sign test; points on an edge count as inside."""
    a, b, c = vertices
    d1 = _sign(point, a, b)
    d2 = _sign(point, b, c)
    d3 = _sign(point, c, a)
    has_neg = d1 < 0 or d2 < 0 or d3 < 0
    has_pos = d1 > 0 or d2 > 0 or d3 > 0
    return not (has_neg and has_pos)


def formation_modifier(formation: str, rx: float, ry: float, inverse: bool = False) -> float:
    """
    Shape value of a formation at a rotated, normalised position.

    Args:
        formation: One of random, linear, circle, triangle
        rx: Rotated x in roughly [-1, 1]
        ry: Rotated y in roughly [-1, 1]
        inverse: Negate the value (circle and triangle only)

    Returns:
        Modifier added, scaled, to the noise elevation
    """
    if formation == "linear":
        modifier = -ry
    elif formation == "circle":
        modifier = 1 - min(1.0, math.sqrt(rx * rx + ry * ry) / math.sqrt(2))
    elif formation == "triangle":
        modifier = 1.0 if point_in_triangle((rx, ry)) else 0.0
    else:
        modifier = 0.0

    if inverse and formation in INVERTIBLE_FORMATIONS:
        modifier = -modifier
    return modifier


class ElevationShaper:
    """Computes the elevation scalar of every cell in a grid."""

    def __init__(self, options: GenerationOptions, noise: Optional[PerlinNoise] = None):
        """
        Initialize the elevation shaper.

        Args:
            options: Generation options (roughness and highland formation)
            noise: Noise field, seeded from ``options.noise_seed`` when omitted
        """
        self.options = options
        self.noise = noise or PerlinNoise(options.noise_seed)
        self.scale = roughness_scale(options.terrain_roughness)

    def base_elevation(self, q: int, r: int) -> float:
        """Octave noise sampled at the cell's scaled axial position."""
        nx = q * NOISE_BASE_SCALE * self.scale
        ny = r * NOISE_BASE_SCALE * self.scale
        return self.noise.octave_noise(nx, ny, DEFAULT_OCTAVES)

    def compute(self, hexes: List[Hex]) -> np.ndarray:
        """
        Compute elevations for ``hexes``.

        Returns:
            Float array aligned with ``hexes``
        """
        elevations = np.zeros(len(hexes), dtype=np.float64)
        if not hexes:
            return elevations

        formation = self.options.highland_formation
        strength = self.options.highland_formation_strength

        min_q, max_q, min_r, max_r = grid_bounds(hexes)
        center_q = (min_q + max_q) / 2
        center_r = (min_r + max_r) / 2
        half_extent = max(max_q - min_q, max_r - min_r, 1) / 2

        angle = math.radians(self.options.formation_rotation)
        cos_a = math.cos(angle)
        sin_a = math.sin(angle)

        for i, cell in enumerate(hexes):
            elevation = self.base_elevation(cell.q, cell.r)

            if formation != "random":
                nx = (cell.q - center_q) / half_extent
                ny = (cell.r - center_r) / half_extent
                rx = nx * cos_a - ny * sin_a
                ry = nx * sin_a + ny * cos_a
                modifier = formation_modifier(
                    formation, rx, ry, self.options.highland_formation_inverse
                )
                elevation += modifier * FORMATION_WEIGHT * strength

            elevations[i] = elevation

        logger.debug(
            "Computed elevations",
            cells=len(hexes),
            formation=formation,
            min=float(elevations.min()),
            max=float(elevations.max()),
        )
        return elevations
