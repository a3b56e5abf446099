"""
Default terrain tables and generation templates.

All values here are immutable. Callers override them per run through
``GenerationOptions`` rather than by mutating this module.
"""

from types import MappingProxyType
from typing import Dict, List, Mapping

# Terrain types in declaration order
TERRAIN_TYPES = (
    "marsh",
    "heath",
    "crags",
    "peaks",
    "forest",
    "valley",
    "hills",
    "meadow",
    "bog",
    "lakes",
    "glades",
    "plain",
)

# Highest elevation first
DEFAULT_TERRAIN_HEIGHT_ORDER = (
    "peaks",
    "crags",
    "hills",
    "heath",
    "forest",
    "meadow",
    "plain",
    "glades",
    "valley",
    "marsh",
    "bog",
    "lakes",
)

HOLDING_TYPES = ("castle", "city", "town", "village")
LANDMARK_TYPES = ("dwelling", "sanctum", "monument", "hazard", "curse", "ruins")

# Terrains on which no holding is ever founded
EXCLUDED_HOLDING_TERRAINS = ("peaks", "crags", "bog", "lakes", "marsh")

# Holding forced onto the origin when nothing else could be placed
FALLBACK_HOLDING = "castle"

# Terrain given to a cell the banding step never reached
FALLBACK_TERRAIN = "plain"

# Probability of a barrier on any given hex edge
BARRIER_CHANCE = 1 / 6

DEFAULT_LANDMARK_COUNT = 3

AFFINITIES = MappingProxyType(
    {"self": 0.75, "strong": 0.6, "moderate": 0.4, "weak": 0.2, "none": 0.0}
)

# (terrain_a, terrain_b, affinity level) applied symmetrically
_AFFINITY_RULES = (
    ("peaks", "crags", "strong"),
    ("peaks", "hills", "moderate"),
    ("crags", "hills", "strong"),
    ("lakes", "marsh", "strong"),
    ("lakes", "bog", "moderate"),
    ("marsh", "bog", "strong"),
    ("plain", "meadow", "strong"),
    ("plain", "heath", "strong"),
    ("plain", "valley", "moderate"),
    ("meadow", "glades", "moderate"),
    ("valley", "hills", "moderate"),
    ("forest", "hills", "moderate"),
    ("forest", "glades", "strong"),
    ("forest", "valley", "moderate"),
    ("hills", "plain", "moderate"),
    ("hills", "meadow", "moderate"),
    ("peaks", "marsh", "none"),
    ("peaks", "bog", "none"),
    ("peaks", "lakes", "none"),
    ("crags", "lakes", "none"),
)


def _build_default_matrix() -> Dict[str, Dict[str, float]]:
    matrix = {
        t1: {t2: AFFINITIES["weak"] for t2 in TERRAIN_TYPES} for t1 in TERRAIN_TYPES
    }
    for terrain in TERRAIN_TYPES:
        matrix[terrain][terrain] = AFFINITIES["self"]
    for t1, t2, level in _AFFINITY_RULES:
        matrix[t1][t2] = AFFINITIES[level]
        matrix[t2][t1] = AFFINITIES[level]
    return matrix


DEFAULT_TERRAIN_CLUSTERING_MATRIX: Mapping[str, Mapping[str, float]] = MappingProxyType(
    {t1: MappingProxyType(row) for t1, row in _build_default_matrix().items()}
)

DEFAULT_TERRAIN_BIASES: Mapping[str, float] = MappingProxyType(
    {
        "marsh": 5,
        "heath": 10,
        "crags": 5,
        "peaks": 5,
        "forest": 15,
        "valley": 5,
        "hills": 15,
        "meadow": 10,
        "bog": 5,
        "lakes": 5,
        "glades": 5,
        "plain": 10,
    }
)

DEFAULT_LANDMARKS: Mapping[str, int] = MappingProxyType(
    {landmark: DEFAULT_LANDMARK_COUNT for landmark in LANDMARK_TYPES}
)


def copy_matrix(
    matrix: Mapping[str, Mapping[str, float]]
) -> Dict[str, Dict[str, float]]:
    """Return a plain mutable copy of a clustering matrix."""
    return {t1: dict(row) for t1, row in matrix.items()}


def scaled_clustering_matrix(roughness: float) -> Dict[str, Dict[str, float]]:
    """
    Derive the effective clustering matrix for a roughness setting.

    Rougher terrain weakens every non-zero affinity, smoother terrain
    strengthens it. Zero affinities stay zero so incompatible terrains
    never attract each other.

    Args:
        roughness: Terrain roughness in [0, 1]

    Returns:
        New matrix with weights clamped to [0.01, 1]
    """
    multiplier = 2 * (1 - roughness)
    scaled = {}
    for t1 in TERRAIN_TYPES:
        scaled[t1] = {}
        for t2 in TERRAIN_TYPES:
            base = DEFAULT_TERRAIN_CLUSTERING_MATRIX[t1][t2]
            scaled[t1][t2] = 0.0 if base == 0 else max(0.01, min(1.0, base * multiplier))
    return scaled


TERRAIN_TEMPLATES = MappingProxyType(
    {
        "balanced": {
            "name": "Balanced Realm",
            "options": {
                "highland_formation": "linear",
                "highland_formation_strength": 0.7,
                "highland_formation_rotation": 0,
                "terrain_roughness": 0.5,
                "terrain_biases": dict(DEFAULT_TERRAIN_BIASES),
            },
        },
        "jagged": {
            "name": "Jagged Peaks",
            "options": {
                "highland_formation": "circle",
                "highland_formation_strength": 1.0,
                "highland_formation_rotation": 0,
                "terrain_roughness": 0.8,
                "terrain_biases": {
                    "marsh": 1,
                    "heath": 2,
                    "crags": 20,
                    "peaks": 25,
                    "forest": 5,
                    "valley": 3,
                    "hills": 20,
                    "meadow": 2,
                    "bog": 1,
                    "lakes": 1,
                    "glades": 2,
                    "plain": 5,
                },
            },
        },
        "lush": {
            "name": "Lush Lowlands",
            "options": {
                "highland_formation": "linear",
                "highland_formation_strength": 0.5,
                "highland_formation_rotation": 180,
                "terrain_roughness": 0.25,
                "terrain_biases": {
                    "marsh": 15,
                    "heath": 5,
                    "crags": 1,
                    "peaks": 1,
                    "forest": 25,
                    "valley": 10,
                    "hills": 5,
                    "meadow": 8,
                    "bog": 10,
                    "lakes": 10,
                    "glades": 8,
                    "plain": 12,
                },
            },
        },
        "sunkenCaldera": {
            "name": "Sunken Caldera",
            "options": {
                "highland_formation": "circle",
                "highland_formation_strength": 1.0,
                "highland_formation_inverse": True,
                "terrain_roughness": 0.75,
                "terrain_biases": {
                    "marsh": 5,
                    "heath": 2,
                    "crags": 20,
                    "peaks": 25,
                    "forest": 3,
                    "valley": 5,
                    "hills": 15,
                    "meadow": 1,
                    "bog": 10,
                    "lakes": 15,
                    "glades": 1,
                    "plain": 2,
                },
            },
        },
    }
)


def get_template(name: str) -> dict:
    """Get a terrain template by name, returning a fresh copy of its options."""
    if name not in TERRAIN_TEMPLATES:
        raise ValueError(f"Unknown template: {name}. Available: {list_templates()}")
    template = TERRAIN_TEMPLATES[name]
    options = {
        key: dict(value) if isinstance(value, dict) else value
        for key, value in template["options"].items()
    }
    return {"name": template["name"], "options": options}


def list_templates() -> List[str]:
    """List all available terrain template names."""
    return list(TERRAIN_TEMPLATES.keys())
