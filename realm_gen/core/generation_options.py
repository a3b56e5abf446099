"""
Generation options for procedural realms.

``GenerationOptions`` bundles every tunable of a generation run. It
serialises with camelCase keys so the editor can round-trip it as JSON,
and accepts snake_case names from Python callers.
"""

from typing import Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from ..config.terrain_defaults import (
    DEFAULT_LANDMARKS,
    DEFAULT_TERRAIN_BIASES,
    DEFAULT_TERRAIN_HEIGHT_ORDER,
    EXCLUDED_HOLDING_TERRAINS,
    HOLDING_TYPES,
    get_template,
)

HighlandFormation = Literal["random", "none", "linear", "circle", "triangle"]

# A triangle repeats every 120 degrees
MAX_TRIANGLE_ROTATION = 120.0


class GenerationOptions(BaseModel):
    """Options controlling the procedural generation of a realm."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    num_holdings: int = Field(default=4, ge=0, description="Holdings to place")
    num_myths: int = Field(default=6, ge=0, description="Myths to place")
    myth_min_distance: int = Field(
        default=3, ge=0, description="Minimum hex distance between myths"
    )
    landmarks: Dict[str, int] = Field(
        default_factory=lambda: dict(DEFAULT_LANDMARKS),
        description="Count per landmark type",
    )
    generate_barriers: bool = Field(
        default=False, description="Scatter barriers along cell edges"
    )

    highland_formation: HighlandFormation = Field(
        default="linear", description="Shape biasing where highlands form"
    )
    highland_formation_strength: float = Field(
        default=0.7, ge=0.0, le=1.0, description="Blend of the formation against noise"
    )
    highland_formation_rotation: float = Field(
        default=0.0, description="Formation rotation in degrees"
    )
    highland_formation_inverse: bool = Field(
        default=False, description="Swap highlands and lowlands (circle/triangle)"
    )

    terrain_roughness: float = Field(
        default=0.5, ge=0.0, le=1.0, description="Higher is more fragmented terrain"
    )
    terrain_clustering_matrix: Optional[Dict[str, Dict[str, float]]] = Field(
        default=None,
        description="Symmetric terrain affinity weights; derived from roughness when omitted",
    )
    terrain_biases: Dict[str, float] = Field(
        default_factory=lambda: dict(DEFAULT_TERRAIN_BIASES),
        description="Relative area share per terrain",
    )
    terrain_height_order: List[str] = Field(
        default_factory=lambda: list(DEFAULT_TERRAIN_HEIGHT_ORDER),
        description="Terrains from highest to lowest elevation",
    )

    holding_types: List[str] = Field(
        default_factory=lambda: list(HOLDING_TYPES),
        description="Holding types drawn at random",
    )
    excluded_holding_terrains: List[str] = Field(
        default_factory=lambda: list(EXCLUDED_HOLDING_TERRAINS),
        description="Terrains never chosen for a holding",
    )

    seed: Optional[Union[str, int]] = Field(
        default=None, description="Seed for reproducible placement"
    )
    noise_seed: int = Field(default=1, description="Seed of the elevation noise field")

    @field_validator("highland_formation")
    @classmethod
    def _normalise_formation(cls, value: str) -> str:
        return "random" if value == "none" else value

    @field_validator("landmarks")
    @classmethod
    def _check_landmarks(cls, value: Dict[str, int]) -> Dict[str, int]:
        for landmark, count in value.items():
            if count < 0:
                raise ValueError(f"Landmark count for '{landmark}' must be >= 0")
        return value

    @field_validator("terrain_biases")
    @classmethod
    def _check_biases(cls, value: Dict[str, float]) -> Dict[str, float]:
        for terrain, bias in value.items():
            if bias < 0:
                raise ValueError(f"Bias for '{terrain}' must be >= 0")
        return value

    @field_validator("holding_types")
    @classmethod
    def _check_holding_types(cls, value: List[str]) -> List[str]:
        if not value:
            raise ValueError("At least one holding type is required")
        return value

    @field_validator("terrain_clustering_matrix")
    @classmethod
    def _check_matrix(
        cls, value: Optional[Dict[str, Dict[str, float]]]
    ) -> Optional[Dict[str, Dict[str, float]]]:
        if value is None:
            return value
        terrains = set(value)
        for t1, row in value.items():
            if set(row) != terrains:
                raise ValueError(
                    f"Clustering matrix row '{t1}' must cover exactly the terrains {sorted(terrains)}"
                )
            for t2, weight in row.items():
                if not 0.0 <= weight <= 1.0:
                    raise ValueError(
                        f"Clustering weight [{t1}][{t2}]={weight} must be between 0 and 1"
                    )
                if weight != value[t2][t1]:
                    raise ValueError(
                        f"Clustering matrix must be symmetric: [{t1}][{t2}]={weight} "
                        f"but [{t2}][{t1}]={value[t2][t1]}"
                    )
        return value

    @model_validator(mode="after")
    def _clamp_triangle_rotation(self) -> "GenerationOptions":
        if self.highland_formation_rotation != self.formation_rotation:
            self.highland_formation_rotation = self.formation_rotation
        return self

    @property
    def formation_rotation(self) -> float:
        """Rotation in degrees, capped for the triangle formation."""
        if self.highland_formation == "triangle":
            return min(self.highland_formation_rotation, MAX_TRIANGLE_ROTATION)
        return self.highland_formation_rotation

    @classmethod
    def from_template(cls, name: str, **overrides) -> "GenerationOptions":
        """Build options from a named terrain template plus overrides."""
        options = get_template(name)["options"]
        options.update(overrides)
        return cls(**options)

    def to_json_dict(self) -> dict:
        """camelCase dict as exchanged with the editor."""
        return self.model_dump(by_alias=True, mode="json")
