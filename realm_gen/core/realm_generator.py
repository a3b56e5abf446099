"""
Procedural realm generation.

Process:
1. build_grid() - Create the empty cells for the requested shape
2. ElevationShaper - Noise plus highland formation per cell
3. TerrainClassifier - Elevation bands relaxed into terrain clusters
4. BarrierPlacer - Optional barriers along cell edges
5. HoldingPlacer - Spaced holdings and the seat of power
6. LandmarkPlacer - Landmarks on the remaining free cells
7. MythPlacer - Myths on the most remote cells

Every run works on freshly built cells; if any step raises, nothing is
returned and no earlier realm is touched.
"""

import time
from typing import Dict, List, Literal, Optional, Union

import structlog
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..utils.random import resolve_prng
from .alea_prng import AleaPRNG
from .barriers import BarrierPlacer
from .elevation import ElevationShaper
from .generation_options import GenerationOptions
from .hex_grid import (
    Coord,
    GridShape,
    Hex,
    HexGridShape,
    build_grid,
    index_hexes,
    parse_grid_shape,
)
from .landmarks import LandmarkPlacer
from .myths import Myth, MythPlacer
from .settlements import HoldingPlacer
from .terrain import TerrainClassifier

logger = structlog.get_logger()


class SeatOfPower(BaseModel):
    """Coordinates of the realm's primary holding."""

    q: int
    r: int


class Realm(BaseModel):
    """A generated realm in its exchanged form."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    shape: Literal["hex", "square"] = Field(description="Grid shape")
    radius: Optional[int] = Field(default=None, description="Hex radius")
    width: Optional[int] = Field(default=None, description="Rectangle width")
    height: Optional[int] = Field(default=None, description="Rectangle height")
    hexes: List[Hex] = Field(default_factory=list, description="Every cell of the realm")
    myths: List[Myth] = Field(default_factory=list, description="Placed myths")
    seat_of_power: SeatOfPower = Field(description="Seat of power coordinates")

    def cell_at(self, q: int, r: int) -> Optional[Hex]:
        for cell in self.hexes:
            if cell.q == q and cell.r == r:
                return cell
        return None

    def holdings(self) -> List[Hex]:
        return [cell for cell in self.hexes if cell.holding]

    def landmarks(self) -> List[Hex]:
        return [cell for cell in self.hexes if cell.landmark]

    def barrier_count(self) -> int:
        return sum(len(cell.barrier_edges) for cell in self.hexes)


def _shape_fields(shape: GridShape) -> Dict[str, Union[str, int]]:
    if isinstance(shape, HexGridShape):
        return {"shape": "hex", "radius": shape.radius}
    return {"shape": "square", "width": shape.width, "height": shape.height}


def generate_realm(
    shape: Union[GridShape, dict],
    options: Optional[GenerationOptions] = None,
    prng: Optional[AleaPRNG] = None,
) -> Realm:
    """
    Generate a fully populated realm.

    Args:
        shape: ``HexGridShape``/``SquareGridShape`` or its dict form
        options: Generation options, defaults when omitted
        prng: Random source; seeded from ``options.seed`` when omitted

    Returns:
        The generated realm

    Raises:
        RealmGenerationError: If the requested myths cannot all be placed
        ValueError: If the grid shape is invalid
    """
    grid_shape = parse_grid_shape(shape)
    options = options or GenerationOptions()
    prng = resolve_prng(prng, options.seed)
    start = time.perf_counter()

    logger.info("Starting realm generation", **_shape_fields(grid_shape))

    hexes = build_grid(grid_shape)
    index: Dict[Coord, Hex] = index_hexes(hexes)

    elevations = ElevationShaper(options).compute(hexes)
    TerrainClassifier(options).classify(hexes, elevations)

    if options.generate_barriers:
        BarrierPlacer(prng).place(hexes, index)

    holdings = HoldingPlacer(
        prng,
        holding_types=options.holding_types,
        excluded_terrains=options.excluded_holding_terrains,
    )
    seat_q, seat_r = holdings.place(
        hexes, index, grid_shape.size_for_density, options.num_holdings
    )

    LandmarkPlacer(prng).place(hexes, options.landmarks)

    myths = MythPlacer(prng).place(hexes, options.num_myths, options.myth_min_distance)

    realm = Realm(
        **_shape_fields(grid_shape),
        hexes=hexes,
        myths=myths,
        seat_of_power=SeatOfPower(q=seat_q, r=seat_r),
    )

    logger.info(
        "Realm generation completed",
        cells=len(hexes),
        holdings=len(holdings.placed),
        myths=len(myths),
        elapsed_seconds=round(time.perf_counter() - start, 4),
    )
    return realm
