"""
Hex grid geometry for realm generation.

Cells are addressed with axial coordinates (q, r); the third cube
coordinate s = -q - r is stored alongside for validation. Edge indices
0..5 follow the pointy-top direction order E, SE, SW, W, NW, NE, so the
edge a neighbour shares with a cell is always ``(edge + 3) % 6``.
"""

import math
from typing import Dict, Iterable, List, Literal, Optional, Tuple, Union

import structlog
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

logger = structlog.get_logger()

Coord = Tuple[int, int]

# Axial direction vectors, indexed by edge
AXIAL_DIRECTIONS: Tuple[Coord, ...] = (
    (1, 0),  # 0: E
    (0, 1),  # 1: SE
    (-1, 1),  # 2: SW
    (-1, 0),  # 3: W
    (0, -1),  # 4: NW
    (1, -1),  # 5: NE
)

ORIGIN: Coord = (0, 0)


def opposite_edge(edge: int) -> int:
    """Edge index of the same border seen from the neighbouring cell."""
    return (edge + 3) % 6


def axial_distance(a: Coord, b: Coord) -> int:
    """Hex distance between two axial coordinates."""
    dq = a[0] - b[0]
    dr = a[1] - b[1]
    return (abs(dq) + abs(dr) + abs(dq + dr)) // 2


def get_neighbors(q: int, r: int) -> List[Coord]:
    """Axial coordinates of the 6 neighbours of (q, r), in edge order."""
    return [(q + dq, r + dr) for dq, dr in AXIAL_DIRECTIONS]


def get_neighbor(q: int, r: int, edge: int) -> Coord:
    """Axial coordinates of the neighbour across ``edge``."""
    dq, dr = AXIAL_DIRECTIONS[edge]
    return (q + dq, r + dr)


class Hex(BaseModel):
    """A single realm cell and everything generation attaches to it."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    q: int = Field(description="Axial column")
    r: int = Field(description="Axial row")
    s: Optional[int] = Field(default=None, description="Cube coordinate, -q - r")
    terrain: str = Field(default="", description="Terrain type identifier")
    barrier_edges: List[int] = Field(
        default_factory=list, description="Barriered edge indices, sorted"
    )
    holding: Optional[str] = Field(default=None, description="Holding type")
    landmark: Optional[str] = Field(default=None, description="Landmark type")
    myth: Optional[int] = Field(default=None, description="Myth identifier")

    @model_validator(mode="after")
    def _check_cube(self) -> "Hex":
        if self.s is None:
            self.s = -self.q - self.r
        elif self.q + self.r + self.s != 0:
            raise ValueError(
                f"Invalid cube coordinates ({self.q}, {self.r}, {self.s}): q + r + s must be 0"
            )
        return self

    @field_validator("barrier_edges")
    @classmethod
    def _check_edges(cls, edges: List[int]) -> List[int]:
        if any(edge < 0 or edge > 5 for edge in edges):
            raise ValueError("Barrier edges must be in the range 0-5")
        return sorted(set(edges))

    @property
    def coords(self) -> Coord:
        return (self.q, self.r)

    @property
    def is_feature(self) -> bool:
        """Whether the cell carries a holding or a landmark."""
        return bool(self.holding or self.landmark)

    def add_barrier(self, edge: int) -> bool:
        """Add a barrier on ``edge``. Returns False if it was already there."""
        if edge in self.barrier_edges:
            return False
        self.barrier_edges.append(edge)
        self.barrier_edges.sort()
        return True


class HexGridShape(BaseModel):
    """Hexagon-shaped realm of a given radius."""

    shape: Literal["hex"] = "hex"
    radius: int = Field(ge=0, description="Hex radius around the origin")

    @property
    def size_for_density(self) -> int:
        return self.radius


class SquareGridShape(BaseModel):
    """Rectangular realm laid out in offset rows."""

    shape: Literal["square", "rectangular"] = "square"
    width: int = Field(ge=0, description="Cells per row")
    height: int = Field(ge=0, description="Number of rows")

    @property
    def size_for_density(self) -> int:
        return max(self.width, self.height)


GridShape = Union[HexGridShape, SquareGridShape]


def parse_grid_shape(shape: Union[GridShape, dict]) -> GridShape:
    """Accept a shape model or its dict form (``{"shape": "hex", "radius": 3}``)."""
    if isinstance(shape, (HexGridShape, SquareGridShape)):
        return shape
    if not isinstance(shape, dict):
        raise ValueError(f"Unsupported grid shape: {shape!r}")
    kind = shape.get("shape")
    if kind == "hex":
        return HexGridShape(**shape)
    if kind in ("square", "rectangular"):
        return SquareGridShape(**shape)
    raise ValueError(f"Unknown grid shape: {kind!r}")


def create_hexagonal_grid(radius: int) -> List[Hex]:
    """
    Create every cell within ``radius`` of the origin.

    Args:
        radius: Hex radius, 0 gives a single cell

    Returns:
        3R^2 + 3R + 1 cells, ordered by q then r
    """
    if radius < 0:
        raise ValueError(f"Radius must be non-negative, got {radius}")

    hexes = []
    for q in range(-radius, radius + 1):
        for r in range(-radius, radius + 1):
            if axial_distance(ORIGIN, (q, r)) <= radius:
                hexes.append(Hex(q=q, r=r))
    return hexes


def create_square_grid(width: int, height: int) -> List[Hex]:
    """
    Create a rectangular block of pointy-top cells.

    Rows use the even-r offset layout converted to axial coordinates, so
    axial neighbour lookups stay valid. The block is then shifted so its
    centroid rounds to the origin.

    Args:
        width: Cells per row
        height: Number of rows

    Returns:
        width * height cells, row by row
    """
    if width < 0 or height < 0:
        raise ValueError(f"Grid dimensions must be non-negative, got {width}x{height}")

    raw = []
    for row in range(height):
        for col in range(width):
            raw.append((col - row // 2, row))

    if not raw:
        return []

    q_shift = _round_half_up(sum(q for q, _ in raw) / len(raw))
    r_shift = _round_half_up(sum(r for _, r in raw) / len(raw))

    return [Hex(q=q - q_shift, r=r - r_shift) for q, r in raw]


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def build_grid(shape: GridShape) -> List[Hex]:
    """Build the empty cell set for a grid shape."""
    if isinstance(shape, HexGridShape):
        hexes = create_hexagonal_grid(shape.radius)
    else:
        hexes = create_square_grid(shape.width, shape.height)
    logger.debug("Built grid", shape=shape.shape, cells=len(hexes))
    return hexes


def index_hexes(hexes: Iterable[Hex]) -> Dict[Coord, Hex]:
    """Map (q, r) to cell for constant-time neighbour lookup."""
    return {(h.q, h.r): h for h in hexes}


def grid_bounds(hexes: Iterable[Hex]) -> Tuple[int, int, int, int]:
    """Return (min_q, max_q, min_r, max_r) of a non-empty cell set."""
    qs = []
    rs = []
    for h in hexes:
        qs.append(h.q)
        rs.append(h.r)
    return min(qs), max(qs), min(rs), max(rs)
