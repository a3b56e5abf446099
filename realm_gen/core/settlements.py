"""
Holding placement.

Holdings (castles, cities, towns, villages) are scattered over habitable
terrain with a minimum spacing that scales with the realm size. The first
holding placed becomes the seat of power.
"""

from typing import Dict, List, Optional, Sequence

import structlog

from ..config.terrain_defaults import (
    EXCLUDED_HOLDING_TERRAINS,
    FALLBACK_HOLDING,
    HOLDING_TYPES,
)
from .alea_prng import AleaPRNG
from .hex_grid import ORIGIN, Coord, Hex, axial_distance

logger = structlog.get_logger()

# Holdings are kept size_for_density / HOLDING_SPACING_DIVISOR apart
HOLDING_SPACING_DIVISOR = 4


class HoldingPlacer:
    """Places holdings and designates the seat of power."""

    def __init__(
        self,
        prng: AleaPRNG,
        holding_types: Sequence[str] = HOLDING_TYPES,
        excluded_terrains: Sequence[str] = EXCLUDED_HOLDING_TERRAINS,
    ):
        """
        Initialize the placer.

        Args:
            prng: Random source
            holding_types: Types drawn uniformly for each holding
            excluded_terrains: Terrains on which no holding is placed
        """
        self.prng = prng
        self.holding_types = list(holding_types)
        self.excluded_terrains = set(excluded_terrains)
        self.placed: List[Hex] = []

    def min_spacing(self, size_for_density: int) -> float:
        return size_for_density / HOLDING_SPACING_DIVISOR

    def is_too_close(self, cell: Hex, spacing: float) -> bool:
        return any(axial_distance(h.coords, cell.coords) < spacing for h in self.placed)

    def place(
        self,
        hexes: List[Hex],
        index: Dict[Coord, Hex],
        size_for_density: int,
        count: int,
    ) -> Coord:
        """
        Place up to ``count`` holdings.

        Candidates are drawn at random from the habitable pool and removed
        from it whether or not they are accepted, so every cell is tried at
        most once.

        Args:
            hexes: Cells of the realm
            index: (q, r) to cell lookup
            size_for_density: Hex radius, or the longer rectangle side
            count: Holdings requested

        Returns:
            Seat of power coordinates
        """
        self.placed = []
        spacing = self.min_spacing(size_for_density)
        pool = [h for h in hexes if h.terrain not in self.excluded_terrains]

        while len(self.placed) < count and pool:
            i = self.prng.index(len(pool))
            cell = pool[i]
            if not cell.holding and not self.is_too_close(cell, spacing):
                cell.holding = self.prng.choice(self.holding_types)
                self.placed.append(cell)
            pool.pop(i)

        logger.info(
            "Placed holdings", placed=len(self.placed), requested=count, spacing=spacing
        )

        if self.placed:
            return self.placed[0].coords
        return self._force_seat_of_power(hexes, index)

    def _force_seat_of_power(self, hexes: List[Hex], index: Dict[Coord, Hex]) -> Coord:
        """Put a holding on the origin (or the first cell) so a seat of power exists."""
        seat: Optional[Hex] = index.get(ORIGIN) or (hexes[0] if hexes else None)
        if seat is None:
            return ORIGIN

        seat.holding = FALLBACK_HOLDING
        self.placed.append(seat)
        logger.warning("No holdings placed, forcing seat of power", q=seat.q, r=seat.r)
        return seat.coords
