"""
Barrier placement along cell edges.

A barrier sits on the border between two cells, so it is recorded on both:
edge ``e`` of the cell and edge ``(e + 3) % 6`` of the neighbour. Cells on
the grid boundary may carry a one-sided barrier toward the outside.
"""

from typing import Dict, List

import structlog

from ..config.terrain_defaults import BARRIER_CHANCE
from .alea_prng import AleaPRNG
from .hex_grid import Coord, Hex, get_neighbor, opposite_edge

logger = structlog.get_logger()


def barrier_target(n_cells: int, chance: float = BARRIER_CHANCE) -> int:
    """Number of placement attempts; each barrier is shared by two cells."""
    return int(n_cells * 6 * chance / 2)


class BarrierPlacer:
    """Scatters barriers over a realm's edges."""

    def __init__(self, prng: AleaPRNG, chance: float = BARRIER_CHANCE):
        self.prng = prng
        self.chance = chance

    def place(self, hexes: List[Hex], index: Dict[Coord, Hex]) -> int:
        """
        Attempt ``barrier_target`` placements on random cell edges.

        An attempt that lands on an already-barriered edge is spent without
        placing anything, so the result never exceeds the target.

        Args:
            hexes: Cells of the realm
            index: (q, r) to cell lookup

        Returns:
            Number of barriers placed
        """
        if not hexes:
            return 0

        attempts = barrier_target(len(hexes), self.chance)
        placed = 0
        for _ in range(attempts):
            cell = self.prng.choice(hexes)
            edge = self.prng.index(6)
            if not cell.add_barrier(edge):
                continue
            placed += 1

            neighbor = index.get(get_neighbor(cell.q, cell.r, edge))
            if neighbor is not None:
                neighbor.add_barrier(opposite_edge(edge))

        logger.info("Placed barriers", placed=placed, attempts=attempts)
        return placed
