"""Landmark placement on cells left free by holdings."""

from typing import Dict, List, Mapping

import structlog

from .alea_prng import AleaPRNG
from .hex_grid import Hex

logger = structlog.get_logger()


class LandmarkPlacer:
    """Drops the requested number of each landmark type on free cells."""

    def __init__(self, prng: AleaPRNG):
        self.prng = prng

    def place(self, hexes: List[Hex], counts: Mapping[str, int]) -> Dict[str, int]:
        """
        Place landmarks on cells with neither a holding nor a landmark.

        Types are visited in shuffled order, so when the pool runs dry the
        shortfall does not always hit the same types.

        Returns:
            Landmarks actually placed per type
        """
        pool = [h for h in hexes if not h.holding and not h.landmark]
        placed = {landmark: 0 for landmark in counts}

        for landmark in self.prng.shuffled(list(counts)):
            wanted = counts[landmark] or 0
            while placed[landmark] < wanted and pool:
                cell = pool.pop(self.prng.index(len(pool)))
                cell.landmark = landmark
                placed[landmark] += 1

        shortfall = {k: counts[k] - v for k, v in placed.items() if v < counts[k]}
        if shortfall:
            logger.warning("Ran out of free cells for landmarks", shortfall=shortfall)
        logger.info("Placed landmarks", placed=placed)
        return placed
