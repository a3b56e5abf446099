"""
Myth placement.

Myths go to the most remote cells of the realm: as far as possible from
any holding or landmark, and toward the edge of the map when remoteness
ties. A greedy walk over that ordering accepts a cell only if it keeps
the minimum distance to every myth already placed.
"""

from typing import List

import structlog
from pydantic import BaseModel, Field

from .alea_prng import AleaPRNG
from .hex_grid import ORIGIN, Hex, axial_distance

logger = structlog.get_logger()


class RealmGenerationError(Exception):
    """Raised when the requested myths cannot all be placed."""

    def __init__(self, placed: int, requested: int):
        self.placed = placed
        self.requested = requested
        super().__init__(
            f"Could not place all myths. Only placed {placed} of {requested} requested. "
            "Try reducing the 'Myth Min Distance' or the number of myths."
        )


class Myth(BaseModel):
    """A myth anchored to one cell."""

    id: int = Field(ge=1, description="Dense identifier starting at 1")
    name: str = Field(description="Display name")
    q: int = Field(description="Axial column of the myth's cell")
    r: int = Field(description="Axial row of the myth's cell")


def myth_name(myth_id: int) -> str:
    return f"Myth #{myth_id}"


class MythPlacer:
    """Places myths on remote cells under a minimum spacing."""

    def __init__(self, prng: AleaPRNG):
        self.prng = prng

    def rank_candidates(self, hexes: List[Hex]) -> List[Hex]:
        """
        Order free cells from most to least remote.

        Candidates are shuffled before the stable sort so equally remote
        cells come out in random order.
        """
        features = [h.coords for h in hexes if h.is_feature]
        candidates = self.prng.shuffled([h for h in hexes if not h.is_feature])

        if features:
            remoteness = {
                id(cell): min(axial_distance(cell.coords, f) for f in features)
                for cell in candidates
            }
            return sorted(
                candidates,
                key=lambda cell: (
                    -remoteness[id(cell)],
                    -axial_distance(ORIGIN, cell.coords),
                ),
            )

        return sorted(candidates, key=lambda cell: -axial_distance(ORIGIN, cell.coords))

    def place(self, hexes: List[Hex], count: int, min_distance: int) -> List[Myth]:
        """
        Place up to ``count`` myths, ``min_distance`` apart.

        Args:
            hexes: Cells of the realm, holdings and landmarks already set
            count: Myths requested
            min_distance: Minimum hex distance between any two myths

        Returns:
            Placed myths with ids 1..N in placement order

        Raises:
            RealmGenerationError: If fewer than ``count`` myths fit
        """
        for cell in hexes:
            cell.myth = None

        chosen: List[Hex] = []
        if count > 0:
            for candidate in self.rank_candidates(hexes):
                if len(chosen) >= count:
                    break
                if all(
                    axial_distance(candidate.coords, placed.coords) >= min_distance
                    for placed in chosen
                ):
                    chosen.append(candidate)

        if count > 0 and len(chosen) < count:
            logger.warning(
                "Myth placement infeasible",
                placed=len(chosen),
                requested=count,
                min_distance=min_distance,
            )
            raise RealmGenerationError(len(chosen), count)

        myths = []
        for myth_id, cell in enumerate(chosen, start=1):
            cell.myth = myth_id
            myths.append(Myth(id=myth_id, name=myth_name(myth_id), q=cell.q, r=cell.r))

        logger.info("Placed myths", placed=len(myths), min_distance=min_distance)
        return myths
