"""
Terrain classification and clustering relaxation.

Process:
1. initial_assignment() - Rank cells by elevation and cut the ranking into
   contiguous bands, one per terrain, sized by terrain bias
2. relax() - Smooth the banded map with a pairwise terrain affinity matrix
   so terrains form coherent clusters, anchored to the banded assignment
3. classify() - Run both steps and commit the result to the cells
"""

import math
from collections import Counter
from typing import Dict, List, Optional, Sequence

import numpy as np
import structlog

from ..config.terrain_defaults import (
    FALLBACK_TERRAIN,
    TERRAIN_TYPES,
    copy_matrix,
    scaled_clustering_matrix,
)
from .generation_options import GenerationOptions
from .hex_grid import Hex, get_neighbors

logger = structlog.get_logger()

RELAXATION_PASSES = 4
INITIAL_TERRAIN_WEIGHT = 1.5


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def order_terrains(terrains: Sequence[str], height_order: Sequence[str]) -> List[str]:
    """
    Order terrains from highest to lowest elevation.

    Terrains missing from ``height_order`` rank ahead of every known one,
    keeping their relative order, so custom terrains take the highest bands
    as they do in the editor.
    """
    rank = {terrain: i for i, terrain in enumerate(height_order)}
    return sorted(terrains, key=lambda terrain: rank.get(terrain, -1))


class TerrainClassifier:
    """Assigns a terrain type to every cell of a realm."""

    def __init__(
        self,
        options: GenerationOptions,
        passes: int = RELAXATION_PASSES,
        anchor_weight: float = INITIAL_TERRAIN_WEIGHT,
    ):
        """
        Initialize the classifier.

        Args:
            options: Generation options (biases, height order, clustering matrix)
            passes: Number of relaxation passes
            anchor_weight: Score bonus for keeping the banded terrain
        """
        self.options = options
        self.passes = passes
        self.anchor_weight = anchor_weight

        if options.terrain_clustering_matrix is not None:
            self.matrix = copy_matrix(options.terrain_clustering_matrix)
        else:
            self.matrix = scaled_clustering_matrix(options.terrain_roughness)

    def effective_biases(self) -> Dict[str, float]:
        """
        Terrain biases, with a uniform fallback when every bias is zero.

        The fallback weighs every default terrain plus any extra terrain named
        in the bias table; the options themselves are left untouched.
        """
        biases = dict(self.options.terrain_biases)
        if sum(biases.values()) > 0:
            return biases
        uniform = {terrain: 1.0 for terrain in TERRAIN_TYPES}
        for terrain in biases:
            uniform.setdefault(terrain, 1.0)
        logger.warning("All terrain biases are zero, using uniform weights", terrains=len(uniform))
        return uniform

    def initial_assignment(self, hexes: List[Hex], elevations: np.ndarray) -> List[str]:
        """
        Band the elevation ranking into terrains.

        Args:
            hexes: Cells of the realm
            elevations: Elevation per cell, aligned with ``hexes``

        Returns:
            Terrain per cell, aligned with ``hexes``
        """
        n_cells = len(hexes)
        assignment: List[Optional[str]] = [None] * n_cells
        if n_cells == 0:
            return []

        # Stable sort keeps grid order among equal elevations
        ranking = np.argsort(-np.asarray(elevations, dtype=np.float64), kind="stable")

        biases = self.effective_biases()
        total_bias = sum(biases.values())
        terrains_to_place = order_terrains(
            [terrain for terrain, bias in biases.items() if bias > 0],
            self.options.terrain_height_order,
        )

        current = 0
        for terrain in terrains_to_place:
            band = _round_half_up(biases[terrain] / total_bias * n_cells)
            end = min(current + band, n_cells)
            for rank in range(current, end):
                assignment[ranking[rank]] = terrain
            current = end

        if current < n_cells and terrains_to_place:
            last = terrains_to_place[-1]
            for rank in range(current, n_cells):
                assignment[ranking[rank]] = last

        return [terrain or FALLBACK_TERRAIN for terrain in assignment]

    def relax(self, hexes: List[Hex], initial: List[str]) -> List[str]:
        """
        Smooth a terrain assignment with the clustering matrix.

        Every pass scores each candidate terrain for each cell as the sum of
        its affinities with the cell's current neighbours, plus the anchor
        weight for the cell's banded terrain, and takes the best candidate
        (first in matrix order on ties). Each pass reads only the previous
        pass's snapshot.

        Args:
            hexes: Cells of the realm
            initial: Banded terrain per cell

        Returns:
            Relaxed terrain per cell
        """
        candidates = list(self.matrix.keys())
        if not hexes or not candidates or self.passes <= 0:
            return list(initial)

        names = candidates + [t for t in dict.fromkeys(initial) if t not in self.matrix]
        name_index = {name: i for i, name in enumerate(names)}
        pad = len(names)

        # Affinity of candidate row to neighbour column; the pad column scores 0
        weights = np.zeros((len(candidates), pad + 1), dtype=np.float64)
        for i, candidate in enumerate(candidates):
            row = self.matrix[candidate]
            for other, weight in row.items():
                if other in name_index:
                    weights[i, name_index[other]] = weight

        position = {(cell.q, cell.r): i for i, cell in enumerate(hexes)}
        neighbors = np.full((len(hexes), 6), len(hexes), dtype=np.int64)
        for i, cell in enumerate(hexes):
            for edge, coords in enumerate(get_neighbors(cell.q, cell.r)):
                j = position.get(coords)
                if j is not None:
                    neighbors[i, edge] = j

        initial_idx = np.array([name_index[t] for t in initial], dtype=np.int64)
        anchored = np.nonzero(initial_idx < len(candidates))[0]
        anchor = np.zeros((len(candidates), len(hexes)), dtype=np.float64)
        anchor[initial_idx[anchored], anchored] = self.anchor_weight

        current = initial_idx.copy()
        for _ in range(self.passes):
            snapshot = np.append(current, pad)
            neighbor_terrains = snapshot[neighbors]
            scores = weights[:, neighbor_terrains].sum(axis=2) + anchor
            current = np.argmax(scores, axis=0)

        return [candidates[i] for i in current]

    def classify(self, hexes: List[Hex], elevations: np.ndarray) -> Dict[str, int]:
        """
        Assign and relax terrain, writing the result to each cell.

        Returns:
            Cell count per terrain
        """
        initial = self.initial_assignment(hexes, elevations)
        final = self.relax(hexes, initial)
        for cell, terrain in zip(hexes, final):
            cell.terrain = terrain

        counts = dict(Counter(final))
        logger.info("Classified terrain", cells=len(hexes), terrains=counts)
        return counts
