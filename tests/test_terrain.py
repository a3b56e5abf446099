"""Tests for terrain banding and clustering relaxation."""

from collections import Counter

import numpy as np
import pytest

from realm_gen.config.terrain_defaults import (
    DEFAULT_TERRAIN_HEIGHT_ORDER, TERRAIN_TYPES, scaled_clustering_matrix,
)
from realm_gen.core.elevation import ElevationShaper
from realm_gen.core.generation_options import GenerationOptions
from realm_gen.core.hex_grid import create_hexagonal_grid
from realm_gen.core.terrain import TerrainClassifier, order_terrains

IDENTITY = {"A": {"A": 1.0, "B": 0.0}, "B": {"A": 0.0, "B": 1.0}}
ZEROS = {"A": {"A": 0.0, "B": 0.0}, "B": {"A": 0.0, "B": 0.0}}


def _options(**overrides):
    values = dict(
        terrain_biases={"A": 1, "B": 1},
        terrain_height_order=["A", "B"],
        terrain_clustering_matrix=IDENTITY,
    )
    values.update(overrides)
    return GenerationOptions(**values)


class TestOrderTerrains:
    """Test height ordering of terrains."""

    def test_known_order(self):
        """Test ordering by the height order."""
        ordered = order_terrains(["lakes", "peaks", "forest"], DEFAULT_TERRAIN_HEIGHT_ORDER)
        assert ordered == ["peaks", "forest", "lakes"]

    def test_unknown_first(self):
        """Test that unknown terrains lead the known ones in input order."""
        ordered = order_terrains(["x", "hills", "y", "peaks"], DEFAULT_TERRAIN_HEIGHT_ORDER)
        assert ordered == ["x", "y", "peaks", "hills"]

    def test_unknown_terrain_takes_top_band(self):
        """Test that a terrain outside the height order gets the highest cells."""
        hexes = create_hexagonal_grid(3)
        elevations = np.random.default_rng(0).random(len(hexes))
        options = GenerationOptions(terrain_biases={"custom": 1, "peaks": 1})
        assignment = TerrainClassifier(options).initial_assignment(hexes, elevations)
        assert assignment[int(np.argmax(elevations))] == "custom"
        assert assignment[int(np.argmin(elevations))] == "peaks"


class TestInitialAssignment:
    """Test elevation banding."""

    @pytest.fixture
    def hexes(self):
        return create_hexagonal_grid(3)

    @pytest.fixture
    def elevations(self, hexes):
        return np.random.default_rng(0).random(len(hexes))

    def test_two_equal_bands(self, hexes, elevations):
        """Test that equal biases split the ranking in half, highest band first."""
        assignment = TerrainClassifier(_options()).initial_assignment(hexes, elevations)
        counts = Counter(assignment)
        assert counts["A"] == 19
        assert counts["B"] == 18

        a_min = min(e for t, e in zip(assignment, elevations) if t == "A")
        b_max = max(e for t, e in zip(assignment, elevations) if t == "B")
        assert a_min > b_max

    def test_height_order_decides_top_band(self, hexes, elevations):
        """Test that the first terrain in the height order gets the highest cells."""
        options = _options(terrain_height_order=["B", "A"])
        assignment = TerrainClassifier(options).initial_assignment(hexes, elevations)
        top = int(np.argmax(elevations))
        bottom = int(np.argmin(elevations))
        assert assignment[top] == "B"
        assert assignment[bottom] == "A"

    def test_proportional_bands(self, hexes, elevations):
        """Test band sizes follow bias shares."""
        options = _options(terrain_biases={"A": 3, "B": 1}, terrain_clustering_matrix=None)
        counts = Counter(TerrainClassifier(options).initial_assignment(hexes, elevations))
        assert counts["A"] == 28
        assert counts["B"] == 9

    def test_remainder_goes_to_last(self, hexes, elevations):
        """Test that rounding leftovers join the lowest terrain."""
        options = _options(
            terrain_biases={"A": 1, "B": 1, "C": 1}, terrain_height_order=["A", "B", "C"]
        )
        counts = Counter(TerrainClassifier(options).initial_assignment(hexes, elevations))
        assert counts == {"A": 12, "B": 12, "C": 13}

    def test_zero_bias_terrain_skipped(self, hexes, elevations):
        """Test that a zero-bias terrain gets no band."""
        options = _options(terrain_biases={"A": 1, "B": 0})
        assignment = TerrainClassifier(options).initial_assignment(hexes, elevations)
        assert set(assignment) == {"A"}

    def test_all_zero_biases_fall_back_to_uniform(self, hexes, elevations):
        """Test the uniform fallback over every default terrain when every bias is zero."""
        options = _options(terrain_biases={"A": 0, "B": 0})
        biases = TerrainClassifier(options).effective_biases()
        assert set(biases) == set(TERRAIN_TYPES) | {"A", "B"}
        assert set(biases.values()) == {1.0}
        assert options.terrain_biases == {"A": 0, "B": 0}

    def test_all_zero_default_terrains(self, hexes, elevations):
        """Test that zeroed default biases still band every default terrain."""
        options = GenerationOptions(terrain_biases={"peaks": 0, "lakes": 0})
        assignment = TerrainClassifier(options).initial_assignment(hexes, elevations)
        assert set(assignment) == set(TERRAIN_TYPES)

    def test_empty_biases_use_default_terrains(self, hexes, elevations):
        """Test that an empty bias table falls back to the default terrains."""
        options = GenerationOptions(terrain_biases={})
        assignment = TerrainClassifier(options).initial_assignment(hexes, elevations)
        assert set(assignment) <= set(TERRAIN_TYPES)
        assert len(assignment) == len(hexes)

    def test_ties_keep_grid_order(self, hexes):
        """Test that equal elevations band in grid order."""
        flat = np.zeros(len(hexes))
        assignment = TerrainClassifier(_options()).initial_assignment(hexes, flat)
        assert assignment == ["A"] * 19 + ["B"] * 18

    def test_empty_grid(self):
        """Test that nothing comes from nothing."""
        assert TerrainClassifier(_options()).initial_assignment([], np.array([])) == []


class TestRelaxation:
    """Test clustering relaxation."""

    @pytest.fixture
    def ring(self):
        """Radius 1 grid: the center and its six neighbours."""
        return create_hexagonal_grid(1)

    def _center(self, hexes):
        return next(i for i, h in enumerate(hexes) if h.q == 0 and h.r == 0)

    def test_isolated_cell_absorbed(self, ring):
        """Test that a lone terrain surrounded by another is absorbed."""
        initial = ["A"] * len(ring)
        initial[self._center(ring)] = "B"
        relaxed = TerrainClassifier(_options()).relax(ring, initial)
        assert relaxed == ["A"] * len(ring)

    def test_anchor_holds_without_affinity(self, ring):
        """Test that with no affinities every cell keeps its banded terrain."""
        initial = ["A", "B", "A", "B", "B", "A", "A"]
        relaxed = TerrainClassifier(_options(terrain_clustering_matrix=ZEROS)).relax(ring, initial)
        assert relaxed == initial

    def test_ties_pick_first_candidate(self, ring):
        """Test that ties resolve to the first terrain in matrix order."""
        initial = ["B"] * len(ring)
        classifier = TerrainClassifier(_options(terrain_clustering_matrix=ZEROS), anchor_weight=0.0)
        assert classifier.relax(ring, initial) == ["A"] * len(ring)

    def test_zero_passes(self, ring):
        """Test that no passes leaves the assignment untouched."""
        initial = ["A", "B", "A", "B", "B", "A", "A"]
        assert TerrainClassifier(_options(), passes=0).relax(ring, initial) == initial

    def test_reads_previous_snapshot(self, ring):
        """Test that one pass scores every cell against the same snapshot."""
        center = self._center(ring)
        initial = ["B"] * len(ring)
        initial[center] = "A"
        classifier = TerrainClassifier(_options(), passes=1, anchor_weight=0.0)
        relaxed = classifier.relax(ring, initial)
        # Center sees six B neighbours; each ring cell sees the A center and two B cells
        assert relaxed == ["B"] * len(ring)

    def test_relaxation_smooths(self):
        """Test that relaxation reduces the number of unlike neighbour pairs."""
        hexes = create_hexagonal_grid(6)
        rng = np.random.default_rng(1)
        initial = [("A", "B")[i] for i in rng.integers(0, 2, size=len(hexes))]
        relaxed = TerrainClassifier(_options(), anchor_weight=0.5).relax(hexes, initial)

        def unlike_pairs(terrains):
            lookup = {(h.q, h.r): t for h, t in zip(hexes, terrains)}
            total = 0
            for h, t in zip(hexes, terrains):
                for dq, dr in ((1, 0), (0, 1), (-1, 1)):
                    other = lookup.get((h.q + dq, h.r + dr))
                    if other is not None and other != t:
                        total += 1
            return total

        assert unlike_pairs(relaxed) < unlike_pairs(initial)

    def test_deterministic(self):
        """Test identical output for identical input."""
        hexes = create_hexagonal_grid(5)
        options = GenerationOptions(terrain_roughness=0.4)
        elevations = ElevationShaper(options).compute(hexes)
        classifier = TerrainClassifier(options)
        initial = classifier.initial_assignment(hexes, elevations)
        assert classifier.relax(hexes, initial) == classifier.relax(hexes, initial)

    def test_unknown_initial_terrain(self, ring):
        """Test that terrains outside the matrix score zero and get replaced."""
        initial = ["swamp"] * len(ring)
        relaxed = TerrainClassifier(_options()).relax(ring, initial)
        assert set(relaxed) <= {"A", "B"}


class TestClassify:
    """Test the full classification step."""

    def test_default_matrix_from_roughness(self):
        """Test that a missing matrix is derived from roughness."""
        classifier = TerrainClassifier(GenerationOptions(terrain_roughness=0.2))
        assert classifier.matrix == scaled_clustering_matrix(0.2)

    def test_commits_terrain(self):
        """Test that every cell ends up with a known terrain."""
        hexes = create_hexagonal_grid(6)
        options = GenerationOptions()
        elevations = ElevationShaper(options).compute(hexes)
        counts = TerrainClassifier(options).classify(hexes, elevations)
        assert sum(counts.values()) == len(hexes)
        assert all(h.terrain in TERRAIN_TYPES for h in hexes)
        assert Counter(h.terrain for h in hexes) == counts
