"""
Core realm generation functionality.
"""

from .alea_prng import AleaPRNG
from .hex_grid import (
    Hex, HexGridShape, SquareGridShape, GridShape, axial_distance, get_neighbors,
    opposite_edge, build_grid,
)
from .perlin import PerlinNoise
from .generation_options import GenerationOptions
from .elevation import ElevationShaper
from .terrain import TerrainClassifier
from .barriers import BarrierPlacer
from .settlements import HoldingPlacer
from .landmarks import LandmarkPlacer
from .myths import Myth, MythPlacer, RealmGenerationError
from .realm_generator import Realm, SeatOfPower, generate_realm
from .realm_io import realm_to_dict, realm_to_json, realm_from_dict, realm_from_json

__all__ = ['AleaPRNG', 'Hex', 'HexGridShape', 'SquareGridShape', 'GridShape',
           'axial_distance', 'get_neighbors', 'opposite_edge', 'build_grid',
           'PerlinNoise', 'GenerationOptions', 'ElevationShaper', 'TerrainClassifier',
           'BarrierPlacer', 'HoldingPlacer', 'LandmarkPlacer', 'Myth', 'MythPlacer',
           'RealmGenerationError', 'Realm', 'SeatOfPower', 'generate_realm',
           'realm_to_dict', 'realm_to_json', 'realm_from_dict', 'realm_from_json']
