"""
Procedural realm generator for hex-map editors.
"""

from .core import (
    GenerationOptions,
    HexGridShape,
    Realm,
    RealmGenerationError,
    SquareGridShape,
    generate_realm,
)

__version__ = "0.1.0"

__all__ = [
    "GenerationOptions",
    "HexGridShape",
    "Realm",
    "RealmGenerationError",
    "SquareGridShape",
    "generate_realm",
]
