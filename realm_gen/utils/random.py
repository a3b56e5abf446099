"""
Random number generation utilities.

The realm generator never touches Python's ``random`` module or NumPy's
global random state. Every run draws from its own Alea PRNG, either
injected by the caller, seeded from ``GenerationOptions.seed``, or seeded
from a random UUID. No PRNG is shared between runs, so concurrent requests
never interleave draws.
"""

import uuid
from typing import Optional, Union

from ..core.alea_prng import AleaPRNG


def new_prng() -> AleaPRNG:
    """
    Create an Alea PRNG seeded from a random UUID.

    Returns:
        AleaPRNG instance whose seed is recorded in ``prng.seed``
    """
    return AleaPRNG(uuid.uuid4().hex)


def resolve_prng(
    prng: Optional[AleaPRNG] = None, seed: Optional[Union[str, int]] = None
) -> AleaPRNG:
    """Pick the random source for one generation run."""
    if prng is not None:
        return prng
    if seed is not None:
        return AleaPRNG(seed)
    return new_prng()
