"""
Seeded 2D Perlin noise.

Classic improved-Perlin gradient noise over a 256-entry permutation table.
The table is shuffled with a small sine-based generator driven by the seed,
so the same seed always yields the same field and no global state is kept.
"""

import math

import numpy as np

DEFAULT_OCTAVES = 5


def _sine_sequence(seed: int):
    """Deterministic [0, 1) sequence used only to shuffle the permutation table."""
    while True:
        x = math.sin(seed) * 10000
        seed += 1
        yield x - math.floor(x)


def _fade(t: float) -> float:
    return t * t * t * (t * (t * 6 - 15) + 10)


def _lerp(t: float, a: float, b: float) -> float:
    return a + t * (b - a)


def _grad(hash_value: int, x: float, y: float) -> float:
    h = hash_value & 15
    u = x if h < 8 else y
    if h < 4:
        v = y
    elif h == 12 or h == 14:
        v = x
    else:
        v = 0.0
    return (u if (h & 1) == 0 else -u) + (v if (h & 2) == 0 else -v)


class PerlinNoise:
    """2D gradient noise generator with a seeded permutation table."""

    def __init__(self, seed: int = 1):
        self.seed = seed
        table = np.arange(256, dtype=np.int32)
        rand = _sine_sequence(seed)
        for i in range(len(table) - 1, 0, -1):
            j = int(next(rand) * (i + 1))
            table[i], table[j] = table[j], table[i]
        # Doubled so lookups at index + 1 never wrap
        self.p = np.concatenate([table, table])

    def noise(self, x: float, y: float) -> float:
        """Noise value at (x, y), roughly in [-1, 1]."""
        xf = math.floor(x)
        yf = math.floor(y)
        X = int(xf) & 255
        Y = int(yf) & 255
        x -= xf
        y -= yf
        u = _fade(x)
        v = _fade(y)
        p = self.p
        A = int(p[X]) + Y
        B = int(p[X + 1]) + Y
        return _lerp(
            v,
            _lerp(u, _grad(int(p[A]), x, y), _grad(int(p[B]), x - 1, y)),
            _lerp(u, _grad(int(p[A + 1]), x, y - 1), _grad(int(p[B + 1]), x - 1, y - 1)),
        )

    def octave_noise(self, x: float, y: float, octaves: int = DEFAULT_OCTAVES) -> float:
        """Sum ``octaves`` layers, doubling frequency and halving amplitude each time."""
        total = 0.0
        frequency = 1.0
        amplitude = 1.0
        for _ in range(octaves):
            total += self.noise(x * frequency, y * frequency) * amplitude
            frequency *= 2
            amplitude *= 0.5
        return total
