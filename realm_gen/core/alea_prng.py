"""
Python implementation of the Alea PRNG used for realm generation.

Based on Johannes Baagøe's Alea algorithm. Every stochastic phase of the
generator draws from an instance of this class, so a seeded instance makes
a whole generation run reproducible.
"""

from typing import List, MutableSequence, Sequence, TypeVar

T = TypeVar("T")


def _uint32(n):
    """Convert to unsigned 32-bit integer."""
    return int(n) & 0xFFFFFFFF


class AleaPRNG:
    """
    Alea PRNG with the small helper surface the placement phases need.

    The core ``random()`` step is the reference Alea algorithm; ``index``,
    ``choice`` and ``shuffle`` are built on top of it so that no other
    random source is consumed during generation.
    """

    def __init__(self, seed):
        """Initialize with seed string or number."""
        self.call_count = 0
        self.seed = seed

        # Convert arguments to array
        if hasattr(seed, "__iter__") and not isinstance(seed, str):
            args = list(seed)
        else:
            args = [seed]

        # Mash function
        mash_n = 0xEFC8249D  # 4022871197

        def mash(data):
            nonlocal mash_n
            data = str(data)
            for char in data:
                mash_n = mash_n + ord(char)
                h = 0.02519603282416938 * mash_n
                mash_n = _uint32(h)
                h -= mash_n
                h *= mash_n
                mash_n = _uint32(h)
                h -= mash_n
                mash_n += h * 0x100000000  # 2^32
            return _uint32(mash_n) * 2.3283064365386963e-10  # 2^-32

        self.s0 = mash(" ")
        self.s1 = mash(" ")
        self.s2 = mash(" ")
        self.c = 1

        for arg in args:
            self.s0 -= mash(arg)
            if self.s0 < 0:
                self.s0 += 1
            self.s1 -= mash(arg)
            if self.s1 < 0:
                self.s1 += 1
            self.s2 -= mash(arg)
            if self.s2 < 0:
                self.s2 += 1

    def random(self) -> float:
        """Generate next random number in [0, 1)."""
        self.call_count += 1
        t = 2091639 * self.s0 + self.c * 2.3283064365386963e-10  # 2^-32
        self.s0 = self.s1
        self.s1 = self.s2
        self.c = int(t)
        self.s2 = t - self.c
        return self.s2

    def index(self, length: int) -> int:
        """Return a uniformly random index into a sequence of ``length``."""
        return int(self.random() * length)

    def choice(self, seq: Sequence[T]) -> T:
        """Choose a random element from a non-empty sequence."""
        if not seq:
            raise IndexError("Cannot choose from an empty sequence")
        return seq[self.index(len(seq))]

    def shuffle(self, items: MutableSequence[T]) -> MutableSequence[T]:
        """Fisher-Yates shuffle in place, walking from the end of the list."""
        for i in range(len(items) - 1, 0, -1):
            j = self.index(i + 1)
            items[i], items[j] = items[j], items[i]
        return items

    def shuffled(self, items: Sequence[T]) -> List[T]:
        """Return a shuffled copy of ``items``."""
        return list(self.shuffle(list(items)))
