"""
Seedable Alea PRNG used by every randomized sketch.

Based on Johannes Baagøe's Alea algorithm. Seeding with the same string
always yields the same sequence, which is what makes room layouts, leaf
clouds and venation fills reproducible.
"""

from typing import Protocol, Sequence, TypeVar, runtime_checkable

T = TypeVar("T")

# 2^-32
_NORM = 2.3283064365386963e-10


@runtime_checkable
class RandomSource(Protocol):
    """Anything that yields floats in [0, 1). ``random.Random`` qualifies."""

    def random(self) -> float:
        ...


def _uint32(n):
    """Convert to unsigned 32-bit integer."""
    return int(n) & 0xFFFFFFFF


class _Mash:
    """Alea's string hash, folded into the generator state at seed time."""

    def __init__(self):
        self.n = 0xEFC8249D

    def __call__(self, data) -> float:
        for char in str(data):
            self.n += ord(char)
            h = 0.02519603282416938 * self.n
            self.n = _uint32(h)
            h -= self.n
            h *= self.n
            self.n = _uint32(h)
            h -= self.n
            self.n += h * 0x100000000
        return _uint32(self.n) * _NORM


class AleaPRNG:
    """
    Alea PRNG with a few convenience draws on top of ``random()``.

    Args:
        seed: a string, a number, or an iterable of either
    """

    def __init__(self, seed="sketchbook"):
        self.seed = seed
        self.call_count = 0

        if hasattr(seed, "__iter__") and not isinstance(seed, str):
            args = list(seed)
        else:
            args = [seed]

        mash = _Mash()
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
        t = 2091639 * self.s0 + self.c * _NORM
        self.s0 = self.s1
        self.s1 = self.s2
        self.c = int(t)
        self.s2 = t - self.c
        return self.s2

    def uniform(self, min_val: float, max_val: float) -> float:
        """Uniform float in [min_val, max_val)."""
        return min_val + self.random() * (max_val - min_val)

    def randint(self, min_val: int, max_val: int) -> int:
        """Integer in [min_val, max_val] inclusive."""
        return int(self.random() * (max_val - min_val + 1)) + int(min_val)

    def choice(self, seq: Sequence[T]) -> T:
        """Choose a random element from a non-empty sequence."""
        if not seq:
            raise IndexError("Cannot choose from an empty sequence")
        return seq[int(self.random() * len(seq))]
