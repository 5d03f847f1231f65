"""
Process-wide random source.

Generators take an optional ``prng`` argument; when it is omitted they draw
from the shared Alea instance managed here, so seeding once at startup makes
a whole session reproducible.
"""

from typing import Optional

from ..core.alea_prng import AleaPRNG, RandomSource

# Global PRNG instance
_prng: Optional[AleaPRNG] = None


def set_random_seed(seed: str) -> None:
    """
    Reseed the shared Alea PRNG.

    Args:
        seed: Seed string to use
    """
    global _prng
    _prng = AleaPRNG(seed)


def get_prng() -> AleaPRNG:
    """
    Get the shared Alea PRNG, creating it from the configured default seed
    on first use.
    """
    global _prng
    if _prng is None:
        from ..config.settings import settings

        _prng = AleaPRNG(settings.default_seed)
    return _prng


def resolve_prng(prng: Optional[RandomSource] = None) -> RandomSource:
    """Return ``prng`` if given, else the shared instance."""
    return prng if prng is not None else get_prng()
