"""
Generative-art sketchbook: geometry kernel, room partitions and branch growth.
"""

from .core import (
    AleaPRNG,
    Point,
    RoomConfig,
    RoomGenerator,
    Tree,
    TreeConfig,
    Venation,
)

__version__ = "0.1.0"

__all__ = ['AleaPRNG', 'Point', 'RoomConfig', 'RoomGenerator',
           'Tree', 'TreeConfig', 'Venation', '__version__']
