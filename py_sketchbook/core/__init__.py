"""
Core geometry and generation functionality.
"""

from .alea_prng import AleaPRNG, RandomSource
from .geometry import Point, distance, interpolate, interpolate_smooth, get_intersection_point, within_polygon_bounds
from .disjoint_set import DisjointSet, GridCell, Room, RoomBounds
from .room_generator import RoomGenerator, RoomConfig
from .space_colonization import Tree, TreeConfig, Venation, LEAF_MODES

__all__ = ['AleaPRNG', 'RandomSource', 'Point', 'distance', 'interpolate', 'interpolate_smooth',
           'get_intersection_point', 'within_polygon_bounds',
           'DisjointSet', 'GridCell', 'Room', 'RoomBounds', 'RoomGenerator', 'RoomConfig',
           'Tree', 'TreeConfig', 'Venation', 'LEAF_MODES']
