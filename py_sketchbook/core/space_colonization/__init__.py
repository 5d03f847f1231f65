"""
Branch-growth algorithms: space colonization trees and polar venation.
"""

from .tree import Tree, TreeConfig, Branch, Leaf, LEAF_MODES
from .venation import Venation, VenationBranch

__all__ = ['Tree', 'TreeConfig', 'Branch', 'Leaf', 'LEAF_MODES',
           'Venation', 'VenationBranch']
