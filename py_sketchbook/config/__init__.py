"""
Settings and the pattern catalog.
"""

from .settings import Settings, settings
from .patterns import PATTERNS, Knob, PatternSpec, get_pattern, list_patterns, resolve_values

__all__ = ['Settings', 'settings', 'PATTERNS', 'Knob', 'PatternSpec',
           'get_pattern', 'list_patterns', 'resolve_values']
