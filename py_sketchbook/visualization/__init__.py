"""
Static renderers for rooms, trees and venation.
"""

from .renderer import render_rooms, render_tree, render_venation, save_figure

__all__ = ['render_rooms', 'render_tree', 'render_venation', 'save_figure']
