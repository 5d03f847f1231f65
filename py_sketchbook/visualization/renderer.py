"""
Static renderings of generated geometry.

Each function draws onto a fresh matplotlib figure and returns it; callers
save or display it. Screen-space convention is kept, so the y axis is
inverted.
"""

from pathlib import Path
from typing import Union

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
from matplotlib.collections import LineCollection  # noqa: E402
from matplotlib.figure import Figure  # noqa: E402
from matplotlib.patches import Rectangle  # noqa: E402
import structlog  # noqa: E402

from ..core.geometry import interpolate  # noqa: E402
from ..core.room_generator import RoomGenerator  # noqa: E402
from ..core.space_colonization import Tree, Venation  # noqa: E402

logger = structlog.get_logger()


def _new_axes(figsize=(8, 8)):
    fig, ax = plt.subplots(figsize=figsize)
    ax.set_aspect("equal")
    ax.axis("off")
    return fig, ax


def render_rooms(
    generator: RoomGenerator, cell_size: float = 1.0, padding: float = 0.0
) -> Figure:
    """Draw each room's bounding box, shrunk by ``padding`` on every side."""
    fig, ax = _new_axes()
    for room in generator:
        b = room.get_bounds()
        x = b.min_c * cell_size + padding
        y = b.min_r * cell_size + padding
        width = b.cols * cell_size - 2 * padding
        height = b.rows * cell_size - 2 * padding
        if width <= 0 or height <= 0:
            continue
        ax.add_patch(Rectangle((x, y), width, height, fill=False, linewidth=1.5))

    extent = generator.n * cell_size
    ax.set_xlim(0, extent)
    ax.set_ylim(extent, 0)
    return fig


def render_tree(tree: Tree, show_leaves: bool = False) -> Figure:
    """Draw branch segments, thicker near the origin."""
    fig, ax = _new_axes()
    info = tree.display_info()
    segments = [[(a.x, a.y), (b.x, b.y)] for a, b in info["branches"]]

    if segments:
        ox, oy = tree.origin

        def spread(p):
            return max(abs(p.x - ox), abs(p.y - oy))

        reach = max(spread(b) for _, b in info["branches"]) or 1.0
        widths = [interpolate((0, reach), (4, 0.5), spread(a)) for a, _ in info["branches"]]
        ax.add_collection(LineCollection(segments, linewidths=widths, colors="black"))

    if show_leaves and info["leaves"]:
        ax.scatter([p.x for p in info["leaves"]], [p.y for p in info["leaves"]], s=4, c="green")

    ax.autoscale()
    ax.invert_yaxis()
    return fig


def render_venation(venation: Venation) -> Figure:
    """Draw every venation branch as a polyline."""
    fig, ax = _new_axes()
    for points in venation.cartesian_branches():
        if len(points) < 2:
            continue
        ax.plot([p.x for p in points], [p.y for p in points], color="darkgreen", linewidth=0.8)
    ax.autoscale()
    ax.invert_yaxis()
    return fig


def save_figure(fig: Figure, path: Union[str, Path], dpi: int = 150) -> Path:
    """Save and close a figure."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(path, dpi=dpi, bbox_inches="tight")
    plt.close(fig)
    logger.info("Figure saved", path=str(path))
    return path
