"""
Geometry kernel shared by every sketch.

Points are plain ``Point(x, y, z)`` tuples, but any object with ``x`` and
``y`` attributes (and optionally ``z``) is accepted. Angles follow screen
space: y grows downward, so a positive angle points "up" the screen.
"""

import math
from typing import NamedTuple, Optional, Sequence, Tuple

from .alea_prng import RandomSource
from ..utils.random import resolve_prng

TWO_PI = math.pi * 2
PI_HALVES = math.pi / 2
PHI = (1 + math.sqrt(5)) / 2

# Tolerance for segment bounding-box checks in get_intersection_point
INTERSECTION_EPSILON = 1e-6


class Point(NamedTuple):
    """2D/3D point; z defaults to 0."""
    x: float
    y: float
    z: float = 0.0


Range = Tuple[float, float]
Line = Tuple[Point, Point]
PolarCoord = Tuple[float, float]  # (theta, radius)


def _z(p) -> float:
    return getattr(p, "z", 0.0) or 0.0


def to_radians(degrees: float) -> float:
    return degrees * math.pi / 180


def to_degrees(radians: float) -> float:
    return radians * 180 / math.pi


def clamp(min_val: float, max_val: float, value: float) -> float:
    """Return value constrained to [min_val, max_val]."""
    if value <= min_val:
        return min_val
    if value >= max_val:
        return max_val
    return value


def diff(x: float, y: float) -> float:
    """Absolute difference between two numbers."""
    return abs(x - y)


def distance(p1, p2) -> float:
    """Euclidean distance between two points, z included."""
    dx = p2.x - p1.x
    dy = p2.y - p1.y
    dz = _z(p2) - _z(p1)
    return math.sqrt(dx * dx + dy * dy + dz * dz)


def theta_from_two_points(p1, p2) -> float:
    """
    Angle of the p1 -> p2 direction in screen space.

    The y difference is taken as ``p1.y - p2.y`` so that a point above p1 on
    screen (smaller y) gives a positive angle. This pairs with
    ``coord_with_angle_and_distance``.
    """
    return math.atan2(p1.y - p2.y, p2.x - p1.x)


def theta_from_two_points_old(p1, p2) -> float:
    """
    Angle of the p1 -> p2 direction in plain Cartesian terms.

    Not interchangeable with ``theta_from_two_points``: the vertical
    orientation is flipped. Older sketches depend on this one.
    """
    return math.atan2(p2.y - p1.y, p2.x - p1.x)


def theta_from_two_points_3d(p1, p2) -> Tuple[float, float]:
    """Return ``(phi, theta)``: heading in the xy plane and elevation."""
    r = distance(p1, p2)
    dz = _z(p2) - _z(p1)
    theta = math.asin(dz / r) if r else 0.0
    return theta_from_two_points_old(p1, p2), theta


def coords_from_theta(theta: float, radius: float) -> Point:
    """Coordinate at the given radius and angle from the origin."""
    return Point(math.cos(theta) * radius, math.sin(theta) * radius)


def coord_with_angle_and_distance(start, theta: float, dist: float) -> Point:
    """
    Travel ``dist`` units at angle ``theta`` (radians) from ``start``.

    Example:
        start (0, 0), theta pi / 2, dist 3 -> (0, -3), i.e. straight up
        the screen.
    """
    return Point(
        start.x + dist * math.cos(theta),
        start.y - dist * math.sin(theta),
    )


def interpolate(domain: Range, range_: Range, value: float) -> float:
    """
    Linear interpolation between a domain and a range.

    The result is clamped to the range. A degenerate domain (both ends
    equal) returns the first range value.

    Example:
        interpolate((0, 10), (0, 100), 6) -> 60.0
    """
    x1, x2 = domain
    y1, y2 = range_
    if x1 == x2:
        return y1
    t = (value - x1) / (x2 - x1)
    result = y1 * (1 - t) + y2 * t
    return clamp(min(y1, y2), max(y1, y2), result)


def interpolate_smooth(domain: Range, range_: Range, value: float) -> float:
    """
    Sinusoidal interpolation between a domain and a range.

    Same contract as ``interpolate`` but eased with a half sine wave::

        Like this:             rather than this:
                 ___
               /                  /
             /                   /
        ___/                    /

    Values at or past either end of the domain return that end's range
    value directly, so the curve never wraps around.
    """
    x1, x2 = domain
    y1, y2 = range_
    if x1 == x2:
        return y1
    t = (value - x1) / (x2 - x1)
    if t <= 0:
        return y1
    if t >= 1:
        return y2
    eased = (1 - math.cos(math.pi * t)) / 2
    result = y1 + (y2 - y1) * eased
    return clamp(min(y1, y2), max(y1, y2), result)


def percent_within_range(min_val: float, max_val: float, value: float) -> float:
    """Position of ``value`` within ``[min_val, max_val]`` as 0..1; 0 for an empty range."""
    if max_val == min_val:
        return 0
    return clamp(0, 1, (value - min_val) / (max_val - min_val))


def value_from_percent(min_val: float, max_val: float, percent: float) -> float:
    return clamp(min_val, max_val, (max_val - min_val) * percent + min_val)


def smooth_to_step(value: float, step: float) -> float:
    """Snap value to the nearest multiple of step (no-op for a zero step)."""
    if not step:
        return value
    return step * round(value / step)


def random_in_range(
    min_val: float,
    max_val: float,
    round_: bool = False,
    prng: Optional[RandomSource] = None,
) -> float:
    """
    Uniform random value in [min_val, max_val).

    Args:
        round_: floor the result to an integer
        prng: random source; the shared Alea instance when omitted
    """
    result = min_val + resolve_prng(prng).random() * (max_val - min_val)
    return math.floor(result) if round_ else result


def coin_toss(prng: Optional[RandomSource] = None) -> bool:
    """50% chance of returning True."""
    return resolve_prng(prng).random() > 0.5


def normalize_screen_pos(x: float, y: float, width: float, height: float) -> Point:
    """Map a screen position to [-1, 1] with y pointing up."""
    return Point(x / width * 2 - 1, -(y / height) * 2 + 1)


def denormalize_screen_pos(x: float, y: float, width: float, height: float) -> Point:
    """Map a [-1, 1] position back to screen coordinates."""
    return Point((x + 1) * width / 2, (y - 1) * height / 2)


def _between(value: float, a: float, b: float) -> bool:
    return min(a, b) - INTERSECTION_EPSILON <= value <= max(a, b) + INTERSECTION_EPSILON


def get_intersection_point(line_a: Line, line_b: Line) -> Optional[Point]:
    """
    Intersection of two line segments, or None.

    None covers both parallel segments and intersections of the infinite
    lines that fall outside either segment.
    """
    (ax1, ay1), (ax2, ay2) = (line_a[0].x, line_a[0].y), (line_a[1].x, line_a[1].y)
    (bx1, by1), (bx2, by2) = (line_b[0].x, line_b[0].y), (line_b[1].x, line_b[1].y)

    a1 = ay2 - ay1
    b1 = ax1 - ax2
    c1 = a1 * ax1 + b1 * ay1

    a2 = by2 - by1
    b2 = bx1 - bx2
    c2 = a2 * bx1 + b2 * by1

    det = a1 * b2 - a2 * b1
    if det == 0:
        return None

    x = (b2 * c1 - b1 * c2) / det
    y = (a1 * c2 - a2 * c1) / det

    if not (_between(x, ax1, ax2) and _between(y, ay1, ay2)):
        return None
    if not (_between(x, bx1, bx2) and _between(y, by1, by2)):
        return None
    return Point(x, y)


def within_polygon_bounds(point, polygon: Sequence) -> bool:
    """
    Ray-casting point-in-polygon test (even-odd rule).

    Each edge counts when the point's y lies in the half-open interval
    between the edge's endpoint ys, so a ray through a shared vertex is
    counted once.
    """
    x, y = point.x, point.y
    inside = False
    n = len(polygon)
    j = n - 1
    for i in range(n):
        xi, yi = polygon[i].x, polygon[i].y
        xj, yj = polygon[j].x, polygon[j].y
        if (yi > y) != (yj > y):
            x_cross = (xj - xi) * (y - yi) / (yj - yi) + xi
            if x < x_cross:
                inside = not inside
        j = i
    return inside


def polar_to_cartesian(origin, coord: PolarCoord) -> Point:
    """Convert a ``(theta, radius)`` pair around ``origin``."""
    return coord_with_angle_and_distance(origin, coord[0], coord[1])
