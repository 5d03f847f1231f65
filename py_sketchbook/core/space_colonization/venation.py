"""
Leaf-vein fill in polar coordinates.

Branches start at a fixed origin and step outward one ring at a time, each
bending by its own rotation. A step is rejected if it leaves the border
polygon or lands on a claimed cell; an accepted step forks two sub-branches
once it is far enough from every branch's last fork.
"""

import math
from typing import Dict, List, Optional, Sequence, Tuple

import structlog

from ..alea_prng import RandomSource
from ..geometry import (
    PolarCoord,
    distance,
    polar_to_cartesian,
    random_in_range,
    within_polygon_bounds,
)
from ...utils.random import resolve_prng

logger = structlog.get_logger()


class VenationBranch:
    def __init__(self, start_point: PolarCoord, initial_rotation: float = 0.0):
        self.points: List[PolarCoord] = [start_point]
        self.sub_branches: List[int] = []  # indices of points where a sub-branch forks
        self.initial_rotation = initial_rotation

    @property
    def last_fork_point(self) -> PolarCoord:
        idx = self.sub_branches[-1] if self.sub_branches else 0
        return self.points[idx]

    def branch_out(self, rotation: float) -> "VenationBranch":
        idx = len(self.points) - 1
        self.sub_branches.append(idx)
        return VenationBranch(self.points[idx], rotation)


class Venation:
    """
    Vein-like fill bounded by a polygon, one ``fill_by_one`` per frame.

    Args:
        branch_resolution: radial step per tick
        branch_length: minimum spacing between forks
        origin: Cartesian center of the polar system
        variance: relative jitter applied once to resolution and length
        prng: random source; shared Alea instance when omitted
    """

    def __init__(
        self,
        branch_resolution: float,
        branch_length: float,
        origin,
        variance: float = 0,
        prng: Optional[RandomSource] = None,
    ):
        if branch_resolution <= 0:
            raise ValueError(f"branch_resolution must be positive, got {branch_resolution}")
        if branch_length <= 0:
            raise ValueError(f"branch_length must be positive, got {branch_length}")
        if not 0 <= variance < 1:
            raise ValueError(f"variance must be within [0, 1), got {variance}")

        self._prng = resolve_prng(prng)
        self.origin = origin
        self.branches: List[VenationBranch] = [VenationBranch((0.0, branch_resolution))]
        self.claimed_cells: Dict[float, Dict[int, bool]] = {}

        if variance:
            resolution = self._rand(
                branch_resolution - branch_resolution * variance,
                branch_resolution + branch_resolution * variance,
            )
            length = self._rand(
                branch_length - branch_length * variance,
                branch_length + branch_length * variance,
            )
        else:
            resolution, length = branch_resolution, branch_length
        self.branch_resolution = max(1, resolution)
        self.branch_length = max(max(1, branch_resolution + 1), length)

    def _rand(self, min_val: float, max_val: float) -> float:
        return random_in_range(min_val, max_val, prng=self._prng)

    def fill_by_one(self, border: Sequence[PolarCoord]) -> int:
        """
        Advance every branch by one step, including branches forked during
        this pass. Returns the number of accepted steps.
        """
        polygon = [polar_to_cartesian(self.origin, p) for p in border]
        accepted = 0
        i = 0
        while i < len(self.branches):
            branch = self.branches[i]
            i += 1
            last_theta, last_len = branch.points[-1]
            next_point = (
                last_theta + branch.initial_rotation + self._rand(-0.01, 0.01),
                last_len + self.branch_resolution,
            )
            if not within_polygon_bounds(polar_to_cartesian(self.origin, next_point), polygon):
                continue
            if self.is_claimed(next_point):
                continue
            branch.points.append(next_point)
            self.claim(next_point)
            accepted += 1

            if self.has_space(next_point):
                self.branches.append(
                    branch.branch_out(branch.initial_rotation + self._rand(0.01, 0.1))
                )
                self.branches.append(
                    branch.branch_out(branch.initial_rotation - self._rand(0.01, 0.1))
                )
        return accepted

    def in_bounds(self, point: PolarCoord, border: Sequence[PolarCoord]) -> bool:
        return within_polygon_bounds(
            polar_to_cartesian(self.origin, point),
            [polar_to_cartesian(self.origin, p) for p in border],
        )

    @staticmethod
    def cell_coords(point: PolarCoord) -> Tuple[float, int]:
        """Discretized (angle, radius) cell; sets the minimum vein spacing."""
        theta, length = point
        return math.floor(theta * 1000) / 1000, math.floor(length)

    def is_claimed(self, point: PolarCoord) -> bool:
        x, y = self.cell_coords(point)
        return self.claimed_cells.get(x, {}).get(y, False)

    def claim(self, point: PolarCoord) -> None:
        x, y = self.cell_coords(point)
        self.claimed_cells.setdefault(x, {})[y] = True

    def has_space(self, point: PolarCoord) -> bool:
        """True when ``point`` is at least ``branch_length`` from every last fork."""
        cart = polar_to_cartesian(self.origin, point)
        for branch in self.branches:
            fork = polar_to_cartesian(self.origin, branch.last_fork_point)
            if distance(cart, fork) < self.branch_length:
                return False
        return True

    def cartesian_branches(self) -> List[list]:
        """Every branch's points converted around the origin."""
        return [
            [polar_to_cartesian(self.origin, p) for p in branch.points]
            for branch in self.branches
        ]
