"""
Space colonization tree growth.

A cloud of leaves (attraction points) pulls on the nearest branch each tick.
Branches that gather enough pull grow a new segment toward the average
direction; leaves that a branch comes close enough to are removed. Based on
"Modeling Trees with a Space Colonization Algorithm" by Runions, Lane and
Prusinkiewicz (2007).
"""

import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import numpy as np
import structlog

from ..alea_prng import RandomSource
from ..geometry import Point, coin_toss, random_in_range
from ...utils.random import resolve_prng

logger = structlog.get_logger()

LEAF_MODES = ("random", "cross", "circle", "perimeter")


def _vec(p) -> np.ndarray:
    if hasattr(p, "x"):
        return np.array([p.x, p.y], dtype=float)
    return np.array(p[:2], dtype=float)


def _point(v: np.ndarray) -> Point:
    return Point(float(v[0]), float(v[1]))


@dataclass
class TreeConfig:
    """Configuration for tree growth."""

    origin: Tuple[float, float]
    num_leaves: int
    branch_length: float
    min_dist: float  # a leaf within this distance of a branch is reached
    wat: int = 0  # pulls a branch needs beyond this before it grows
    leaf_mode: str = "random"
    shape_width: float = 90
    width: float = 800  # leaf field size
    height: float = 600
    center_origin: bool = False  # leaf field centered on (0, 0)

    def __post_init__(self):
        if self.min_dist <= 0:
            raise ValueError(f"min_dist must be positive, got {self.min_dist}")
        if self.branch_length <= 0:
            raise ValueError(f"branch_length must be positive, got {self.branch_length}")
        for name in ("num_leaves", "wat"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name} must be an integer, got {value!r}")
        if self.num_leaves < 0:
            raise ValueError(f"num_leaves cannot be negative, got {self.num_leaves}")
        if self.wat < 0:
            raise ValueError(f"wat cannot be negative, got {self.wat}")
        if self.leaf_mode not in LEAF_MODES:
            raise ValueError(
                f"Unknown leaf mode '{self.leaf_mode}', expected one of {LEAF_MODES}"
            )
        if self.width <= 0 or self.height <= 0:
            raise ValueError("Leaf field width and height must be positive")


class Leaf:
    __slots__ = ("pos", "reached")

    def __init__(self, pos: np.ndarray):
        self.pos = pos
        self.reached = False


class Branch:
    """
    One tree segment ending at ``pos``.

    ``dir`` accumulates pull from leaves between growth steps and ``count``
    counts the pulls since the branch last grew. Children are not tracked; the
    tree is rebuilt from ``parent`` pointers.
    """

    def __init__(
        self,
        parent: Optional["Branch"],
        pos: np.ndarray,
        direction: np.ndarray,
        length: float,
    ):
        self.parent = parent
        self.pos = pos
        self.orig_dir = direction
        self.dir = direction.copy()
        self.count = 0
        self.length = length

    def next(self) -> "Branch":
        return Branch(self, self.pos + self.dir * self.length, self.dir.copy(), self.length)

    def reset(self) -> None:
        self.dir = self.orig_dir.copy()
        self.count = 0


class Tree:
    """
    Grows a branch structure toward a leaf cloud, one ``grow()`` per frame.

    There is no terminal state. Once all leaves are reached, ``grow()`` does
    nothing. Leaves no branch can get within ``min_dist`` of keep pulling
    without ever being reached.

    Args:
        config: tree configuration
        prng: random source for leaf placement; shared Alea instance when omitted
    """

    def __init__(self, config: TreeConfig, prng: Optional[RandomSource] = None):
        self.config = config
        self.origin = _vec(config.origin)
        self.min_dist = config.min_dist
        self.wat = config.wat
        self._prng = resolve_prng(prng)

        if config.center_origin:
            self.center = np.zeros(2)
        else:
            self.center = np.array([config.width / 2, config.height / 2])

        self.leaves: List[Leaf] = [Leaf(self._place_leaf()) for _ in range(config.num_leaves)]
        self.root = Branch(None, self.origin, np.array([0.0, -1.0]), config.branch_length)
        self.branches: List[Branch] = [self.root]

        logger.debug(
            "Tree seeded",
            leaves=len(self.leaves),
            leaf_mode=config.leaf_mode,
            min_dist=config.min_dist,
        )

    def _rand(self, min_val: float, max_val: float, round_: bool = False) -> float:
        return random_in_range(min_val, max_val, round_, prng=self._prng)

    def _place_leaf(self) -> np.ndarray:
        """Position for one new leaf according to the leaf mode."""
        width, height = self.config.width, self.config.height
        half_w, half_h = width / 2, height / 2
        band = self.config.shape_width
        mode = self.config.leaf_mode

        if mode == "random":
            offset = np.array([
                self._rand(0, width, True),
                self._rand(0, height, True),
            ])
            return self.center - (half_w, half_h) + offset

        if mode == "cross":
            along_x = coin_toss(self._prng)
            if along_x:
                offset = (self._rand(-half_w, half_w), self._rand(-band / 2, band / 2))
            else:
                offset = (self._rand(-band / 2, band / 2), self._rand(-half_h, half_h))
            return self.center + offset

        if mode == "circle":
            outer = min(half_w, half_h)
            inner = max(0.0, outer - band)
            theta = self._rand(0, math.pi * 2)
            radius = self._rand(inner, outer)
            return self.center + (radius * math.cos(theta), radius * math.sin(theta))

        # perimeter: a band along the inside of the field rectangle
        inset_w = min(band, half_w)
        inset_h = min(band, half_h)
        side = math.floor(self._prng.random() * 4)
        if side == 0:
            offset = (self._rand(-half_w, half_w), self._rand(-half_h, -half_h + inset_h))
        elif side == 1:
            offset = (self._rand(-half_w, half_w), self._rand(half_h - inset_h, half_h))
        elif side == 2:
            offset = (self._rand(-half_w, -half_w + inset_w), self._rand(-half_h, half_h))
        else:
            offset = (self._rand(half_w - inset_w, half_w), self._rand(-half_h, half_h))
        return self.center + offset

    def grow(self) -> None:
        """Run one attraction, removal and growth tick."""
        # branches only change during the growth phase
        positions = np.array([branch.pos for branch in self.branches], dtype=float)
        for leaf in self.leaves:
            dists = np.linalg.norm(positions - leaf.pos, axis=1)
            if np.any(dists < self.min_dist):
                # any branch inside the radius reaches the leaf; reached leaves do not pull
                leaf.reached = True
                continue
            idx = int(np.argmin(dists))
            closest = self.branches[idx]
            closest.dir = closest.dir + (leaf.pos - closest.pos) / dists[idx]
            closest.count += 1

        self.leaves = [leaf for leaf in self.leaves if not leaf.reached]

        for i in range(len(self.branches) - 1, -1, -1):
            branch = self.branches[i]
            if branch.count > self.wat:
                branch.dir = branch.dir / (branch.count + 1)
                self.branches.append(branch.next())
                branch.reset()

    def in_bounds(self, p) -> bool:
        """Whether a point lies strictly inside the leaf field."""
        v = _vec(p) - self.center
        half_w, half_h = self.config.width / 2, self.config.height / 2
        return bool(-half_w < v[0] < half_w and -half_h < v[1] < half_h)

    @property
    def leaf_count(self) -> int:
        return len(self.leaves)

    @property
    def branch_count(self) -> int:
        return len(self.branches)

    def display_info(self) -> Dict[str, list]:
        """Segments (parent end, child end) and remaining leaf positions."""
        branches = [
            (_point(b.parent.pos), _point(b.pos))
            for b in self.branches
            if b.parent is not None
        ]
        leaves = [_point(leaf.pos) for leaf in self.leaves]
        return {"branches": branches, "leaves": leaves}
