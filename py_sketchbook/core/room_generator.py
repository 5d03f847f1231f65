"""
Room generation for the grid-partition sketches ("I Spy", "Pandora's Box").

An n x n grid of unit cells is partitioned by merging random neighbors.
``unity`` scales how many merges are attempted: at 0 every cell stays its own
room, at 1 every cell gets one attempt, which still leaves a patchwork rather
than a single region. Edge and corner cells have fewer valid neighbors, so
larger rooms gather toward the interior.
"""

import math
from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional

import structlog

from .alea_prng import RandomSource
from .disjoint_set import DisjointSet, GridCell, Room
from ..utils.random import resolve_prng

logger = structlog.get_logger()


@dataclass
class RoomConfig:
    """Configuration for room generation."""

    n: int  # grid side length
    unity: float  # merge intensity in [0, 1]
    quads_only: bool = False  # merge into filled rectangles only

    def __post_init__(self):
        if isinstance(self.n, bool) or not isinstance(self.n, int):
            raise ValueError(f"n must be an integer, got {self.n!r}")
        if self.n <= 0:
            raise ValueError(f"n must be positive, got {self.n}")
        if not 0 <= self.unity <= 1:
            raise ValueError(f"unity must be within [0, 1], got {self.unity}")

    @property
    def target_merges(self) -> int:
        return math.floor(self.n * self.n * self.unity)


def get_random_adjacent_cell(
    cell: GridCell, n: int, prng: RandomSource
) -> Optional[GridCell]:
    """
    Random in-bounds neighbor of ``cell``, or None when it has none.

    A random starting direction is drawn once, then directions are tried in
    order (left, up, right, down) until one stays on the grid.
    """
    r, c = cell
    direction = math.floor(prng.random() * 4)
    for _ in range(4):
        if direction == 0 and c > 0:
            return GridCell(r, c - 1)
        if direction == 1 and r > 0:
            return GridCell(r - 1, c)
        if direction == 2 and c < n - 1:
            return GridCell(r, c + 1)
        if direction == 3 and r < n - 1:
            return GridCell(r + 1, c)
        direction = (direction + 1) % 4
    return None


class RoomGenerator:
    """
    Partitions an n x n grid into rooms at construction time.

    Regenerating means building a new instance.

    Args:
        config: grid size, unity and merge mode
        prng: random source; the shared Alea instance when omitted
    """

    def __init__(self, config: RoomConfig, prng: Optional[RandomSource] = None):
        self.config = config
        self.n = config.n
        self._prng = resolve_prng(prng)

        cells = [GridCell(r, c) for r in range(self.n) for c in range(self.n)]
        self.disjoint_set = DisjointSet(cells)
        self.single_rooms: List[GridCell] = [
            item.data for item in self.disjoint_set.universe.values()
        ]

        self.merge_attempts = 0
        self.merges = 0

        if config.quads_only:
            self._combine_quads()
        else:
            self._combine_rooms()

        logger.debug(
            "Rooms generated",
            n=self.n,
            unity=config.unity,
            quads_only=config.quads_only,
            attempts=self.merge_attempts,
            merges=self.merges,
            rooms=len(self.rooms),
        )

    def _random_single_room(self) -> int:
        return math.floor(self._prng.random() * len(self.single_rooms))

    def _remove_single_room(self, cell: GridCell) -> None:
        try:
            self.single_rooms.remove(cell)
        except ValueError:
            pass

    def _combine_rooms(self) -> None:
        for _ in range(self.config.target_merges):
            if not self.single_rooms:
                return
            index = self._random_single_room()
            cell = self.single_rooms[index]
            neighbor = get_random_adjacent_cell(cell, self.n, self._prng)
            self.merge_attempts += 1
            if neighbor is not None and not self.disjoint_set.are_in_same_room(cell, neighbor):
                self.disjoint_set.union(cell, neighbor)
                self.merges += 1
            del self.single_rooms[index]

    def _combine_quads(self) -> None:
        target = self.config.target_merges
        total = self.n * self.n
        while total - len(self.single_rooms) < target:
            cell = self.single_rooms[self._random_single_room()]
            neighbor = get_random_adjacent_cell(cell, self.n, self._prng)
            self.merge_attempts += 1
            if neighbor is None:
                self._remove_single_room(cell)
                continue
            self._merge_rect(cell, neighbor)

    def _merge_rect(self, cell: GridCell, neighbor: GridCell) -> None:
        """Union two cells, then grow the room until it fills its bounding box."""
        pending = [neighbor]
        while pending:
            other = pending.pop()
            if not self.disjoint_set.are_in_same_room(cell, other):
                self.disjoint_set.union(cell, other)
                self.merges += 1
            self._remove_single_room(cell)
            self._remove_single_room(other)

            bounds = self.disjoint_set.find(cell).get_bounds()
            for r in range(bounds.min_r, bounds.max_r + 1):
                for c in range(bounds.min_c, bounds.max_c + 1):
                    coords = GridCell(r, c)
                    if not self.disjoint_set.are_in_same_room(cell, coords):
                        pending.append(coords)

    @property
    def rooms(self) -> List[Room]:
        return self.disjoint_set.get_rooms()

    def for_each(self, callback: Callable[[Room], None]) -> None:
        self.disjoint_set.for_each(callback)

    def __iter__(self) -> Iterator[Room]:
        return iter(self.rooms)
