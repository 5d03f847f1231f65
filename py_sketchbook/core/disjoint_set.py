"""
Disjoint set over grid cells.

Every cell is wrapped in an ``Item`` that points at the ``Room`` it currently
belongs to. Merging rewrites those pointers eagerly, so ``find`` is a single
lookup and no path compression is needed.
"""

from typing import Callable, Dict, Iterable, Iterator, List, NamedTuple, Optional

import structlog

logger = structlog.get_logger()


class GridCell(NamedTuple):
    """Row/column position in an n x n grid."""
    r: int
    c: int


class RoomBounds(NamedTuple):
    min_r: int
    min_c: int
    max_r: int
    max_c: int

    @property
    def rows(self) -> int:
        return self.max_r - self.min_r + 1

    @property
    def cols(self) -> int:
        return self.max_c - self.min_c + 1


def cell_key(cell) -> str:
    """Map key for a cell, ``"r:c"``."""
    return f"{cell.r}:{cell.c}"


class Item:
    """One cell plus a back-reference to its current room."""

    __slots__ = ("data", "parent")

    def __init__(self, data: GridCell):
        self.data = data
        self.parent: Optional["Room"] = None

    def __repr__(self) -> str:
        return f"Item({self.data.r}, {self.data.c})"


class Room:
    """A set of items that currently belong together."""

    def __init__(self):
        # dict keeps insertion order, which keeps renders and tests stable
        self.items: Dict[Item, None] = {}

    def add(self, item: Item) -> None:
        if item.parent is not self:
            item.parent = self
            self.items[item] = None

    def merge(self, other: "Room") -> None:
        """Move every item of ``other`` into this room and empty ``other``."""
        if other is self:
            return
        for item in list(other.items):
            self.add(item)
        other.items.clear()

    @property
    def cells(self) -> List[GridCell]:
        return [item.data for item in self.items]

    def get_bounds(self) -> RoomBounds:
        """Bounding box of the room's cells in grid coordinates."""
        if not self.items:
            raise ValueError("Cannot compute bounds of an empty room")
        rows = [item.data.r for item in self.items]
        cols = [item.data.c for item in self.items]
        return RoomBounds(min(rows), min(cols), max(rows), max(cols))

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Item]:
        return iter(self.items)

    def __repr__(self) -> str:
        return f"Room({len(self.items)} items)"


class DisjointSet:
    """
    Union-find over a fixed universe of grid cells.

    Args:
        cells: every cell in the universe; each starts in its own room
    """

    def __init__(self, cells: Iterable[GridCell]):
        self.universe: Dict[str, Item] = {}
        for data in cells:
            item = Item(data)
            Room().add(item)
            self.universe[cell_key(data)] = item

    def find(self, cell) -> Room:
        """Current room of a cell. Raises KeyError for unknown cells."""
        return self.universe[cell_key(cell)].parent

    def union(self, cell1, cell2) -> None:
        """
        Merge the room of ``cell2`` into the room of ``cell1``.

        A missing cell (None) is ignored; grid-edge neighbor lookups return
        None legitimately.
        """
        if not cell1 or not cell2:
            return
        other = self.find(cell2)
        first = self.find(cell1)
        first.merge(other)

    def are_in_same_room(self, cell1, cell2) -> bool:
        return self.find(cell1) is self.find(cell2)

    def get_rooms(self) -> List[Room]:
        """Distinct rooms, each once, in order of their first cell."""
        rooms: Dict[Room, None] = {}
        for item in self.universe.values():
            rooms[item.parent] = None
        return list(rooms)

    def for_each(self, callback: Callable[[Room], None]) -> None:
        for room in self.get_rooms():
            callback(room)

    def __iter__(self) -> Iterator[Room]:
        return iter(self.get_rooms())

    def __len__(self) -> int:
        return len(self.universe)

    def pretty_print(self) -> None:
        """Log every room and its cells."""
        for count, room in enumerate(self.get_rooms(), start=1):
            logger.info(
                "Room",
                room=count,
                size=len(room),
                cells=[(cell.r, cell.c) for cell in room.cells],
            )
