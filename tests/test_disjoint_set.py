"""Tests for the disjoint set over grid cells."""

import pytest

from py_sketchbook.core.alea_prng import AleaPRNG
from py_sketchbook.core.disjoint_set import DisjointSet, GridCell, Item, Room, cell_key


def make_grid(n):
    return [GridCell(r, c) for r in range(n) for c in range(n)]


def total_cells(ds):
    return sum(len(room) for room in ds.get_rooms())


class TestRoom:
    """Test room membership."""

    def test_add_sets_parent(self):
        room = Room()
        item = Item(GridCell(0, 0))
        room.add(item)
        assert item.parent is room
        assert len(room) == 1

    def test_add_twice(self):
        room = Room()
        item = Item(GridCell(0, 0))
        room.add(item)
        room.add(item)
        assert len(room) == 1

    def test_merge_moves_everything(self):
        a, b = Room(), Room()
        items = [Item(GridCell(0, i)) for i in range(3)]
        a.add(items[0])
        b.add(items[1])
        b.add(items[2])
        a.merge(b)
        assert len(a) == 3
        assert len(b) == 0
        assert all(item.parent is a for item in items)

    def test_merge_into_self(self):
        room = Room()
        room.add(Item(GridCell(0, 0)))
        room.merge(room)
        assert len(room) == 1

    def test_bounds(self):
        room = Room()
        for cell in [GridCell(1, 2), GridCell(3, 2), GridCell(2, 5)]:
            room.add(Item(cell))
        bounds = room.get_bounds()
        assert bounds == (1, 2, 3, 5)
        assert bounds.rows == 3
        assert bounds.cols == 4

    def test_bounds_of_empty_room(self):
        with pytest.raises(ValueError):
            Room().get_bounds()


class TestDisjointSet:
    """Test find/union semantics."""

    def test_cell_key(self):
        assert cell_key(GridCell(3, 7)) == "3:7"

    def test_singletons(self):
        ds = DisjointSet(make_grid(3))
        rooms = ds.get_rooms()
        assert len(rooms) == 9
        assert all(len(room) == 1 for room in rooms)

    def test_union(self):
        ds = DisjointSet(make_grid(3))
        ds.union(GridCell(0, 0), GridCell(0, 1))
        assert ds.are_in_same_room(GridCell(0, 0), GridCell(0, 1))
        assert not ds.are_in_same_room(GridCell(0, 0), GridCell(1, 1))
        assert len(ds.get_rooms()) == 8

    def test_union_merges_second_into_first(self):
        ds = DisjointSet(make_grid(2))
        first = ds.find(GridCell(0, 0))
        ds.union(GridCell(0, 0), GridCell(1, 1))
        assert ds.find(GridCell(1, 1)) is first

    def test_union_is_transitive(self):
        ds = DisjointSet(make_grid(3))
        ds.union(GridCell(0, 0), GridCell(0, 1))
        ds.union(GridCell(2, 2), GridCell(0, 1))
        assert ds.are_in_same_room(GridCell(0, 0), GridCell(2, 2))
        assert len(ds.find(GridCell(0, 0))) == 3

    def test_union_same_room_is_noop(self):
        ds = DisjointSet(make_grid(2))
        ds.union(GridCell(0, 0), GridCell(0, 1))
        ds.union(GridCell(0, 1), GridCell(0, 0))
        assert len(ds.find(GridCell(0, 0))) == 2
        assert total_cells(ds) == 4

    def test_union_ignores_missing(self):
        """A missing neighbor (None) is not an error."""
        ds = DisjointSet(make_grid(2))
        ds.union(GridCell(0, 0), None)
        ds.union(None, GridCell(0, 0))
        assert len(ds.get_rooms()) == 4

    def test_cell_zero_zero_is_not_missing(self):
        """GridCell(0, 0) is a real cell even though its fields are zero."""
        ds = DisjointSet(make_grid(2))
        ds.union(GridCell(0, 0), GridCell(1, 0))
        assert ds.are_in_same_room(GridCell(0, 0), GridCell(1, 0))

    def test_unknown_cell(self):
        ds = DisjointSet(make_grid(2))
        with pytest.raises(KeyError):
            ds.find(GridCell(5, 5))

    def test_rooms_listed_once(self):
        """A merged room appears once however many cells point at it."""
        ds = DisjointSet(make_grid(3))
        for c in range(1, 3):
            ds.union(GridCell(0, 0), GridCell(0, c))
        visited = []
        ds.for_each(visited.append)
        assert len(visited) == 7
        assert len(set(map(id, visited))) == 7
        assert list(ds) == visited

    def test_merge_conservation(self):
        """Random unions never lose or duplicate a cell."""
        n = 6
        prng = AleaPRNG("conservation")
        cells = make_grid(n)
        ds = DisjointSet(cells)
        for _ in range(60):
            ds.union(prng.choice(cells), prng.choice(cells))
            assert total_cells(ds) == n * n
            seen = [cell for room in ds.get_rooms() for cell in room.cells]
            assert sorted(seen) == sorted(cells)

    def test_back_references(self):
        """Every item points at the room that holds it."""
        ds = DisjointSet(make_grid(4))
        ds.union(GridCell(0, 0), GridCell(3, 3))
        ds.union(GridCell(1, 1), GridCell(0, 0))
        for room in ds.get_rooms():
            assert all(item.parent is room for item in room)

    def test_pretty_print(self):
        ds = DisjointSet(make_grid(2))
        ds.union(GridCell(0, 0), GridCell(0, 1))
        ds.pretty_print()
