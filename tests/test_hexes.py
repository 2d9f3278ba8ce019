"""Tests for hex coordinates and edge numbering."""

import pytest
from pydantic import ValidationError

from cascadia_core.errors import InvalidArgument
from cascadia_core.map.hexes import (
    EDGES,
    HexCoord,
    HexField,
    check_edge,
    opposite_edge,
    rotate_edge,
)


def hc(row: int, col: int) -> HexCoord:
    return HexCoord(root=(row, col))


class TestCoordBasics:
    """Construction and comparison."""

    def test_row_col(self):
        coord = hc(3, 7)
        assert coord.row == 3
        assert coord.col == 7

    def test_from_list_and_mapping(self):
        assert HexCoord.model_validate([2, 5]) == hc(2, 5)
        assert HexCoord.model_validate({"row": 2, "col": 5}) == hc(2, 5)

    def test_bad_coordinate(self):
        with pytest.raises(ValidationError):
            HexCoord.model_validate((1, 2, 3))
        with pytest.raises(ValidationError):
            HexCoord.model_validate("a")

    def test_hashable_and_sortable(self):
        cells = {hc(1, 1): "a", hc(0, 5): "b"}
        assert cells[hc(1, 1)] == "a"
        assert sorted([hc(1, 1), hc(0, 5), hc(0, 2)]) == [hc(0, 2), hc(0, 5), hc(1, 1)]

    def test_frozen(self):
        with pytest.raises(ValidationError):
            hc(1, 1).root = (2, 2)  # type: ignore[misc]


class TestEdges:
    """Edge index helpers."""

    def test_check_edge(self):
        for edge in EDGES:
            assert check_edge(edge) == edge
        for bad in (0, 7, -1, True):
            with pytest.raises(InvalidArgument):
                check_edge(bad)

    def test_opposite_edge(self):
        assert opposite_edge(1) == 4  # NE <-> SW
        assert opposite_edge(2) == 5  # E <-> W
        assert opposite_edge(3) == 6  # SE <-> NW
        assert opposite_edge(4) == 1
        assert opposite_edge(5) == 2
        assert opposite_edge(6) == 3

    def test_rotate_edge(self):
        assert rotate_edge(1, 0) == 1
        assert rotate_edge(1, 1) == 2
        assert rotate_edge(6, 1) == 1
        assert rotate_edge(2, 5) == 1
        assert rotate_edge(3, -1) == 2


class TestNeighbors:
    """Neighbor offsets on the even-r grid."""

    def test_even_row(self):
        assert hc(8, 8).neighbors == [
            hc(7, 9),  # NE
            hc(8, 9),  # E
            hc(9, 9),  # SE
            hc(9, 8),  # SW
            hc(8, 7),  # W
            hc(7, 8),  # NW
        ]

    def test_odd_row(self):
        assert hc(9, 12).neighbors == [
            hc(8, 12),  # NE
            hc(9, 13),  # E
            hc(10, 12),  # SE
            hc(10, 11),  # SW
            hc(9, 11),  # W
            hc(8, 11),  # NW
        ]

    def test_negative_coords(self):
        """Geometry doesn't care about board bounds."""
        assert hc(-1, -1).neighbors == [
            hc(-2, -1),
            hc(-1, 0),
            hc(0, -1),
            hc(0, -2),
            hc(-1, -2),
            hc(-2, -2),
        ]

    def test_neighbor_by_edge(self):
        assert hc(8, 11).neighbor(3) == hc(9, 12)
        with pytest.raises(InvalidArgument):
            hc(8, 11).neighbor(0)

    def test_edge_towards(self):
        assert hc(8, 11).edge_towards(hc(9, 12)) == 3
        assert hc(9, 12).edge_towards(hc(8, 11)) == 6
        assert hc(8, 11).edge_towards(hc(10, 11)) is None
        assert hc(8, 11).edge_towards(hc(8, 11)) is None

    def test_symmetry(self):
        """B is a neighbor of A exactly when A is a neighbor of B."""
        region = [hc(r, c) for r in range(-3, 4) for c in range(-3, 4)]
        for a in region:
            for edge, b in zip(EDGES, a.neighbors):
                assert a in b.neighbors
                assert b.neighbor(opposite_edge(edge)) == a
            for b in region:
                assert a.is_neighbor(b) == b.is_neighbor(a)

    def test_six_distinct(self):
        for coord in (hc(0, 0), hc(1, 0), hc(-5, 3)):
            nbs = coord.neighbors
            assert len(set(nbs)) == 6
            assert coord not in nbs


class TestHexField:
    """Sparse field of objects."""

    def test_empty_neighbors(self):
        fld = HexField[str](cells={hc(8, 8): "a", hc(8, 9): "b"})
        assert len(fld) == 2
        assert hc(8, 8) in fld
        assert fld.get(hc(0, 0)) is None
        assert fld.coords() == [hc(8, 8), hc(8, 9)]
        assert fld.occupied_neighbors(hc(8, 8)) == {2: hc(8, 9)}
        expected = (set(hc(8, 8).neighbors) | set(hc(8, 9).neighbors)) - {
            hc(8, 8),
            hc(8, 9),
        }
        assert fld.empty_neighbors() == expected
        assert len(expected) == 8
