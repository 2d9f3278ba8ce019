"""Hexagonal map definition."""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, RootModel, model_validator

from cascadia_core.errors import InvalidArgument

N_EDGES = 6
EDGES = tuple(range(1, N_EDGES + 1))
"""Edge indices, clockwise from the top-right edge."""


def check_edge(edge: int) -> int:
    """Ensure an edge index is within [1, 6]."""
    if not isinstance(edge, int) or isinstance(edge, bool) or edge not in EDGES:
        raise InvalidArgument(f"Edge index must be in [1, {N_EDGES}], got: {edge!r}")
    return edge


def opposite_edge(edge: int) -> int:
    """Edge of a neighbor that faces the given edge (1 <-> 4, 2 <-> 5, 3 <-> 6)."""
    return (check_edge(edge) + 2) % N_EDGES + 1


def rotate_edge(edge: int, steps: int) -> int:
    """Edge index after turning a tile `steps` times clockwise."""
    return (check_edge(edge) - 1 + steps) % N_EDGES + 1


class HexCoord(RootModel[tuple[int, int]]):
    """Hex coordinate, using (row, col) offset coordinates.

    Hexes are pointy-topped and even rows are shoved half a cell right
    ("even-r" in https://www.redblobgames.com/grids/hexagons/#coordinates-offset).
    """

    model_config = {"frozen": True}

    root: tuple[int, int]

    @property
    def row(self) -> int:
        """Row index."""
        return self.root[0]

    @property
    def col(self) -> int:
        """Column index."""
        return self.root[1]

    @model_validator(mode="before")
    @classmethod
    def _from_mapping(cls, data: Any) -> Any:
        """Allow {'row': ..., 'col': ...} input."""
        if isinstance(data, dict) and set(data) == {"row", "col"}:
            return (data["row"], data["col"])
        return data

    def __hash__(self) -> int:
        return hash(self.root)

    def __lt__(self, rhs: "HexCoord") -> bool:
        if isinstance(rhs, HexCoord):
            return self.root < rhs.root
        return NotImplemented

    def __repr__(self) -> str:
        return f"HexCoord{self.root}"

    # Neighbors

    @property
    def neighbors(self) -> list["HexCoord"]:
        """Direct neighbors, in edge order (index 0 is edge 1).

        https://www.redblobgames.com/grids/hexagons/#neighbors-offset
        """
        offsets = ODD_ROW_OFFSETS if self.row % 2 else EVEN_ROW_OFFSETS
        return [
            HexCoord(root=(self.row + dr, self.col + dc)) for (dr, dc) in offsets
        ]

    def neighbor(self, edge: int) -> "HexCoord":
        """Neighbor across the given edge."""
        return self.neighbors[check_edge(edge) - 1]

    def edge_towards(self, other: "HexCoord") -> int | None:
        """Edge facing `other`, or None if it isn't a neighbor."""
        for edge, nb in zip(EDGES, self.neighbors):
            if nb == other:
                return edge
        return None

    def is_neighbor(self, other: "HexCoord") -> bool:
        """Whether the two cells share an edge."""
        return self.edge_towards(other) is not None


EVEN_ROW_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, 1),  # 1: NE
    (0, 1),  # 2: E
    (1, 1),  # 3: SE
    (1, 0),  # 4: SW
    (0, -1),  # 5: W
    (-1, 0),  # 6: NW
)
"""(row, col) deltas for neighbors of a cell in an even row."""

ODD_ROW_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, 0),  # 1: NE
    (0, 1),  # 2: E
    (1, 0),  # 3: SE
    (1, -1),  # 4: SW
    (0, -1),  # 5: W
    (-1, -1),  # 6: NW
)
"""(row, col) deltas for neighbors of a cell in an odd row."""


ObjType = TypeVar("ObjType")


class HexField(BaseModel, Generic[ObjType]):
    """Hexagonal field with objects that occupy some cells.

    Empty cells are simply absent from `cells`.
    """

    model_config = {"arbitrary_types_allowed": True}  # so that ObjType can be any

    cells: dict[HexCoord, ObjType] = {}

    def get(self, coord: HexCoord) -> ObjType | None:
        """Object at the coordinate, if any."""
        return self.cells.get(coord)

    def __contains__(self, coord: object) -> bool:
        return coord in self.cells

    def __len__(self) -> int:
        return len(self.cells)

    def coords(self) -> list[HexCoord]:
        """Occupied coordinates, in sorted order."""
        return sorted(self.cells)

    def occupied_neighbors(self, coord: HexCoord) -> dict[int, HexCoord]:
        """Occupied neighbors of a cell, keyed by the edge facing them."""
        return {
            edge: nb
            for edge, nb in zip(EDGES, coord.neighbors)
            if nb in self.cells
        }

    def empty_neighbors(self) -> set[HexCoord]:
        """Empty cells sharing an edge with at least one occupied cell."""
        res: set[HexCoord] = set()
        for coord in self.cells:
            res.update(nb for nb in coord.neighbors if nb not in self.cells)
        return res
