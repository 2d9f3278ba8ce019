"""Tile edges and the connections between them."""

from typing_extensions import Annotated
from pydantic import BaseModel, Field, model_validator

from cascadia_core.data.models import Habitat
from .hexes import EDGES, N_EDGES, rotate_edge

TileID = Annotated[int, Field(ge=0)]
EdgeIdx = Annotated[int, Field(ge=1, le=N_EDGES)]

EdgeLabels = tuple[Habitat, Habitat, Habitat, Habitat, Habitat, Habitat]


class Edge(BaseModel):
    """One of the six borders of a tile, and the habitat facing out of it.

    Edges are numbered 1 (top-right) to 6 (top-left), clockwise.
    A habitat of `None` means the edge has nothing on it (fake tiles).
    """

    model_config = {"frozen": True}

    tile: TileID
    index: EdgeIdx
    habitat: Habitat | None = None

    @property
    def link_habitat_type(self) -> Habitat | None:
        """Habitat type that this edge offers to a neighbor."""
        return self.habitat


class EdgeLink(BaseModel):
    """Connection between edges of two adjacent tiles."""

    model_config = {"frozen": True}

    first_tile: TileID
    first_edge: EdgeIdx
    second_tile: TileID
    second_edge: EdgeIdx

    @model_validator(mode="after")
    def _chk_distinct(self) -> "EdgeLink":
        """A tile can't be linked to itself."""
        if self.first_tile == self.second_tile:
            raise ValueError(f"Tile {self.first_tile} can't be linked to itself")
        return self

    def involves(self, tile_id: int) -> bool:
        """Whether the tile is on either end of the link."""
        return tile_id in (self.first_tile, self.second_tile)

    def edge_of(self, tile_id: int) -> int:
        """Edge index of the given tile in this link."""
        if tile_id == self.first_tile:
            return self.first_edge
        if tile_id == self.second_tile:
            return self.second_edge
        raise KeyError(tile_id)

    def other_side(self, tile_id: int) -> tuple[int, int]:
        """(tile, edge) on the other end of the link from the given tile."""
        if tile_id == self.first_tile:
            return self.second_tile, self.second_edge
        if tile_id == self.second_tile:
            return self.first_tile, self.first_edge
        raise KeyError(tile_id)


def default_edge_labels(habitat1: Habitat, habitat2: Habitat) -> EdgeLabels:
    """Edge labels of an unrotated tile: edges 1-3 are habitat1, 4-6 habitat2."""
    return (habitat1, habitat1, habitat1, habitat2, habitat2, habitat2)


def rotate_labels(labels: EdgeLabels, steps: int) -> EdgeLabels:
    """Shift edge labels `steps` times clockwise.

    The habitat on edge `i` moves to edge `rotate_edge(i, steps)`.
    """
    res: list[Habitat | None] = [None] * N_EDGES
    for edge, habitat in zip(EDGES, labels):
        res[rotate_edge(edge, steps) - 1] = habitat
    return tuple(res)  # type: ignore[return-value]
