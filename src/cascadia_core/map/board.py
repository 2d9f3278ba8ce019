"""Player board: a sparse hex field of placed habitat tiles."""

import logging
from typing import Sequence

from typing_extensions import Annotated
from pydantic import Field, PrivateAttr, model_validator

from cascadia_core.data import base_rules
from cascadia_core.data.models import GameRules, WildlifeToken
from cascadia_core.errors import InvalidArgument, InvalidPlacement, OccupiedCell
from .edges import EdgeLink
from .hexes import HexCoord, HexField, opposite_edge
from .tiles import HabitatTile, TileIdAllocator

logger = logging.getLogger(__name__)

CoordLike = HexCoord | tuple[int, int]


def to_coord(coord: CoordLike) -> HexCoord:
    """Convert tuples to coordinates."""
    if isinstance(coord, HexCoord):
        return coord
    try:
        return HexCoord.model_validate(coord)
    except ValueError as ve:
        raise InvalidArgument(f"Bad coordinate: {coord!r}") from ve


class TileBoard(HexField[HabitatTile]):
    """Tiles placed by one player.

    Cells outside `rows` x `cols` can't hold tiles. Every placed tile is
    linked edge-to-edge with the tiles next to it.

    Add tiles with `place` only. Writing into `cells` directly skips its
    checks and leaves the tile ID index stale.
    """

    model_config = {"validate_assignment": True}

    rows: Annotated[int, Field(gt=0)] = base_rules.board_rows
    cols: Annotated[int, Field(gt=0)] = base_rules.board_cols
    links: list[EdgeLink] = []

    _by_id: dict[int, HexCoord] = PrivateAttr(default_factory=dict)

    @model_validator(mode="after")
    def _index_cells(self) -> "TileBoard":
        """Check given cells and index them by tile ID."""
        self._by_id = {}
        for coord, tile in self.cells.items():
            if tile.is_fake:
                raise ValueError(f"Fake tile {tile.tile_id} can't be on the board")
            if not self.in_bounds(coord):
                raise ValueError(f"Tile {tile.tile_id} is outside the board: {coord!r}")
            if tile.tile_id in self._by_id:
                raise ValueError(f"Tile {tile.tile_id} is placed twice")
            self._by_id[tile.tile_id] = coord
        return self

    @classmethod
    def with_starter_tiles(
        cls,
        starter: Sequence[HabitatTile],
        rules: GameRules = base_rules,
    ) -> "TileBoard":
        """Make a board with the three starter tiles at their fixed positions."""
        if len(starter) != len(rules.starter_positions):
            raise InvalidArgument(
                f"Expected {len(rules.starter_positions)} starter tiles, got: {len(starter)}"
            )
        board = cls(rows=rules.board_rows, cols=rules.board_cols)
        for tile, pos in zip(starter, rules.starter_positions):
            board.place(tile, pos)
        logger.info(f"Seeded board with starter tiles {[t.tile_id for t in starter]}")
        return board

    # Read accessors

    def in_bounds(self, coord: HexCoord) -> bool:
        """Whether the coordinate is inside the board extent."""
        return 0 <= coord.row < self.rows and 0 <= coord.col < self.cols

    def tile_at(self, coord: CoordLike) -> HabitatTile | None:
        """Tile at the coordinate, if any."""
        return self.get(to_coord(coord))

    def coord_of(self, tile_id: int) -> HexCoord:
        """Where a tile was placed."""
        try:
            return self._by_id[tile_id]
        except KeyError as ke:
            raise KeyError(f"No tile on the board with ID {tile_id}") from ke

    def get_by_id(self, tile_id: int) -> HabitatTile:
        """Get a placed tile by its ID."""
        return self.cells[self.coord_of(tile_id)]

    @property
    def tiles(self) -> list[HabitatTile]:
        """Placed tiles, in coordinate order."""
        return [self.cells[c] for c in self.coords()]

    def links_for(self, tile_id: int) -> dict[int, EdgeLink]:
        """Edge links of a tile, keyed by that tile's edge index."""
        return {lnk.edge_of(tile_id): lnk for lnk in self.links if lnk.involves(tile_id)}

    def neighbors_of(self, coord: CoordLike) -> dict[int, HabitatTile]:
        """Tiles next to a coordinate, keyed by the edge facing them."""
        return {
            edge: self.cells[nb]
            for edge, nb in self.occupied_neighbors(to_coord(coord)).items()
        }

    def candidate_frontier(self) -> list[HexCoord]:
        """Empty in-bounds cells next to at least one placed tile."""
        return sorted(c for c in self.empty_neighbors() if self.in_bounds(c))

    def frontier_placeholders(
        self, allocator: TileIdAllocator
    ) -> dict[HexCoord, HabitatTile]:
        """Fake tiles marking every candidate cell (for display)."""
        return {
            coord: HabitatTile.make_fake(allocator.allocate())
            for coord in self.candidate_frontier()
        }

    # Mutation

    def place(self, tile: HabitatTile, coord: CoordLike) -> None:
        """Put a tile on the board and link it to its neighbors."""
        coord = to_coord(coord)
        if tile.is_fake:
            raise InvalidArgument(f"Can't place fake tile {tile.tile_id} on the board")
        if not self.in_bounds(coord):
            raise InvalidArgument(
                f"{coord!r} is outside the {self.rows}x{self.cols} board"
            )
        if coord in self.cells:
            raise OccupiedCell(coord)
        if tile.tile_id in self._by_id:
            raise InvalidArgument(
                f"Tile {tile.tile_id} is already on the board at {self._by_id[tile.tile_id]!r}"
            )

        new_links = [
            EdgeLink(
                first_tile=tile.tile_id,
                first_edge=edge,
                second_tile=nb.tile_id,
                second_edge=opposite_edge(edge),
            )
            for edge, nb in self.neighbors_of(coord).items()
        ]
        self.cells[coord] = tile
        self._by_id[tile.tile_id] = coord
        self.links.extend(new_links)
        logger.info(f"Placed tile {tile.tile_id} ({tile}) at {coord!r}")

    def place_token(self, tile_id: int, token: WildlifeToken) -> bool:
        """Place a token on a placed tile.

        Returns True if the player earns a nature token for it.
        """
        try:
            tile = self.get_by_id(tile_id)
        except KeyError as ke:
            raise InvalidPlacement(f"No tile on the board with ID {tile_id}") from ke
        tile.place_token(token)
        logger.info(f"Placed {token.name} on tile {tile_id}")
        return tile.is_keystone_match(token)

    def deep_copy(self) -> "TileBoard":
        """Independent copy of this board."""
        return TileBoard(
            cells={c: t.model_copy(deep=True) for c, t in self.cells.items()},
            rows=self.rows,
            cols=self.cols,
            links=list(self.links),
        )
