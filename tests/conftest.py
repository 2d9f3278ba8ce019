"""Shared fixtures."""

from typing import Callable

import pytest

from cascadia_core.data.models import Habitat, WildlifeToken
from cascadia_core.map.board import TileBoard
from cascadia_core.map.tiles import HabitatTile, TileIdAllocator

TileMaker = Callable[..., HabitatTile]


@pytest.fixture
def allocator() -> TileIdAllocator:
    """Fresh tile ID source."""
    return TileIdAllocator()


@pytest.fixture
def make_tile(allocator: TileIdAllocator) -> TileMaker:
    """Factory for tiles, optionally with a token already placed."""

    def _make(
        token: WildlifeToken | None = None,
        habitat1: Habitat = Habitat.PRAIRIE,
        habitat2: Habitat = Habitat.PRAIRIE,
        options: list[WildlifeToken] | None = None,
    ) -> HabitatTile:
        if options is None:
            options = [token or WildlifeToken.SALMON]
        tile = HabitatTile(
            tile_id=allocator.allocate(),
            habitat1=habitat1,
            habitat2=habitat2,
            token_options=options,
        )
        if token is not None:
            tile.place_token(token)
        return tile

    return _make


@pytest.fixture
def board() -> TileBoard:
    """Empty 20x20 board."""
    return TileBoard()
