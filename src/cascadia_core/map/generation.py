"""Tile supply.

Drawing tiles from the real game bag is a concern of whoever drives the
game; the board only needs something that satisfies `TileGenerator`.
"""

from random import Random
from typing import Protocol

from pydantic import BaseModel, Field, PrivateAttr

from cascadia_core.data import base_rules
from cascadia_core.data.models import GameRules, Habitat, StarterSet, WildlifeToken
from cascadia_core.errors import InvalidArgument
from .tiles import HabitatTile, TileIdAllocator

StarterTriple = tuple[HabitatTile, HabitatTile, HabitatTile]


class TileGenerator(Protocol):
    """What the board needs from a tile supply."""

    def make_tile(
        self, habitat1: Habitat, habitat2: Habitat, n_tokens: int
    ) -> HabitatTile:
        """Make a tile with the habitats and a number of token options."""
        ...

    def starter_tiles(self) -> StarterTriple:
        """Make the three starter tiles, in placement order."""
        ...


class SeededTileGenerator(BaseModel):
    """Random tile supply with reproducible results for a given seed."""

    seed: int | None = None
    rules: GameRules = base_rules
    allocator: TileIdAllocator = Field(default_factory=TileIdAllocator)

    _rng: Random = PrivateAttr()

    def model_post_init(self, __context: object) -> None:
        """Set up the random number generator."""
        self._rng = Random(self.seed)

    def token_options(self, n_tokens: int) -> list[WildlifeToken]:
        """Draw distinct token options for a tile."""
        if not 1 <= n_tokens <= self.rules.max_token_options:
            raise InvalidArgument(
                f"Token option count must be in [1, {self.rules.max_token_options}]"
                f", got: {n_tokens}"
            )
        return self._rng.sample(list(WildlifeToken), k=n_tokens)

    def make_tile(
        self, habitat1: Habitat, habitat2: Habitat, n_tokens: int
    ) -> HabitatTile:
        """Make a tile; keystone tiles always get one token option."""
        if habitat1 == habitat2:
            n_tokens = 1
        return HabitatTile(
            tile_id=self.allocator.allocate(),
            habitat1=habitat1,
            habitat2=habitat2,
            token_options=self.token_options(n_tokens),
        )

    def random_tile(self) -> HabitatTile:
        """Make a tile with random habitats and token options."""
        habitat1 = self._rng.choice(list(Habitat))
        habitat2 = self._rng.choice(list(Habitat))
        most = self.rules.max_token_options
        n_tokens = self._rng.randint(min(2, most), most)
        return self.make_tile(habitat1, habitat2, n_tokens)

    def starter_tiles(self, starter_set: StarterSet | str | None = None) -> StarterTriple:
        """Make the tiles of a starter set (a random one if not given)."""
        if starter_set is None:
            starter_set = self._rng.choice(self.rules.starter_sets)
        elif isinstance(starter_set, str):
            starter_set = self.rules.get_starter_set(starter_set)
        first, second, third = (
            HabitatTile(
                tile_id=self.allocator.allocate(),
                habitat1=st.habitat1,
                habitat2=st.habitat2,
                token_options=tuple(st.tokens),
            )
            for st in starter_set.tiles
        )
        return first, second, third
