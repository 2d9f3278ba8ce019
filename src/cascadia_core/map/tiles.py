"""Habitat tiles."""

import logging
from collections import Counter
from typing import Any

from pydantic import BaseModel, Field, ValidationInfo, field_validator, model_validator

from cascadia_core.data.models import Habitat, TileType, WildlifeToken
from cascadia_core.errors import InvalidArgument, InvalidPlacement
from .edges import Edge, TileID, default_edge_labels, rotate_labels
from .hexes import EDGES, N_EDGES, check_edge

logger = logging.getLogger(__name__)


class TileIdAllocator(BaseModel):
    """Hands out tile IDs. IDs only go up and are never reused."""

    next_id: TileID = 0

    def allocate(self) -> int:
        """Get a fresh tile ID."""
        res = self.next_id
        self.next_id += 1
        return res


def steps_from_prompt(value: int) -> int:
    """Convert a 1-6 rotation choice (as asked from a player) to 0-5 steps."""
    if isinstance(value, bool) or not isinstance(value, int) or value not in EDGES:
        raise InvalidArgument(f"Rotation choice must be in [1, {N_EDGES}], got: {value!r}")
    return value - 1


class HabitatTile(BaseModel):
    """Habitat tile, with up to one wildlife token on it.

    A keystone tile has a single habitat and a single token option.
    Fake tiles only mark empty slots on a board: no habitats, no tokens.

    Identity, habitats and token options are fixed once the tile is made.
    Edge labels change only through `rotate`, the placed token only through
    `place_token` and `remove_token`; assignments are validated.
    """

    model_config = {"validate_assignment": True}

    tile_id: TileID = Field(frozen=True)
    habitat1: Habitat | None = Field(default=None, frozen=True)
    habitat2: Habitat | None = Field(default=None, frozen=True)
    tile_type: TileType = Field(frozen=True)
    token_options: tuple[WildlifeToken, ...] = Field(default=(), frozen=True)
    placed_token: WildlifeToken | None = None
    edge_labels: tuple[Habitat | None, ...]

    @model_validator(mode="before")
    @classmethod
    def _set_defaults(cls, data: Any) -> Any:
        """Derive tile type and edge labels from the habitats if not given."""
        if not isinstance(data, dict):
            return data
        data = dict(data)
        h1, h2 = data.get("habitat1"), data.get("habitat2")
        if "tile_type" not in data:
            if h1 is None and h2 is None:
                data["tile_type"] = TileType.FAKE
            elif h1 == h2:
                data["tile_type"] = TileType.KEYSTONE
            else:
                data["tile_type"] = TileType.NON_KEYSTONE
        if "edge_labels" not in data:
            if h1 is None or h2 is None:
                data["edge_labels"] = (None,) * N_EDGES
            else:
                data["edge_labels"] = default_edge_labels(Habitat(h1), Habitat(h2))
        return data

    @field_validator("placed_token", mode="after")
    @classmethod
    def _chk_placed_token(
        cls, v: WildlifeToken | None, info: ValidationInfo
    ) -> WildlifeToken | None:
        """The placed token must be one of the options."""
        if v is not None and v not in info.data.get("token_options", ()):
            raise ValueError(f"Placed token {v.name} isn't an option")
        return v

    @field_validator("edge_labels", mode="after")
    @classmethod
    def _chk_edge_labels(
        cls, v: tuple[Habitat | None, ...], info: ValidationInfo
    ) -> tuple[Habitat | None, ...]:
        """Edge labels are a rearrangement of the tile's default labels."""
        if len(v) != N_EDGES:
            raise ValueError(f"Expected {N_EDGES} edge labels, got: {len(v)}")
        if "habitat1" not in info.data or "habitat2" not in info.data:
            return v  # habitats failed validation already
        h1, h2 = info.data["habitat1"], info.data["habitat2"]
        if h1 is None or h2 is None:
            expected: tuple[Habitat | None, ...] = (None,) * N_EDGES
        else:
            expected = default_edge_labels(h1, h2)
        if Counter(v) != Counter(expected):
            raise ValueError(f"Edge labels don't match the habitats: {v}")
        return v

    @model_validator(mode="after")
    def _check_values(self) -> "HabitatTile":
        """Check that the tile type, habitats and options agree."""
        if self.tile_type == TileType.FAKE:
            if self.habitat1 is not None or self.habitat2 is not None:
                raise ValueError("Fake tiles have no habitats")
            if self.token_options:
                raise ValueError("Fake tiles have no tokens")
            return self

        if self.habitat1 is None or self.habitat2 is None:
            raise ValueError(f"Tile {self.tile_id} needs two habitats")
        is_keystone = self.habitat1 == self.habitat2
        if is_keystone != (self.tile_type == TileType.KEYSTONE):
            raise ValueError(
                f"Tile type {self.tile_type.name} doesn't match habitats "
                f"{self.habitat1.name} + {self.habitat2.name}"
            )
        if not self.token_options:
            raise ValueError(f"Tile {self.tile_id} needs at least one token option")
        if is_keystone and len(self.token_options) != 1:
            raise ValueError("Keystone tiles have exactly one token option")
        if len(set(self.token_options)) != len(self.token_options):
            raise ValueError(f"Duplicate token options: {self.token_options}")
        return self

    @classmethod
    def make_fake(cls, tile_id: int) -> "HabitatTile":
        """Make a placeholder tile for an empty board slot."""
        return cls(tile_id=tile_id, tile_type=TileType.FAKE)

    # Equality is by identity number only

    def __eq__(self, rhs: object) -> bool:
        if isinstance(rhs, HabitatTile):
            return self.tile_id == rhs.tile_id
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.tile_id)

    def __str__(self) -> str:
        if self.is_fake:
            return f"FAKE #{self.tile_id}"
        return f"{self.habitat1.name} + {self.habitat2.name}"  # type: ignore[union-attr]

    # Properties

    @property
    def is_keystone(self) -> bool:
        """Whether both halves of the tile are the same habitat."""
        return self.tile_type == TileType.KEYSTONE

    @property
    def is_fake(self) -> bool:
        """Whether this is a placeholder tile."""
        return self.tile_type == TileType.FAKE

    @property
    def is_token_placed(self) -> bool:
        """Whether there is a token on the tile."""
        return self.placed_token is not None

    @property
    def habitats(self) -> set[Habitat]:
        """Habitats present on the tile."""
        return {h for h in (self.habitat1, self.habitat2) if h is not None}

    @property
    def edges(self) -> list[Edge]:
        """All six edges, in order."""
        return [
            Edge(tile=self.tile_id, index=idx, habitat=lbl)
            for idx, lbl in zip(EDGES, self.edge_labels)
        ]

    def edge(self, index: int) -> Edge:
        """Get a single edge by its index (1-6)."""
        return self.edges[check_edge(index) - 1]

    # Rotation

    def rotate(self, steps: int) -> bool:
        """Turn the tile `steps` sixths of a turn clockwise.

        Negative steps turn counter-clockwise. Keystone and fake tiles are
        left as they are.

        Returns True if the edges were rotated.
        """
        if isinstance(steps, bool) or not isinstance(steps, int):
            raise InvalidArgument(f"Rotation steps must be an integer, got: {steps!r}")
        if self.tile_type != TileType.NON_KEYSTONE:
            logger.debug(f"Ignoring rotation of {self.tile_type.name} tile {self.tile_id}")
            return False
        self.edge_labels = rotate_labels(self.edge_labels, steps % N_EDGES)  # type: ignore[arg-type]
        return True

    # Tokens

    def can_place(self, token: WildlifeToken) -> bool:
        """Whether the token could go on this tile right now."""
        return not self.is_token_placed and token in self.token_options

    def place_token(self, token: WildlifeToken) -> None:
        """Place a token on the tile."""
        if self.is_fake:
            raise InvalidPlacement(f"Can't place a token on fake tile {self.tile_id}")
        if self.is_token_placed:
            raise InvalidPlacement(f"There is already a token on tile {self.tile_id}")
        if token not in self.token_options:
            raise InvalidPlacement(
                f"{token.name} isn't an option for tile {self.tile_id}: "
                f"{[t.name for t in self.token_options]}"
            )
        self.placed_token = token

    def remove_token(self) -> WildlifeToken:
        """Take the token off the tile and return it."""
        if self.placed_token is None:
            raise InvalidPlacement(f"There is no token on tile {self.tile_id} to remove")
        freed = self.placed_token
        self.placed_token = None
        return freed

    def is_keystone_match(self, token: WildlifeToken) -> bool:
        """Whether the token is the keystone tile's own species (earns a nature token)."""
        return self.is_keystone and self.token_options[0] == token
