"""Data models."""

from enum import Enum

from typing_extensions import Annotated
from pydantic import BaseModel, Field, field_validator, model_validator


class Habitat(str, Enum):
    """Habitat type."""

    FOREST = "FOREST"
    WETLAND = "WETLAND"
    RIVER = "RIVER"
    MOUNTAIN = "MOUNTAIN"
    PRAIRIE = "PRAIRIE"


class WildlifeToken(str, Enum):
    """Wildlife species. Tokens of one species are interchangeable."""

    BEAR = "BEAR"
    ELK = "ELK"
    SALMON = "SALMON"
    HAWK = "HAWK"
    FOX = "FOX"


class TileType(str, Enum):
    """Tile classification."""

    KEYSTONE = "KEYSTONE"
    NON_KEYSTONE = "NON_KEYSTONE"
    FAKE = "FAKE"  # placeholder for an empty, legal board slot


class ScoringOption(str, Enum):
    """Scoring card variant chosen at game setup."""

    S1 = "S1"
    S2 = "S2"
    S3 = "S3"


class ScoringTable(BaseModel):
    """Points for a run of length 1, 2, ..., N.

    Longer runs score the last entry.
    """

    model_config = {"frozen": True}

    points: Annotated[list[Annotated[int, Field(ge=0)]], Field(min_length=1)]

    @field_validator("points", mode="after")
    @classmethod
    def _check_non_decreasing(cls, v: list[int]) -> list[int]:
        """Ensure longer runs never score less."""
        for shorter, longer in zip(v, v[1:]):
            if longer < shorter:
                raise ValueError(f"Points must be non-decreasing: {v}")
        return v

    def score(self, length: int) -> int:
        """Points for a run of the given length."""
        if length <= 0:
            return 0
        return self.points[min(length, len(self.points)) - 1]


class StarterTile(BaseModel):
    """Definition of one tile in a starter set."""

    habitat1: Habitat
    habitat2: Habitat
    tokens: Annotated[list[WildlifeToken], Field(min_length=1, max_length=3)]

    @model_validator(mode="after")
    def _chk_keystone_tokens(self) -> "StarterTile":
        """Keystone tiles take exactly one token option."""
        if self.habitat1 == self.habitat2 and len(self.tokens) != 1:
            raise ValueError(
                f"Keystone {self.habitat1.name} tile must have one token option"
            )
        return self


class StarterSet(BaseModel):
    """Three tiles placed on every new board."""

    name: str
    tiles: Annotated[list[StarterTile], Field(min_length=3, max_length=3)]


Idx = tuple[int, int]


class GameRules(BaseModel):
    """Game constants and scoring tables."""

    name: str
    board_rows: Annotated[int, Field(gt=0)] = 20
    board_cols: Annotated[int, Field(gt=0)] = 20
    starter_positions: Annotated[list[Idx], Field(min_length=3, max_length=3)]
    max_token_options: Annotated[int, Field(ge=1, le=5)] = 3
    salmon: dict[ScoringOption, ScoringTable]
    starter_sets: Annotated[list[StarterSet], Field(min_length=1)]

    @field_validator("salmon", mode="after")
    @classmethod
    def _chk_all_options(
        cls, v: dict[ScoringOption, ScoringTable]
    ) -> dict[ScoringOption, ScoringTable]:
        """Every scoring option needs a table."""
        missing = set(ScoringOption) - set(v)
        if missing:
            raise ValueError(f"Missing scoring tables: {sorted(m.value for m in missing)}")
        return v

    @model_validator(mode="after")
    def _chk_starters_in_board(self) -> "GameRules":
        """Ensure starter positions are within the board."""
        for row, col in self.starter_positions:
            if not (0 <= row < self.board_rows and 0 <= col < self.board_cols):
                raise ValueError(f"Starter position outside the board: {(row, col)}")
        return self

    def get_starter_set(self, name: str) -> StarterSet:
        """Get a starter set by name."""
        found = [ss for ss in self.starter_sets if ss.name == name]
        if len(found) != 1:
            raise ValueError(f"Unknown or ambiguous starter set: {name}")
        return found[0]
