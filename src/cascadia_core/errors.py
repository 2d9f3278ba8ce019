"""Errors raised by the board model."""


class CascadiaError(Exception):
    """Base class for board model errors."""


class InvalidArgument(CascadiaError, ValueError):
    """Malformed coordinate, edge index, tile id or rotation."""


class OccupiedCell(CascadiaError, ValueError):
    """Placement onto a coordinate that already holds a tile."""

    def __init__(self, coord: object) -> None:
        super().__init__(f"There is already a tile at {coord!r}")
        self.coord = coord


class InvalidPlacement(CascadiaError, ValueError):
    """A token can't go on this tile (not an option, or already occupied)."""
