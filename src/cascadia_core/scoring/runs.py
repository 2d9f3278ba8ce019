"""Run scoring: chains of same-species tokens on adjacent tiles.

A run is a connected group of tiles carrying the species. A run only
counts if it is a simple chain, i.e. no tile in it touches more than
`max_degree` others of the same species. One branching tile voids the
whole run, there is no partial credit for trimming it.
"""

import logging
from collections import deque

from typing_extensions import Annotated
from pydantic import BaseModel, Field

from cascadia_core.data import base_rules
from cascadia_core.data.models import ScoringOption, ScoringTable, WildlifeToken
from cascadia_core.map.board import TileBoard
from cascadia_core.map.hexes import HexCoord

logger = logging.getLogger(__name__)


class Run(BaseModel):
    """A connected group of tiles with the same species."""

    model_config = {"frozen": True}

    cells: tuple[HexCoord, ...]
    valid: bool
    points: Annotated[int, Field(ge=0)] = 0

    @property
    def length(self) -> int:
        """Number of tiles in the run."""
        return len(self.cells)


def species_graph(
    board: TileBoard, species: WildlifeToken
) -> dict[HexCoord, list[HexCoord]]:
    """Adjacency between tiles carrying the species."""
    tagged = {c for c, t in board.cells.items() if t.placed_token == species}
    return {c: [nb for nb in c.neighbors if nb in tagged] for c in sorted(tagged)}


def connected_components(
    graph: dict[HexCoord, list[HexCoord]]
) -> list[tuple[HexCoord, ...]]:
    """Connected groups of the graph, each sorted, in order of first cell."""
    seen: set[HexCoord] = set()
    res: list[tuple[HexCoord, ...]] = []
    for start in sorted(graph):
        if start in seen:
            continue
        seen.add(start)
        group = [start]
        queue = deque([start])
        while queue:
            cur = queue.popleft()
            for nb in graph[cur]:
                if nb not in seen:
                    seen.add(nb)
                    group.append(nb)
                    queue.append(nb)
        res.append(tuple(sorted(group)))
    return res


class ScoringEngine(BaseModel):
    """Scores runs of one species, using the table selected by an option."""

    model_config = {"frozen": True}

    species: WildlifeToken = WildlifeToken.SALMON
    tables: dict[ScoringOption, ScoringTable] = base_rules.salmon
    max_degree: Annotated[int, Field(ge=0)] = 2

    def find_runs(
        self, board: TileBoard, option: ScoringOption = ScoringOption.S1
    ) -> list[Run]:
        """All runs on the board, with their validity and points."""
        table = self.tables[option]
        graph = species_graph(board, self.species)
        res: list[Run] = []
        for group in connected_components(graph):
            valid = all(len(graph[c]) <= self.max_degree for c in group)
            points = table.score(len(group)) if valid else 0
            res.append(Run(cells=group, valid=valid, points=points))
        return res

    def calculate_score(self, board: TileBoard, option: ScoringOption) -> int:
        """Total points for the species on the board."""
        runs = self.find_runs(board, option)
        for run in runs:
            logger.debug(
                f"{self.species.name} run of {run.length} "
                f"({'valid' if run.valid else 'branching'}): {run.points} points"
            )
        return sum(run.points for run in runs)


salmon_engine = ScoringEngine()


def calculate_score(board: TileBoard, option: ScoringOption) -> int:
    """Salmon score of a board under the given option."""
    return salmon_engine.calculate_score(board, option)
