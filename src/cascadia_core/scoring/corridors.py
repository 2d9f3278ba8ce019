"""Habitat corridors: groups of tiles joined by matching edges."""

from cascadia_core.data.models import Habitat
from cascadia_core.map.board import TileBoard


def corridor_sizes(board: TileBoard, habitat: Habitat) -> list[int]:
    """Sizes of every habitat corridor, largest first.

    Two tiles are joined when the edges they share are both the habitat.
    A tile with the habitat on any edge counts, even if it joins nothing.
    """
    members = {t.tile_id for t in board.tiles if habitat in t.edge_labels}
    graph: dict[int, list[int]] = {tid: [] for tid in members}
    for lnk in board.links:
        if lnk.first_tile not in members or lnk.second_tile not in members:
            continue
        first = board.get_by_id(lnk.first_tile).edge(lnk.first_edge)
        second = board.get_by_id(lnk.second_tile).edge(lnk.second_edge)
        if first.link_habitat_type == habitat and second.link_habitat_type == habitat:
            graph[lnk.first_tile].append(lnk.second_tile)
            graph[lnk.second_tile].append(lnk.first_tile)

    seen: set[int] = set()
    sizes: list[int] = []
    for start in sorted(graph):
        if start in seen:
            continue
        seen.add(start)
        stack = [start]
        size = 0
        while stack:
            cur = stack.pop()
            size += 1
            for nb in graph[cur]:
                if nb not in seen:
                    seen.add(nb)
                    stack.append(nb)
        sizes.append(size)
    return sorted(sizes, reverse=True)


def largest_corridor(board: TileBoard, habitat: Habitat) -> int:
    """Size of the largest corridor of the habitat (0 if there is none)."""
    sizes = corridor_sizes(board, habitat)
    return sizes[0] if sizes else 0


def corridor_scores(board: TileBoard) -> dict[Habitat, int]:
    """Largest corridor for every habitat."""
    return {h: largest_corridor(board, h) for h in Habitat}
