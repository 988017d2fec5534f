"""Breadth-first path search from a claimed network outward."""
from __future__ import annotations

from typing import Callable, Dict, Iterable, List, Set

from hexants.errors import NoPathFound
from hexants.grid import Grid

Path = List[int]
Predicate = Callable[[int], bool]

DEFAULT_MAX_PATHS_PER_CELL = 4


def _ordered_starts(grid: Grid, start_set: Iterable[int]) -> List[int]:
    starts = sorted(set(start_set))
    for s in starts:
        if s not in grid:
            raise ValueError(f"start index {s} out of range")
    return starts


def nearest(grid: Grid, start_set: Iterable[int], predicate: Predicate) -> int:
    """
    Closest cell to the start set satisfying the predicate.

    Start cells are tested first (distance 0).

    Raises:
        NoPathFound: if the reachable component holds no matching cell
    """
    frontier = _ordered_starts(grid, start_set)
    visited: Set[int] = set(frontier)

    while frontier:
        adding: List[int] = []
        for index in frontier:
            if predicate(index):
                return index
            for n in grid.neighbors(index):
                if n not in visited:
                    visited.add(n)
                    adding.append(n)
        frontier = adding

    raise NoPathFound("no matching cell reachable from the start set")


def extend_path(
    grid: Grid,
    start_set: Iterable[int],
    predicate: Predicate,
    max_paths_per_cell: int = DEFAULT_MAX_PATHS_PER_CELL,
) -> List[Path]:
    """
    Shortest paths from the start set to the closest cells matching the predicate.

    Each queued element is a whole path. Layers are expanded one at a time;
    a cell seen in an earlier layer is never entered again, but several paths
    of the same layer may end on the same cell (at most max_paths_per_cell),
    so distinct shortest paths survive. Every path returned has the same,
    minimal, length.

    Returns an empty list when nothing reachable matches.
    """
    layer: List[Path] = [[s] for s in _ordered_starts(grid, start_set)]
    visited: Set[int] = {path[0] for path in layer}

    while layer:
        found = [path for path in layer if predicate(path[-1])]
        if found:
            return found

        adding: List[Path] = []
        reached: Dict[int, int] = {}
        for path in layer:
            for n in grid.neighbors(path[-1]):
                if n in visited:
                    continue
                count = reached.get(n, 0)
                if count >= max_paths_per_cell:
                    continue
                reached[n] = count + 1
                adding.append(path + [n])
        visited.update(reached)
        layer = adding

    return []


def path_length(path: Path) -> int:
    return len(path) - 1
