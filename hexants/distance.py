"""Hop-distance fields, computed once at startup."""
from __future__ import annotations

import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Set

from hexants.errors import StructuralError
from hexants.grid import Grid


def flood_fill(grid: Grid, seeds: Iterable[int]) -> Dict[int, int]:
    """
    Multi-source BFS: minimum hop count from the seed set to every reachable cell.

    Seeds get distance 0. Unreachable cells get no entry, which callers must
    read as infinite distance.
    """
    frontier: List[int] = []
    for s in seeds:
        if s not in grid:
            raise StructuralError(f"seed index {s} out of range")
        if s not in frontier:
            frontier.append(s)
    visited: Set[int] = set(frontier)
    distances: Dict[int, int] = {}
    depth = 0

    while frontier:
        adding: List[int] = []
        for index in frontier:
            distances[index] = depth
            for n in grid.neighbors(index):
                if n not in visited:
                    visited.add(n)
                    adding.append(n)
        depth += 1
        frontier = adding

    return distances


@dataclass(frozen=True)
class DistanceFields:
    """The two static distance fields, read-only after construction."""

    friendly: Mapping[int, int]
    enemy: Mapping[int, int]

    @staticmethod
    def compute(grid: Grid) -> "DistanceFields":
        return DistanceFields(
            friendly=MappingProxyType(flood_fill(grid, grid.friendly_bases)),
            enemy=MappingProxyType(flood_fill(grid, grid.enemy_bases)),
        )

    def friendly_distance(self, index: int) -> float:
        return self.friendly.get(index, math.inf)

    def enemy_distance(self, index: int) -> float:
        return self.enemy.get(index, math.inf)

    def defensible(self, index: int) -> bool:
        """At least as close to our bases as to theirs, and reachable by us."""
        mine = self.friendly_distance(index)
        return mine != math.inf and mine <= self.enemy_distance(index)
