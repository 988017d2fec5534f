"""Per-turn cell state and the aggregates derived from it."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np

from hexants.config import PlannerParams
from hexants.distance import DistanceFields
from hexants.errors import StructuralError
from hexants.grid import CellKind, Grid


@dataclass
class TurnState:
    """Dynamic cell table. Overwritten in place once per turn."""

    resources: np.ndarray
    my_ants: np.ndarray
    opp_ants: np.ndarray
    harvested: int = 0
    opp_harvested: int = 0

    @staticmethod
    def initial(grid: Grid) -> "TurnState":
        n = grid.cell_count
        return TurnState(
            resources=np.array([cell.initial_resources for cell in grid], dtype=np.int64),
            my_ants=np.zeros(n, dtype=np.int64),
            opp_ants=np.zeros(n, dtype=np.int64),
        )


@dataclass(frozen=True)
class Aggregates:
    crystals: int
    egg_value: int
    my_ants: int
    opp_ants: int
    harvested: int
    opp_harvested: int
    eggs_available: bool


class ResourceTracker:
    """Static masks are built once; totals are recomputed from scratch every turn."""

    def __init__(self, grid: Grid, fields: DistanceFields, params: PlannerParams = PlannerParams()) -> None:
        self.grid = grid
        self.params = params
        self.state = TurnState.initial(grid)

        kinds = np.array([cell.kind.value for cell in grid], dtype=np.int64)
        self.egg_mask = kinds == CellKind.EGG.value
        self.crystal_mask = kinds == CellKind.CRYSTAL.value

        n = grid.cell_count
        self.reachable = np.zeros(n, dtype=bool)
        self.friendly_distance = np.zeros(n, dtype=np.int64)
        for index, dist in fields.friendly.items():
            self.reachable[index] = True
            self.friendly_distance[index] = dist

    def observe(self, records: Sequence[Tuple[int, int, int]], harvested: int, opp_harvested: int = 0) -> Aggregates:
        """
        Overwrite the turn state with fresh observations and recompute totals.

        Args:
            records: one (resources, my_ants, opp_ants) triple per cell index
            harvested: our score so far, never decreasing
            opp_harvested: the opponent's score so far

        Raises:
            StructuralError: if records do not cover exactly every cell
            ValueError: on negative counts or a decreasing score
        """
        table = np.asarray(records, dtype=np.int64)
        if table.shape != (self.grid.cell_count, 3):
            raise StructuralError(
                f"turn records have shape {table.shape}, expected ({self.grid.cell_count}, 3)"
            )
        if (table < 0).any():
            raise ValueError("cell counts must be non-negative")
        if harvested < self.state.harvested:
            raise ValueError(f"harvested counter went backwards: {self.state.harvested} -> {harvested}")

        self.state.resources[:] = table[:, 0]
        self.state.my_ants[:] = table[:, 1]
        self.state.opp_ants[:] = table[:, 2]
        self.state.harvested = int(harvested)
        self.state.opp_harvested = int(opp_harvested)
        return self.aggregates()

    def aggregates(self) -> Aggregates:
        resources = self.state.resources
        eggs = self.egg_mask & self.reachable
        egg_value = np.floor_divide(
            resources[eggs], self.friendly_distance[eggs] + self.params.egg_distance_offset
        ).sum()

        return Aggregates(
            crystals=int(resources[self.crystal_mask].sum()),
            egg_value=int(egg_value),
            my_ants=int(self.state.my_ants.sum()),
            opp_ants=int(self.state.opp_ants.sum()),
            harvested=self.state.harvested,
            opp_harvested=self.state.opp_harvested,
            eggs_available=bool((resources[eggs] > 0).any()),
        )
