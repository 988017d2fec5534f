"""
Greedy per-turn allocation.

The planner re-derives the whole network every turn: it picks a mode, ranks
the eligible resource cells by distance from our bases and connects them one
by one while the unit budget lasts. Nothing carries over to the next turn.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Set, Tuple

from hexants.actions import Announce, Command, Connect, Idle, Reinforce
from hexants.config import PlannerParams
from hexants.distance import DistanceFields
from hexants.errors import EmptyCandidateSet, NoPathFound
from hexants.grid import CellKind, Grid
from hexants.search import extend_path, nearest, path_length
from hexants.tracker import Aggregates, TurnState


class Mode(Enum):
    """Strategic focus of a turn. Each mode carries its candidate filter."""

    GROWTH = "GROW"
    BALANCED = "BALANCE"
    HARVEST = "HARVEST"

    @property
    def label(self) -> str:
        return self.value

    def admits(self, index: int, grid: Grid, fields: DistanceFields, state: TurnState) -> bool:
        if state.resources[index] <= 0:
            return False
        kind = grid[index].kind
        if self is Mode.GROWTH:
            return kind is CellKind.EGG
        if self is Mode.HARVEST:
            return kind is CellKind.CRYSTAL and fields.defensible(index)
        return True


def mode_threshold(cell_count: int, params: PlannerParams = PlannerParams()) -> int:
    return round(cell_count ** params.threshold_exponent)


def select_mode(
    needed: int,
    total_units: int,
    cell_count: int,
    eggs_available: bool,
    params: PlannerParams = PlannerParams(),
) -> Mode:
    """
    Pick the turn's mode from the score still needed and the units on the board.

    With no units at all the ratio is unbounded, so growth wins whenever an
    egg is left.
    """
    ratio = math.inf if total_units == 0 else needed // total_units
    if ratio > mode_threshold(cell_count, params) and eggs_available:
        return Mode.GROWTH
    if ratio >= 1:
        return Mode.BALANCED
    return Mode.HARVEST


@dataclass
class Plan:
    mode: Mode
    claimed: Set[int]
    budget: int
    spent: int = 0
    targets: List[int] = field(default_factory=list)
    # (anchor, target) pairs connected without merging an ambiguous path.
    links: List[Tuple[int, int]] = field(default_factory=list)
    unreachable: List[int] = field(default_factory=list)
    skipped: List[int] = field(default_factory=list)

    @property
    def remaining(self) -> int:
        return self.budget - self.spent

    @property
    def label(self) -> str:
        return f"{self.mode.label} {len(self.claimed)}"

    def to_actions(self, strength: int = 1) -> List[Command]:
        if not self.targets:
            return [Idle()]
        actions: List[Command] = [Reinforce(cell, strength) for cell in sorted(self.claimed)]
        actions.extend(Connect(anchor, target, strength) for anchor, target in self.links)
        actions.append(Announce(self.label))
        return actions


class Planner:
    def __init__(self, grid: Grid, fields: DistanceFields, params: PlannerParams = PlannerParams()) -> None:
        self.grid = grid
        self.fields = fields
        self.params = params
        if params.target_goal is not None:
            self.target_goal = params.target_goal
        else:
            self.target_goal = grid.initial_total(CellKind.CRYSTAL) // 2 + 1

    def choose_mode(self, aggregates: Aggregates) -> Mode:
        needed = self.target_goal - aggregates.harvested
        return select_mode(
            needed,
            aggregates.my_ants,
            self.grid.cell_count,
            aggregates.eggs_available,
            self.params,
        )

    def candidates(self, mode: Mode, state: TurnState) -> List[int]:
        """
        Eligible cells for the mode, closest to our bases first.

        Raises:
            EmptyCandidateSet: if no cell is eligible
        """
        cells = [c.index for c in self.grid if mode.admits(c.index, self.grid, self.fields, state)]
        if not cells:
            raise EmptyCandidateSet(f"no candidate cells in {mode.name} mode")
        cells.sort(key=lambda i: (self.fields.friendly_distance(i), i))
        return cells

    def plan(self, state: TurnState, aggregates: Aggregates) -> Plan:
        mode = self.choose_mode(aggregates)
        plan = Plan(mode=mode, claimed=set(self.grid.friendly_bases), budget=aggregates.my_ants)

        try:
            ordered = self.candidates(mode, state)
        except EmptyCandidateSet:
            return plan

        # Closest egg first, ahead of any closer crystal.
        eggs = [c for c in ordered if self.grid[c].kind is CellKind.EGG]
        if eggs:
            ordered.remove(eggs[0])
            ordered.insert(0, eggs[0])

        for candidate in ordered:
            try:
                self._try_commit(plan, candidate)
            except NoPathFound:
                plan.unreachable.append(candidate)

        return plan

    def _try_commit(self, plan: Plan, candidate: int) -> bool:
        if candidate in plan.claimed:
            return False

        paths = extend_path(
            self.grid,
            plan.claimed,
            lambda i: i == candidate,
            self.params.max_paths_per_cell,
        )
        if not paths:
            raise NoPathFound(f"cell {candidate} is not reachable from the claimed network")

        length = path_length(paths[0])
        if length >= plan.remaining:
            plan.skipped.append(candidate)
            return False

        if len(paths) == 1:
            plan.claimed.update(paths[0])
        else:
            anchor = nearest(self.grid, [candidate], lambda i: i in plan.claimed)
            plan.claimed.add(candidate)
            plan.links.append((anchor, candidate))

        plan.spent += length
        plan.targets.append(candidate)
        return True
