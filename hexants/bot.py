"""\
HEXANTS BOT
===========

Greedy harvesting bot for the hexagonal ants game.

Each turn it rebuilds, from scratch, a network of beacons linking our base(s)
to the closest worthwhile resource cells, spending at most one unit of budget
per hop of connecting path.

Usage:
  hexants-bot
  hexants-bot --params '{"threshold_exponent": 0.4}'
  hexants-bot --params-file tuned.json --debug

Notes:
- stdout carries the protocol; diagnostics go to stderr.
- A malformed startup block aborts the process before the first turn.
"""

from __future__ import annotations

import argparse
import json
import sys
import traceback
from typing import List, Optional, Sequence

from hexants.actions import format_actions
from hexants.config import DEFAULT_PARAMS, PlannerParams
from hexants.distance import DistanceFields
from hexants.errors import StructuralError, install_excepthook
from hexants.grid import Grid, axial_distance, build_grid, embed_axial
from hexants.helpers.protocol import init_line_count, parse_init_lines, parse_turn_lines
from hexants.planner import Plan, Planner
from hexants.tracker import Aggregates, ResourceTracker


class AntsBot:
    def __init__(self, params: Optional[PlannerParams] = None, debug: bool = False) -> None:
        self.params = params or PlannerParams()
        self.debug = debug

        self.grid: Optional[Grid] = None
        self.fields: Optional[DistanceFields] = None
        self.tracker: Optional[ResourceTracker] = None
        self.planner: Optional[Planner] = None

        self.turn = 0
        self.aggregates: Optional[Aggregates] = None
        self.last_plan: Optional[Plan] = None

    def read_init(self) -> None:
        lines: List[str] = [input()]
        for _ in range(init_line_count(lines[0]) - 1):
            lines.append(input())
        self._read_init_lines(lines)

    def _read_init_lines(self, lines: Sequence[str]) -> None:
        snapshot = parse_init_lines(lines)
        self.grid = build_grid(snapshot.records, snapshot.friendly_bases, snapshot.enemy_bases)
        self.fields = DistanceFields.compute(self.grid)
        self.tracker = ResourceTracker(self.grid, self.fields, self.params)
        self.planner = Planner(self.grid, self.fields, self.params)
        self.turn = 0

        if self.debug:
            reachable = len(self.fields.friendly)
            print(
                f"hexants init cells={self.grid.cell_count} reachable={reachable} "
                f"goal={self.planner.target_goal}",
                file=sys.stderr,
            )
            self._report_layout()

    def _report_layout(self) -> None:
        try:
            coords = embed_axial(self.grid)
        except StructuralError as e:
            print(f"hexants WARNING: {e}", file=sys.stderr)
            return
        radius = max(axial_distance((0, 0), c) for c in coords.values())
        print(f"hexants layout embedded={len(coords)} radius={radius}", file=sys.stderr)

    def read_turn(self) -> None:
        lines: List[str] = [input()]
        for _ in range(self.grid.cell_count):
            lines.append(input())
        self._read_turn_lines(lines)

    def _read_turn_lines(self, lines: Sequence[str]) -> None:
        snapshot = parse_turn_lines(lines, self.grid.cell_count)
        self.turn += 1
        self.aggregates = self.tracker.observe(snapshot.cells, snapshot.my_score, snapshot.opp_score)

    def get_action(self) -> str:
        plan = self.planner.plan(self.tracker.state, self.aggregates)
        self.last_plan = plan

        if self.debug:
            agg = self.aggregates
            print(
                f"hexants turn={self.turn} mode={plan.mode.name} budget={plan.budget} spent={plan.spent} "
                f"claimed={len(plan.claimed)} targets={plan.targets} unreachable={plan.unreachable} "
                f"crystals={agg.crystals} eggs={agg.egg_value} ants={agg.my_ants} score={agg.harvested}",
                file=sys.stderr,
            )

        return format_actions(plan.to_actions(self.params.beacon_strength))


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(prog="hexants-bot")
    ap.add_argument("--params", type=str, default=None, help="Inline JSON object")
    ap.add_argument("--params-file", type=str, default=None, help="JSON file containing object")
    ap.add_argument("--dump-default-params", action="store_true", help="Print DEFAULT_PARAMS as JSON")
    ap.add_argument("--debug", action="store_true", help="Per-turn diagnostics on stderr")
    ns = ap.parse_args(argv)

    if ns.dump_default_params:
        print(json.dumps(DEFAULT_PARAMS, indent=2, sort_keys=True))
        return 0

    params = PlannerParams.load(ns.params, ns.params_file)

    install_excepthook()
    bot = AntsBot(params=params, debug=ns.debug)
    bot.read_init()
    while True:
        try:
            bot.read_turn()
            print(bot.get_action())
            sys.stdout.flush()
        except EOFError:
            break
        except Exception as e:
            print(f"hexants ERROR: {type(e).__name__}: {e}", file=sys.stderr)
            if ns.debug:
                traceback.print_exc(file=sys.stderr)
            print("WAIT")
            sys.stdout.flush()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
