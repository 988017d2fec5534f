#!/usr/bin/env python3
"""Replay a saved stdin transcript through the bot and print its answers.

A transcript is exactly what the referee writes to the bot's stdin: the
startup block followed by any number of turn blocks. This is meant for
re-running a game locally after tweaking parameters.

Examples:
    python ./replay_transcript.py game.txt
    python ./replay_transcript.py game.txt --params '{"threshold_exponent": 0.4}' --json
"""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Iterator, List, Sequence, Tuple

from hexants.bot import AntsBot
from hexants.config import PlannerParams
from hexants.helpers.protocol import init_line_count


def split_transcript(lines: Sequence[str]) -> Tuple[List[str], Iterator[List[str]]]:
    """Split transcript lines into the startup block and per-turn blocks."""
    lines = list(lines)
    while lines and not lines[-1].strip():
        lines.pop()
    if not lines:
        raise SystemExit("Transcript is empty")

    init_len = init_line_count(lines[0])
    init = lines[:init_len]
    turn_len = init_len - 3  # score line + one line per cell

    def _turns() -> Iterator[List[str]]:
        cursor = init_len
        while cursor + turn_len <= len(lines):
            yield lines[cursor:cursor + turn_len]
            cursor += turn_len

    return init, _turns()


def replay(lines: Sequence[str], params: PlannerParams) -> List[dict]:
    init, turns = split_transcript(lines)
    bot = AntsBot(params=params)
    bot._read_init_lines(init)

    out: List[dict] = []
    for block in turns:
        bot._read_turn_lines(block)
        line = bot.get_action()
        out.append({"turn": bot.turn, "mode": bot.last_plan.mode.name, "line": line})
    return out


def main() -> None:
    ap = argparse.ArgumentParser()
    ap.add_argument("transcript", type=str)
    ap.add_argument("--params", type=str, default=None)
    ap.add_argument("--params-file", type=str, default=None)
    ap.add_argument("--json", action="store_true", help="Print a JSON list instead of one line per turn")
    args = ap.parse_args()

    params = PlannerParams.load(args.params, args.params_file)
    text = Path(args.transcript).read_text(encoding="utf-8")
    results = replay(text.splitlines(), params)

    if args.json:
        print(json.dumps(results))
    else:
        for row in results:
            print(f"{row['turn']:>3} {row['mode']:<8} {row['line']}")


if __name__ == "__main__":
    main()
