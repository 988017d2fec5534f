"""Decoding of the startup and per-turn input blocks."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

import numpy as np

from hexants.errors import StructuralError
from hexants.grid import DIRECTIONS, CellRecord


@dataclass
class InitSnapshot:
    records: List[CellRecord]
    friendly_bases: List[int]
    enemy_bases: List[int]

    @property
    def cell_count(self) -> int:
        return len(self.records)


@dataclass
class TurnSnapshot:
    my_score: int
    opp_score: int
    # One row per cell: resources, my_ants, opp_ants.
    cells: np.ndarray


def _ints(line: str, what: str, error=ValueError) -> List[int]:
    try:
        return [int(token) for token in line.split()]
    except ValueError:
        raise error(f"malformed {what}: {line!r}") from None


def _parse_cell(line: str, index: int) -> CellRecord:
    values = _ints(line, f"cell {index} entry", StructuralError)
    if len(values) != 2 + DIRECTIONS:
        raise StructuralError(f"cell {index} entry needs {2 + DIRECTIONS} integers, got {len(values)}")
    return CellRecord(kind=values[0], initial_resources=values[1], neighbors=tuple(values[2:]))


def init_line_count(first_line: str) -> int:
    """Number of lines in the startup block announced by its first line."""
    header = _ints(first_line, "cell count", StructuralError)
    if len(header) != 1 or header[0] <= 0:
        raise StructuralError(f"malformed cell count: {first_line!r}")
    return header[0] + 4


def parse_init_lines(raw_lines: Sequence[str]) -> InitSnapshot:
    if not raw_lines:
        raise StructuralError("startup block is empty")

    count = init_line_count(raw_lines[0]) - 4
    if len(raw_lines) < count + 4:
        raise StructuralError("startup block truncated")

    records = [_parse_cell(raw_lines[1 + i], i) for i in range(count)]

    cursor = count + 1
    base_count = _ints(raw_lines[cursor], "base count", StructuralError)
    if len(base_count) != 1:
        raise StructuralError(f"malformed base count: {raw_lines[cursor]!r}")
    friendly = _ints(raw_lines[cursor + 1], "friendly bases", StructuralError)
    enemy = _ints(raw_lines[cursor + 2], "enemy bases", StructuralError)
    if len(friendly) != base_count[0] or len(enemy) != base_count[0]:
        raise StructuralError(f"expected {base_count[0]} bases per player")

    return InitSnapshot(records=records, friendly_bases=friendly, enemy_bases=enemy)


def parse_turn_lines(raw_lines: Sequence[str], cell_count: int) -> TurnSnapshot:
    if len(raw_lines) != cell_count + 1:
        raise ValueError(f"turn block needs {cell_count + 1} lines, got {len(raw_lines)}")

    scores = _ints(raw_lines[0], "score line")
    if len(scores) != 2:
        raise ValueError(f"malformed score line: {raw_lines[0]!r}")

    rows: List[Tuple[int, int, int]] = []
    for i, line in enumerate(raw_lines[1:]):
        values = _ints(line, f"cell {i} state")
        if len(values) != 3:
            raise ValueError(f"cell {i} state needs 3 integers, got {len(values)}")
        rows.append((values[0], values[1], values[2]))

    cells = np.array(rows, dtype=np.int64).reshape(cell_count, 3)
    return TurnSnapshot(my_score=scores[0], opp_score=scores[1], cells=cells)
