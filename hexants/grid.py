"""Static board topology: cells addressed by index, plus an axial embedding."""
from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Sequence, Tuple

from hexants.errors import StructuralError

NO_NEIGHBOR = -1
DIRECTIONS = 6

# Axial (q, r) offset added when following neighbor slot i.
AXIAL_DIRECTIONS: Tuple[Tuple[int, int], ...] = (
    (1, 0),
    (1, -1),
    (0, -1),
    (-1, 0),
    (-1, 1),
    (0, 1),
)

Axial = Tuple[int, int]


class CellKind(Enum):
    NONE = 0
    EGG = 1
    CRYSTAL = 2


class Owner(Enum):
    NONE = "none"
    FRIENDLY = "friendly"
    ENEMY = "enemy"


@dataclass(frozen=True)
class Cell:
    index: int
    neighbors: Tuple[int, ...]
    kind: CellKind
    initial_resources: int
    base: Owner = Owner.NONE


@dataclass(frozen=True)
class CellRecord:
    """One startup line: resource kind code, initial amount, six neighbor slots."""

    kind: int
    initial_resources: int
    neighbors: Tuple[int, ...]


class Grid:
    """
    Arena of cells addressed by their stable index.

    Neighbor lists hold indices, never references. Topology does not change
    after construction.
    """

    def __init__(self, cells: Sequence[Cell], friendly_bases: Sequence[int], enemy_bases: Sequence[int]) -> None:
        self._cells: Tuple[Cell, ...] = tuple(cells)
        self.friendly_bases: Tuple[int, ...] = tuple(friendly_bases)
        self.enemy_bases: Tuple[int, ...] = tuple(enemy_bases)

    def __len__(self) -> int:
        return len(self._cells)

    def __iter__(self) -> Iterator[Cell]:
        return iter(self._cells)

    def __getitem__(self, index: int) -> Cell:
        return self._cells[index]

    def __contains__(self, index: object) -> bool:
        return isinstance(index, int) and 0 <= index < len(self._cells)

    @property
    def cell_count(self) -> int:
        return len(self._cells)

    def neighbors(self, index: int) -> List[int]:
        """Present neighbors of a cell in stable slot order."""
        return [n for n in self._cells[index].neighbors if n != NO_NEIGHBOR]

    def initial_total(self, kind: CellKind) -> int:
        return sum(cell.initial_resources for cell in self._cells if cell.kind is kind)


def _parse_kind(code: int, index: int) -> CellKind:
    try:
        return CellKind(code)
    except ValueError:
        raise StructuralError(f"cell {index}: unknown resource kind {code}") from None


def _check_bases(bases: Iterable[int], count: int, who: str) -> List[int]:
    checked: List[int] = []
    for b in bases:
        if not 0 <= b < count:
            raise StructuralError(f"{who} base index {b} out of range 0..{count - 1}")
        checked.append(b)
    return checked


def build_grid(records: Sequence[CellRecord], friendly_bases: Iterable[int], enemy_bases: Iterable[int]) -> Grid:
    """
    Build a Grid from the startup table.

    Args:
        records: one record per cell index, in index order
        friendly_bases: indices of our base cells
        enemy_bases: indices of the opponent's base cells

    Raises:
        StructuralError: on an empty table, a wrong number of neighbor slots,
            an unknown resource kind, or any out-of-range index
    """
    count = len(records)
    if count == 0:
        raise StructuralError("grid has no cells")

    friendly = _check_bases(friendly_bases, count, "friendly")
    enemy = _check_bases(enemy_bases, count, "enemy")
    owners: Dict[int, Owner] = {b: Owner.FRIENDLY for b in friendly}
    for b in enemy:
        if b in owners:
            raise StructuralError(f"cell {b} is listed as both friendly and enemy base")
        owners[b] = Owner.ENEMY

    cells: List[Cell] = []
    for index, record in enumerate(records):
        if len(record.neighbors) != DIRECTIONS:
            raise StructuralError(
                f"cell {index}: expected {DIRECTIONS} neighbor slots, got {len(record.neighbors)}"
            )
        for n in record.neighbors:
            if n != NO_NEIGHBOR and not 0 <= n < count:
                raise StructuralError(f"cell {index}: neighbor index {n} out of range 0..{count - 1}")
        if record.initial_resources < 0:
            raise StructuralError(f"cell {index}: negative initial resources")
        cells.append(
            Cell(
                index=index,
                neighbors=tuple(record.neighbors),
                kind=_parse_kind(record.kind, index),
                initial_resources=record.initial_resources,
                base=owners.get(index, Owner.NONE),
            )
        )

    return Grid(cells, friendly, enemy)


def embed_axial(grid: Grid) -> Dict[int, Axial]:
    """
    Assign axial coordinates by BFS from cell 0.

    Following neighbor slot i adds AXIAL_DIRECTIONS[i]. Cells unreachable from
    cell 0 get no coordinate.

    Raises:
        StructuralError: if a cell is reached through two offset paths that
            disagree, or two cells land on the same coordinate
    """
    coords: Dict[int, Axial] = {0: (0, 0)}
    owner_of: Dict[Axial, int] = {(0, 0): 0}
    queue = deque([0])

    while queue:
        current = queue.popleft()
        q, r = coords[current]
        for slot, n in enumerate(grid[current].neighbors):
            if n == NO_NEIGHBOR:
                continue
            dq, dr = AXIAL_DIRECTIONS[slot]
            expected = (q + dq, r + dr)
            if n in coords:
                if coords[n] != expected:
                    raise StructuralError(
                        f"inconsistent adjacency: cell {n} at {coords[n]} but reached as {expected} from cell {current}"
                    )
                continue
            if expected in owner_of:
                raise StructuralError(
                    f"inconsistent adjacency: cells {owner_of[expected]} and {n} both map to {expected}"
                )
            coords[n] = expected
            owner_of[expected] = n
            queue.append(n)

    return coords


def axial_distance(a: Axial, b: Axial) -> int:
    dq = a[0] - b[0]
    dr = a[1] - b[1]
    return (abs(dq) + abs(dr) + abs(dq + dr)) // 2
