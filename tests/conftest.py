"""Pytest configuration and board factories for tests."""

import random
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from hexants.grid import AXIAL_DIRECTIONS, NO_NEIGHBOR, CellRecord, build_grid


def pytest_addoption(parser):
    """Add custom command-line options."""
    parser.addoption(
        "--num-boards",
        action="store",
        default="25",
        help="Number of random boards for the BFS property checks (default: 25)"
    )


@pytest.fixture
def num_boards(request):
    """Get the number of random boards from command-line option."""
    return int(request.config.getoption("--num-boards"))


def hex_coords(radius):
    """Axial coordinates of a hexagon-shaped board, cell 0 in the centre."""
    coords = [
        (q, r)
        for q in range(-radius, radius + 1)
        for r in range(-radius, radius + 1)
        if abs(q + r) <= radius
    ]
    coords.sort(key=lambda c: (c != (0, 0), c))
    return coords


def records_from_coords(coords, kinds=None, amounts=None):
    """One CellRecord per coordinate, neighbors found through AXIAL_DIRECTIONS."""
    index_of = {c: i for i, c in enumerate(coords)}
    kinds = kinds or {}
    amounts = amounts or {}
    records = []
    for i, (q, r) in enumerate(coords):
        neighbors = tuple(index_of.get((q + dq, r + dr), NO_NEIGHBOR) for dq, dr in AXIAL_DIRECTIONS)
        records.append(CellRecord(kind=kinds.get(i, 0), initial_resources=amounts.get(i, 0), neighbors=neighbors))
    return records


@pytest.fixture
def star_records():
    """
    Seven cells: a centre (0) and a ring (1..6) linked to the centre only.

    Ring cell j + 1 sits in direction j of the centre.
    """
    def _make(kinds=None, amounts=None):
        kinds = kinds or {}
        amounts = amounts or {}
        records = [CellRecord(kind=kinds.get(0, 0), initial_resources=amounts.get(0, 0), neighbors=(1, 2, 3, 4, 5, 6))]
        for j in range(6):
            neighbors = [NO_NEIGHBOR] * 6
            neighbors[(j + 3) % 6] = 0
            records.append(
                CellRecord(kind=kinds.get(j + 1, 0), initial_resources=amounts.get(j + 1, 0), neighbors=tuple(neighbors))
            )
        return records

    return _make


@pytest.fixture
def line_records():
    """Cells 0..n-1 laid along direction 0, cell i next to i - 1 and i + 1."""
    def _make(n, kinds=None, amounts=None):
        return records_from_coords([(i, 0) for i in range(n)], kinds, amounts)

    return _make


@pytest.fixture
def hex_board():
    """Hexagon-shaped board of the given radius, cell 0 in the centre."""
    def _make(radius, kinds=None, amounts=None):
        coords = hex_coords(radius)
        return records_from_coords(coords, kinds, amounts), coords

    return _make


@pytest.fixture
def random_boards(num_boards):
    """
    Seeded hex boards with random holes, so some boards split into several
    components. Roughly a third of the cells start with eggs or crystals.
    Yields (seed, grid) pairs.
    """
    def _make():
        boards = []
        for seed in range(num_boards):
            rng = random.Random(seed)
            coords = hex_coords(rng.randint(1, 4))
            keep = [coords[0]] + [c for c in coords[1:] if rng.random() > 0.25]
            kinds, amounts = {}, {}
            for i in range(len(keep)):
                if rng.random() < 0.35:
                    kinds[i] = rng.choice((1, 2))
                    amounts[i] = rng.randint(1, 30)
            records = records_from_coords(keep, kinds, amounts)
            friendly = rng.sample(range(len(keep)), k=min(2, len(keep)))
            boards.append((seed, build_grid(records, friendly, [])))
        return boards

    return _make
