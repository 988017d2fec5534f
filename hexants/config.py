"""Planner tunables and their JSON overrides."""
from __future__ import annotations

import json
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class PlannerParams:
    # Mode threshold is round(cell_count ** threshold_exponent).
    threshold_exponent: float = 1.0 / 3.0
    # Egg value of a cell is amount // (friendly_distance + egg_distance_offset).
    egg_distance_offset: int = 1
    beacon_strength: int = 1
    # Per-cell cap on partial paths kept by extend_path in a single layer.
    max_paths_per_cell: int = 4
    # Score to reach; None means a majority of the initial crystal stock.
    target_goal: Optional[int] = None

    def __post_init__(self):
        if self.egg_distance_offset <= 0:
            raise ValueError("egg_distance_offset must be positive")
        if self.beacon_strength <= 0:
            raise ValueError("beacon_strength must be positive")
        if self.max_paths_per_cell <= 0:
            raise ValueError("max_paths_per_cell must be positive")

    @staticmethod
    def from_overrides(overrides: Dict[str, Any]) -> "PlannerParams":
        known = {f.name for f in fields(PlannerParams)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise SystemExit(f"Unknown parameter(s): {', '.join(unknown)}")
        return PlannerParams(**overrides)

    @staticmethod
    def load(inline: Optional[str] = None, path: Optional[str] = None) -> "PlannerParams":
        """
        Build params from an inline JSON object or a JSON file, at most one of them.
        Neither source gives the defaults.
        """
        if inline and path:
            raise SystemExit("Use only one of --params or --params-file")
        if path:
            source, text = path, Path(path).read_text(encoding="utf-8")
        elif inline:
            source, text = "--params", inline
        else:
            return PlannerParams()

        try:
            overrides = json.loads(text)
        except json.JSONDecodeError as e:
            raise SystemExit(f"{source}: invalid JSON ({e.msg} at line {e.lineno})") from e
        if not isinstance(overrides, dict):
            raise SystemExit(f"{source}: expected a JSON object of parameter overrides")
        return PlannerParams.from_overrides(overrides)


DEFAULT_PARAMS: Dict[str, Any] = asdict(PlannerParams())
