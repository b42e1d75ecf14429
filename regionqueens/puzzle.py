"""Puzzle maps: named region partitions loaded from JSON.

File format
-----------
::

    {
      "maps": {
        "quadrants4": {"name": "Quadrants 4x4", "size": 4, "regions": [[0, 0, 1, 1], ...]},
        ...
      }
    }

``size`` is optional and must match the grid when present. The game-style
keys ``caseNumber`` and ``colorGrid`` are accepted in place of ``size`` and
``regions``. Region labels must be plain integers. Maps whose label count
differs from their size are still loaded; ``check_partition`` warnings are
printed so the caller knows the instance cannot be won.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Union

from .board import Regions
from .utils import check_partition, grid_size


def _first_present(data: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in data:
            return data[key]
    return None


def _is_label(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class Puzzle:
    """A named region partition.

    Equality compares the grid too; the hash only uses ``key`` and ``name``.
    """

    key: str
    name: str
    regions: Regions = field(hash=False)

    @property
    def size(self) -> int:
        return len(self.regions)

    @classmethod
    def from_dict(cls, key: str, data: Mapping[str, Any]) -> "Puzzle":
        if not isinstance(data, Mapping):
            raise ValueError(f"Map '{key}' must be an object, got {type(data).__name__}")
        grid = _first_present(data, "regions", "colorGrid")
        if grid is None:
            raise ValueError(f"Map '{key}' has no 'regions' grid")
        if not isinstance(grid, list) or not all(isinstance(row, list) for row in grid):
            raise ValueError(f"Map '{key}' regions must be a list of rows")
        if not all(_is_label(label) for row in grid for label in row):
            raise ValueError(f"Map '{key}' has non-integer region labels")
        regions = [list(row) for row in grid]
        n = grid_size(regions)
        if n == 0:
            raise ValueError(f"Map '{key}' has an empty regions grid")
        declared = _first_present(data, "size", "caseNumber")
        if declared is not None:
            if not _is_label(declared):
                raise ValueError(f"Map '{key}' has a non-integer size {declared!r}")
            if declared != n:
                raise ValueError(f"Map '{key}' declares size {declared} but its grid is {n}x{n}")
        return cls(key=key, name=str(data.get("name", key)), regions=regions)


def parse_puzzles(payload: Mapping[str, Any]) -> Dict[str, Puzzle]:
    """Build puzzles from the decoded ``{"maps": {...}}`` structure."""
    maps = payload.get("maps") if isinstance(payload, Mapping) else None
    if not isinstance(maps, dict):
        raise ValueError("Puzzle file must contain a 'maps' object")
    puzzles: Dict[str, Puzzle] = {}
    for key, data in maps.items():
        puzzle = Puzzle.from_dict(str(key), data)
        for warning in check_partition(puzzle.regions):
            print(f"Warning: map '{key}': {warning}")
        puzzles[puzzle.key] = puzzle
    return puzzles


def load_puzzles(path: Union[str, "os.PathLike[str]"]) -> Dict[str, Puzzle]:
    """Load every map from a JSON puzzle file."""
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"Puzzle file not found: {file_path}")
    with open(file_path, "r") as f:
        return parse_puzzles(json.load(f))
