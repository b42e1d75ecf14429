"""Low-level grid primitives shared by the validator, solver and adapters.

Grids are encoded as lists of rows (``grid[row][column]``); every public
operation of the package works on square grids only.
"""

from __future__ import annotations

from collections import Counter
from typing import Any, List, Sequence, Tuple

# Row/column deltas of the four diagonal neighbours of a cell.
DIAGONAL_OFFSETS: Tuple[Tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))


def grid_size(grid: Sequence[Sequence[Any]]) -> int:
    """Return N for a square ``N x N`` grid.

    Raises ``ValueError`` when any row length differs from the number of rows.
    """
    n = len(grid)
    for index, row in enumerate(grid):
        if len(row) != n:
            raise ValueError(f"Grid is not square: row {index} has {len(row)} cells, expected {n}")
    return n


def check_dimensions(board: Sequence[Sequence[Any]], regions: Sequence[Sequence[Any]]) -> int:
    """Ensure board and region partition are square and of equal size."""
    n = grid_size(board)
    m = grid_size(regions)
    if n != m:
        raise ValueError(f"Board is {n}x{n} but regions grid is {m}x{m}")
    return n


def diagonal_neighbours(row: int, column: int, size: int) -> List[Tuple[int, int]]:
    """Return the in-bounds diagonal neighbours of ``(row, column)``."""
    neighbours: List[Tuple[int, int]] = []
    for d_row, d_col in DIAGONAL_OFFSETS:
        r, c = row + d_row, column + d_col
        if 0 <= r < size and 0 <= c < size:
            neighbours.append((r, c))
    return neighbours


def region_labels(regions: Sequence[Sequence[int]]) -> Counter[int]:
    """Count cells per region label."""
    counts: Counter[int] = Counter()
    for row in regions:
        counts.update(row)
    return counts


def check_partition(regions: Sequence[Sequence[int]]) -> List[str]:
    """Describe problems that make a partition unsuitable for play.

    Only the label count is checked: a solvable instance needs exactly N
    distinct labels. An empty list means no problem was found.
    """
    n = grid_size(regions)
    distinct = len(region_labels(regions))
    warnings: List[str] = []
    if distinct != n:
        warnings.append(f"partition has {distinct} distinct region labels, expected {n}")
    return warnings
