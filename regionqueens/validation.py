"""Rule checks for region-queens placements.

A board wins when all of the following hold:

- every row holds exactly one queen;
- every column holds exactly one queen;
- no region label is shared by two or more queens;
- no queen has another queen on one of its four diagonal neighbours.

Regions holding zero queens are not reported by the region rule. With a
partition of exactly N labels the row and column rules already force one
queen per region; callers loading partitions from elsewhere can use
``regionqueens.utils.check_partition`` to guarantee that.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .board import CellState, as_cell_state
from .utils import check_dimensions, diagonal_neighbours, grid_size


@dataclass(frozen=True)
class Violation:
    """A single broken rule.

    ``rule`` is one of ``"row"``, ``"column"``, ``"region"`` or ``"diagonal"``;
    ``location`` is the row index, column index, region label, or the pair of
    queen coordinates involved.
    """

    rule: str
    location: object
    detail: str


def _queen_cells(board: Sequence[Sequence[CellState]]) -> List[Tuple[int, int]]:
    cells: List[Tuple[int, int]] = []
    for r, row in enumerate(board):
        for c, cell in enumerate(row):
            if as_cell_state(cell) is CellState.QUEEN:
                cells.append((r, c))
    return cells


def find_violations(
    board: Sequence[Sequence[CellState]],
    regions: Sequence[Sequence[int]],
) -> List[Violation]:
    """Return every broken rule of ``board`` under ``regions``.

    Raises ``ValueError`` if the grids are not square, differ in size, or the
    board contains values other than ``CellState`` members.
    """
    n = check_dimensions(board, regions)
    queens = _queen_cells(board)
    violations: List[Violation] = []

    row_count: Counter[int] = Counter(r for r, _ in queens)
    col_count: Counter[int] = Counter(c for _, c in queens)
    region_count: Counter[int] = Counter(regions[r][c] for r, c in queens)

    for r in range(n):
        if row_count[r] != 1:
            violations.append(Violation("row", r, f"row {r} has {row_count[r]} queens"))
    for c in range(n):
        if col_count[c] != 1:
            violations.append(Violation("column", c, f"column {c} has {col_count[c]} queens"))
    for label, count in sorted(region_count.items()):
        if count != 1:
            violations.append(Violation("region", label, f"region {label} has {count} queens"))

    occupied = set(queens)
    for r, c in queens:
        for nr, nc in diagonal_neighbours(r, c, n):
            # Report each touching pair once, from its upper cell.
            if (nr, nc) in occupied and nr > r:
                violations.append(
                    Violation("diagonal", ((r, c), (nr, nc)), f"queens at {(r, c)} and {(nr, nc)} touch diagonally")
                )
    return violations


def is_valid_solution(
    board: Sequence[Sequence[CellState]],
    regions: Sequence[Sequence[int]],
) -> bool:
    """Return True if ``board`` is a winning placement for ``regions``.

    An empty ``0 x 0`` board is never a win.
    """
    violations = find_violations(board, regions)
    return len(board) > 0 and not violations


def is_valid_assignment(solution: Optional[Sequence[int]], regions: Sequence[Sequence[int]]) -> bool:
    """Return True if a compact ``solution[row] = column`` is a valid placement.

    Same rules as ``is_valid_solution``, checked directly on the compact form:
    length N, columns within ``[0, N)``, distinct columns, distinct region
    labels and no two consecutive rows whose columns differ by one.
    """
    if solution is None:
        return False
    n = grid_size(regions)
    if n == 0 or len(solution) != n:
        return False
    for column in solution:
        if not isinstance(column, int) or column < 0 or column >= n:
            return False
    if len(set(solution)) != n:
        return False
    if len({regions[row][column] for row, column in enumerate(solution)}) != n:
        return False
    return all(abs(solution[row] - solution[row - 1]) != 1 for row in range(1, n))
