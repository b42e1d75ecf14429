"""Backtracking solvers for region-queens puzzles.

Rows are the variables and columns their values. A partial assignment is
extended only with cells that satisfy three local constraints:

- the column is not used by another row,
- the region label of the cell is not used by another row,
- the column does not differ by exactly one from the column chosen in a
  vertically adjacent row (diagonal touching can only happen between
  neighbouring rows, so this is the full adjacency rule).

Entry points
------------
- solve(n, regions): the plain search; returns the compact solution or None.
- bt_regions_first(size, regions, time_limit=None): the same search, iterative,
    rows in order 0..N-1 and columns left to right, reporting search effort.
- bt_regions_mcv(size, regions, time_limit=None): Most Constrained Variable
    ordering (row with the fewest legal columns first).

The instrumented functions return ``(solution, nodes_explored, elapsed_seconds)``
where ``solution[row] = column`` or ``None`` when the search failed or hit
``time_limit``. ``nodes_explored`` counts candidate cells examined.

All search state (positions, used columns, used regions, decision stack) is
created per call, so the functions are reentrant and safe to run from several
threads or processes at once.
"""

from __future__ import annotations

from dataclasses import dataclass
from time import perf_counter
from typing import Callable, List, Optional, Sequence, Set, Tuple

from .utils import grid_size

SearchResult = Tuple[Optional[List[int]], int, float]


def _check_instance(size: int, regions: Sequence[Sequence[int]]) -> None:
    if size < 1:
        raise ValueError(f"Board size must be >= 1, got {size}")
    n = grid_size(regions)
    if n != size:
        raise ValueError(f"Regions grid is {n}x{n} but size is {size}")


def bt_regions_first(
    size: int,
    regions: Sequence[Sequence[int]],
    time_limit: Optional[float] = None,
) -> SearchResult:
    """Find the first solution via plain iterative backtracking.

    Parameters
    ----------
    size : int
        Board dimension N (N >= 1).
    regions : grid of int
        ``regions[row][column]`` region label, ``size x size``.
    time_limit : float | None
        Optional wall-clock time limit in seconds.

    Returns
    -------
    (solution, nodes_explored, elapsed_seconds)

    Determinism and ordering
    ------------------------
    Rows are assigned in order 0..N-1 and columns are tried 0..N-1, so the
    returned solution is the lexicographically first one.
    """
    _check_instance(size, regions)

    # positions[row] = column; -1 means the row is still unassigned.
    positions = [-1] * size
    column_used = [False] * size
    region_used: Set[int] = set()

    row = 0
    column = 0
    explored = 0
    start = perf_counter()

    while 0 <= row < size:
        if time_limit is not None and (perf_counter() - start) > time_limit:
            return None, explored, perf_counter() - start

        placed = False
        while column < size and not placed:
            explored += 1
            region = regions[row][column]
            if (
                column_used[column]
                or region in region_used
                or (row > 0 and abs(column - positions[row - 1]) == 1)
            ):
                column += 1
                continue

            positions[row] = column
            column_used[column] = True
            region_used.add(region)
            placed = True
            if row == size - 1:
                return positions.copy(), explored, perf_counter() - start
            row += 1
            column = 0

        if not placed:
            # Exhausted this row; undo the previous row and resume after its column.
            row -= 1
            if row >= 0:
                previous = positions[row]
                positions[row] = -1
                column_used[previous] = False
                region_used.discard(regions[row][previous])
                column = previous + 1

    return None, explored, perf_counter() - start


@dataclass
class _Frame:
    """Mutable stack frame capturing the state at a decision level."""

    row: int
    candidates: List[int]
    next_index: int = 0


def _is_free(
    row: int,
    column: int,
    regions: Sequence[Sequence[int]],
    positions: List[int],
    column_used: List[bool],
    region_used: Set[int],
) -> bool:
    if column_used[column] or regions[row][column] in region_used:
        return False
    for neighbour in (row - 1, row + 1):
        if 0 <= neighbour < len(positions):
            other = positions[neighbour]
            if other != -1 and abs(other - column) == 1:
                return False
    return True


def _available_columns(
    size: int,
    row: int,
    regions: Sequence[Sequence[int]],
    positions: List[int],
    column_used: List[bool],
    region_used: Set[int],
) -> List[int]:
    """Columns currently legal for ``row``, in ascending order."""
    return [
        column
        for column in range(size)
        if _is_free(row, column, regions, positions, column_used, region_used)
    ]


def _iterative_backtracking(
    size: int,
    regions: Sequence[Sequence[int]],
    select_row: Callable[[List[int], List[int], List[bool], Set[int]], Tuple[Optional[int], List[int]]],
    time_limit: Optional[float] = None,
) -> SearchResult:
    """Generic non-recursive backtracking with pluggable row ordering.

    ``select_row(unassigned, positions, column_used, region_used)`` returns
    ``(row, candidates)``: the next row to assign and its columns in the
    order to try. An empty candidate list forces a backtrack.
    """
    positions = [-1] * size
    column_used = [False] * size
    region_used: Set[int] = set()
    unassigned = list(range(size))
    stack: List[_Frame] = []
    explored = 0
    start = perf_counter()

    row, candidates = select_row(unassigned, positions, column_used, region_used)
    if row is None or not candidates:
        return None, explored, perf_counter() - start
    stack.append(_Frame(row, candidates))
    unassigned.remove(row)

    while stack:
        if time_limit is not None and (perf_counter() - start) > time_limit:
            return None, explored, perf_counter() - start

        frame = stack[-1]
        row = frame.row

        if positions[row] != -1:
            # Remove the previous assignment for this row before trying a new column.
            column = positions[row]
            positions[row] = -1
            column_used[column] = False
            region_used.discard(regions[row][column])

        if frame.next_index >= len(frame.candidates):
            # All candidate columns failed; backtrack to the previous decision.
            stack.pop()
            unassigned.append(row)
            continue

        column = frame.candidates[frame.next_index]
        frame.next_index += 1
        explored += 1

        if not _is_free(row, column, regions, positions, column_used, region_used):
            continue

        positions[row] = column
        column_used[column] = True
        region_used.add(regions[row][column])

        if not unassigned:
            return positions.copy(), explored, perf_counter() - start

        next_row, next_candidates = select_row(unassigned, positions, column_used, region_used)
        if next_row is None:
            return positions.copy(), explored, perf_counter() - start
        if not next_candidates:
            continue

        stack.append(_Frame(next_row, next_candidates))
        unassigned.remove(next_row)

    return None, explored, perf_counter() - start


def bt_regions_mcv(
    size: int,
    regions: Sequence[Sequence[int]],
    time_limit: Optional[float] = None,
) -> SearchResult:
    """Backtracking using the Most Constrained Variable (MCV) heuristic.

    The next row is the unassigned one with the fewest legal columns, ties
    broken by the smallest row index; columns are tried in ascending order.
    Deterministic, but the solution found may differ from
    ``bt_regions_first``.
    """
    _check_instance(size, regions)

    def select_row(
        unassigned: List[int],
        positions: List[int],
        column_used: List[bool],
        region_used: Set[int],
    ) -> Tuple[Optional[int], List[int]]:
        best_row: Optional[int] = None
        best_candidates: List[int] = []
        min_candidates = size + 1

        for row in sorted(unassigned):
            candidates = _available_columns(size, row, regions, positions, column_used, region_used)
            if not candidates:
                # Immediate dead-end for this row; force a quick backtrack.
                return row, []
            if len(candidates) < min_candidates:
                best_row = row
                best_candidates = candidates
                min_candidates = len(candidates)
                if min_candidates == 1:
                    break

        return best_row, best_candidates

    return _iterative_backtracking(size, regions, select_row, time_limit)


def solve(n: int, regions: Sequence[Sequence[int]]) -> Optional[List[int]]:
    """Return the first valid ``solution[row] = column`` for ``regions``.

    Returns ``None`` when the partition admits no placement. Raises
    ``ValueError`` if ``n < 1`` or ``regions`` is not an ``n x n`` grid.
    """
    solution, _, _ = bt_regions_first(n, regions)
    return solution
