"""Conversions between compact solutions and full boards.

A compact solution is a list where ``solution[row] = column``. The helpers in
this module always build fresh grids and never alias or mutate their inputs.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from .board import Board, CellState, as_cell_state, create_empty_board
from .utils import grid_size


def solution_to_board(solution: Optional[Sequence[int]], n: int) -> Board:
    """Expand a compact solution into an ``n x n`` board of queens.

    ``None`` yields an all-EMPTY board. A solution whose length is not ``n``
    or that holds a column outside ``[0, n)`` raises ``ValueError``.
    """
    board = create_empty_board(n)
    if solution is None:
        return board
    if len(solution) != n:
        raise ValueError(f"Solution has {len(solution)} rows, expected {n}")
    for row, column in enumerate(solution):
        if not 0 <= column < n:
            raise ValueError(f"Column {column} of row {row} is outside the board")
        board[row][column] = CellState.QUEEN
    return board


def board_to_solution(board: Sequence[Sequence[CellState]]) -> Optional[List[int]]:
    """Collapse a board back to ``solution[row] = column``.

    Returns ``None`` unless every row holds exactly one queen.
    """
    grid_size(board)
    solution: List[int] = []
    for row in board:
        columns = [c for c, cell in enumerate(row) if as_cell_state(cell) is CellState.QUEEN]
        if len(columns) != 1:
            return None
        solution.append(columns[0])
    return solution


def generate_solution_with_marks(solution_board: Sequence[Sequence[CellState]]) -> Board:
    """Return a copy of ``solution_board`` where every non-queen cell is MARKED."""
    grid_size(solution_board)
    return [
        [CellState.QUEEN if as_cell_state(cell) is CellState.QUEEN else CellState.MARKED for cell in row]
        for row in solution_board
    ]
