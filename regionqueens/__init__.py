"""Region-queens validation and backtracking solvers."""

from .backtracking import bt_regions_first, bt_regions_mcv, solve
from .board import CellState, create_empty_board, format_board, parse_board
from .solution import board_to_solution, generate_solution_with_marks, solution_to_board
from .validation import Violation, find_violations, is_valid_assignment, is_valid_solution

__all__ = [
    "solve",
    "bt_regions_first",
    "bt_regions_mcv",
    "CellState",
    "create_empty_board",
    "format_board",
    "parse_board",
    "solution_to_board",
    "board_to_solution",
    "generate_solution_with_marks",
    "Violation",
    "find_violations",
    "is_valid_solution",
    "is_valid_assignment",
]
