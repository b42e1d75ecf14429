"""Cell states and square-grid helpers for region-queens boards.

Representation
--------------
A board is a list of rows, ``board[row][column]``, each cell holding a
``CellState``. A region partition uses the same shape with integer labels.
Both are treated as read-only snapshots: every helper here returns a fresh
grid instead of mutating its argument.
"""

from __future__ import annotations

from enum import Enum
from typing import List, Sequence

from .utils import grid_size


class CellState(Enum):
    """State of a single cell; exactly one holds at any time."""

    EMPTY = "."
    QUEEN = "Q"
    MARKED = "x"

    @property
    def symbol(self) -> str:
        return self.value

    @classmethod
    def from_symbol(cls, symbol: str) -> "CellState":
        """Parse a one-character symbol (``.``, ``Q``, ``x``).

        ``_`` and ``-`` are accepted as empty cells; ``q`` and ``X`` are
        accepted case-insensitively.
        """
        token = symbol.strip()
        if token in (".", "_", "-"):
            return cls.EMPTY
        if token.upper() == "Q":
            return cls.QUEEN
        if token.lower() == "x":
            return cls.MARKED
        raise ValueError(f"Unknown cell symbol: {symbol!r}")


Board = List[List[CellState]]
Regions = List[List[int]]


def as_cell_state(value: object) -> CellState:
    """Return ``value`` unchanged when it is a ``CellState``, else raise."""
    if isinstance(value, CellState):
        return value
    raise ValueError(f"Not a cell state: {value!r}")


def create_empty_board(size: int) -> Board:
    """Build a fresh ``size x size`` board with every cell EMPTY."""
    if size < 0:
        raise ValueError(f"Board size must be non-negative, got {size}")
    return [[CellState.EMPTY for _ in range(size)] for _ in range(size)]


def parse_board(text: str) -> Board:
    """Parse a textual board, one row per non-blank line.

    Cells may be separated by whitespace (``Q . x``) or packed (``Q.x``).
    The result must be square.
    """
    board: Board = []
    for line in text.splitlines():
        line = line.strip()
        if not line:
            continue
        tokens = line.split() if " " in line or "\t" in line else list(line)
        board.append([CellState.from_symbol(token) for token in tokens])
    grid_size(board)
    return board


def format_board(board: Sequence[Sequence[CellState]]) -> str:
    """Render a board as space-separated symbols, one row per line."""
    return "\n".join(" ".join(as_cell_state(cell).symbol for cell in row) for row in board)


def format_regions(regions: Sequence[Sequence[int]]) -> str:
    """Render region labels right-aligned to the widest label."""
    width = max((len(str(label)) for row in regions for label in row), default=1)
    return "\n".join(" ".join(f"{label:>{width}}" for label in row) for row in regions)
