"""Cell states, text codec and grid primitives."""

from pathlib import Path
import sys
import unittest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from regionqueens.board import (
    CellState,
    as_cell_state,
    create_empty_board,
    format_board,
    format_regions,
    parse_board,
)
from regionqueens.utils import (
    check_dimensions,
    check_partition,
    diagonal_neighbours,
    grid_size,
    region_labels,
)

E, Q, M = CellState.EMPTY, CellState.QUEEN, CellState.MARKED


class CellStateTests(unittest.TestCase):

    def test_symbols(self):
        self.assertIs(CellState.from_symbol("."), E)
        self.assertIs(CellState.from_symbol("_"), E)
        self.assertIs(CellState.from_symbol("q"), Q)
        self.assertIs(CellState.from_symbol("X"), M)
        self.assertEqual(Q.symbol, "Q")

    def test_unknown_symbol(self):
        with self.assertRaises(ValueError):
            CellState.from_symbol("#")

    def test_as_cell_state(self):
        self.assertIs(as_cell_state(M), M)
        with self.assertRaises(ValueError):
            as_cell_state("x")
        with self.assertRaises(ValueError):
            as_cell_state(1)


class BoardTextTests(unittest.TestCase):

    def test_parse_spaced_and_packed(self):
        expected = [[Q, E], [M, E]]
        self.assertEqual(parse_board("Q .\nx .\n"), expected)
        self.assertEqual(parse_board("\nQ.\nx.\n\n"), expected)

    def test_parse_rejects_non_square(self):
        with self.assertRaises(ValueError):
            parse_board("Q . .\nx .\n")

    def test_format_round_trip(self):
        board = [[E, Q, M], [Q, E, E], [M, M, Q]]
        text = format_board(board)
        self.assertEqual(text, ". Q x\nQ . .\nx x Q")
        self.assertEqual(parse_board(text), board)

    def test_format_regions_alignment(self):
        self.assertEqual(format_regions([[0, 10], [3, 4]]), " 0 10\n 3  4")

    def test_create_empty_board(self):
        self.assertEqual(create_empty_board(0), [])
        self.assertEqual(create_empty_board(2), [[E, E], [E, E]])
        with self.assertRaises(ValueError):
            create_empty_board(-1)


class GridPrimitiveTests(unittest.TestCase):

    def test_grid_size(self):
        self.assertEqual(grid_size([]), 0)
        self.assertEqual(grid_size([[1, 2], [3, 4]]), 2)
        with self.assertRaises(ValueError):
            grid_size([[1, 2, 3], [4, 5, 6]])

    def test_check_dimensions(self):
        self.assertEqual(check_dimensions([[E]], [[0]]), 1)
        with self.assertRaises(ValueError):
            check_dimensions([[E]], [[0, 0], [1, 1]])

    def test_diagonal_neighbours(self):
        self.assertEqual(diagonal_neighbours(0, 0, 3), [(1, 1)])
        self.assertEqual(sorted(diagonal_neighbours(1, 1, 3)), [(0, 0), (0, 2), (2, 0), (2, 2)])
        self.assertEqual(diagonal_neighbours(0, 0, 1), [])

    def test_region_labels(self):
        self.assertEqual(region_labels([[0, 0], [5, 0]]), {0: 3, 5: 1})

    def test_check_partition(self):
        self.assertEqual(check_partition([[0, 0], [1, 1]]), [])
        warnings = check_partition([[0, 0, 0], [1, 1, 1], [1, 1, 1]])
        self.assertEqual(len(warnings), 1)
        self.assertIn("2 distinct region labels", warnings[0])


if __name__ == "__main__":
    unittest.main()
