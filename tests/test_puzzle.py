"""Loading puzzle maps from JSON."""

from pathlib import Path
import json
import sys
import tempfile
import unittest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from config_manager import ConfigManager
from regionqueens.backtracking import solve
from regionqueens.puzzle import Puzzle, load_puzzles, parse_puzzles
from regionqueens.solution import solution_to_board
from regionqueens.validation import is_valid_solution


class PuzzleTests(unittest.TestCase):

    def test_from_dict(self):
        puzzle = Puzzle.from_dict("q", {"name": "Quadrants", "size": 2, "regions": [[0, 0], [1, 1]]})
        self.assertEqual(puzzle.key, "q")
        self.assertEqual(puzzle.name, "Quadrants")
        self.assertEqual(puzzle.size, 2)

    def test_name_defaults_to_key(self):
        self.assertEqual(Puzzle.from_dict("k", {"regions": [[0]]}).name, "k")

    def test_invalid_entries(self):
        with self.assertRaises(ValueError):
            Puzzle.from_dict("a", {"name": "no grid"})
        with self.assertRaises(ValueError):
            Puzzle.from_dict("b", {"size": 3, "regions": [[0, 0], [1, 1]]})
        with self.assertRaises(ValueError):
            Puzzle.from_dict("c", {"regions": [[0, 0], [1]]})
        with self.assertRaises(ValueError):
            Puzzle.from_dict("d", {"regions": [["x"]]})
        with self.assertRaises(ValueError):
            Puzzle.from_dict("e", {"regions": []})

    def test_labels_must_be_integers(self):
        with self.assertRaises(ValueError):
            Puzzle.from_dict("f", {"regions": [[0.2, 0.7], [1.5, 1.9]]})
        with self.assertRaises(ValueError):
            Puzzle.from_dict("g", {"regions": [[True, False], [False, True]]})

    def test_malformed_entries_raise_value_error(self):
        with self.assertRaises(ValueError):
            parse_puzzles({"maps": {"k": 5}})
        with self.assertRaises(ValueError):
            Puzzle.from_dict("h", {"size": [4], "regions": [[0]]})
        with self.assertRaises(ValueError):
            Puzzle.from_dict("i", {"regions": [0, 1]})
        with self.assertRaises(ValueError):
            parse_puzzles([{"regions": [[0]]}])

    def test_game_style_keys(self):
        puzzle = Puzzle.from_dict("g4", {"caseNumber": 4, "colorGrid": [[0, 0, 1, 1], [0, 0, 1, 1], [2, 2, 3, 3], [2, 2, 3, 3]]})
        self.assertEqual(puzzle.size, 4)
        self.assertEqual(solve(puzzle.size, puzzle.regions), [1, 3, 0, 2])
        with self.assertRaises(ValueError):
            Puzzle.from_dict("g2", {"caseNumber": 3, "colorGrid": [[0, 0], [1, 1]]})

    def test_hashable(self):
        a = Puzzle.from_dict("q", {"regions": [[0, 0], [1, 1]]})
        b = Puzzle.from_dict("q", {"regions": [[0, 0], [1, 1]]})
        self.assertEqual(a, b)
        self.assertEqual(hash(a), hash(b))
        self.assertEqual(len({a, b}), 1)

    def test_parse_requires_maps(self):
        with self.assertRaises(ValueError):
            parse_puzzles({"regions": [[0]]})

    def test_load_file(self):
        payload = {"maps": {"one": {"name": "One", "regions": [[0]]}, "two": {"regions": [[0, 1], [0, 1]]}}}
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "maps.json"
            path.write_text(json.dumps(payload))
            puzzles = load_puzzles(path)
        self.assertEqual(list(puzzles), ["one", "two"])
        self.assertEqual(puzzles["two"].regions, [[0, 1], [0, 1]])

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            load_puzzles(ROOT / "does-not-exist.json")

    def test_bundled_maps_are_solvable(self):
        puzzles = parse_puzzles(ConfigManager(ROOT / "config.json").get_maps())
        self.assertIn("quadrants4", puzzles)
        for key, puzzle in puzzles.items():
            with self.subTest(map=key):
                solution = solve(puzzle.size, puzzle.regions)
                self.assertIsNotNone(solution)
                self.assertTrue(is_valid_solution(solution_to_board(solution, puzzle.size), puzzle.regions))


if __name__ == "__main__":
    unittest.main()
