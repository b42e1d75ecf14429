"""Quick regression tests for the region-queens solvers."""

from pathlib import Path
import sys
import unittest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from regionqueens.analysis import cli


class QuickRegressionTests(unittest.TestCase):
    """Verify that the lightweight regression checks pass."""

    def test_solvers_on_fixed_and_generated_instances(self):
        """Ensure every BT solver succeeds on the bundled checks."""
        cli.run_quick_regression_tests()


if __name__ == "__main__":
    unittest.main()
