"""Benchmark runners, statistics and report writers."""

from contextlib import redirect_stdout
from pathlib import Path
import csv
import io
import sys
import tempfile
import unittest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from regionqueens.analysis import settings
from regionqueens.analysis.experiments import (
    discover_bt_solvers,
    run_backtracking_experiments,
    run_backtracking_experiments_parallel,
    run_single_bt_experiment,
    select_bt_solvers,
)
from regionqueens.analysis.plots import plot_and_save, raw_runs_frame
from regionqueens.analysis.reporting import save_raw_data_to_csv, save_results_to_csv
from regionqueens.analysis.stats import compute_detailed_statistics, compute_grouped_statistics


def _record(success, timeout, nodes, time):
    return {"n": 4, "run": 0, "seed": 0, "solver": "first", "success": success, "nodes": nodes, "time": time, "timeout": timeout}


class StatisticsTests(unittest.TestCase):

    def test_empty_summary(self):
        summary = compute_detailed_statistics([])
        self.assertEqual(summary["count"], 0)
        self.assertIsNone(summary["mean"])

    def test_summary(self):
        summary = compute_detailed_statistics([1.0, 2.0, 3.0, 4.0])
        self.assertEqual(summary["count"], 4)
        self.assertEqual(summary["mean"], 2.5)
        self.assertEqual(summary["min"], 1.0)
        self.assertEqual(summary["range"], 3.0)

    def test_grouped(self):
        stats = compute_grouped_statistics([
            _record(True, False, 10, 0.1),
            _record(False, True, 50, 1.0),
            _record(False, False, 30, 0.2),
            _record(True, False, 20, 0.3),
        ])
        self.assertEqual(stats["total_runs"], 4)
        self.assertEqual(stats["success_rate"], 0.5)
        self.assertEqual(stats["timeout_rate"], 0.25)
        self.assertEqual(stats["failure_rate"], 0.25)
        self.assertEqual(stats["success_nodes"]["mean"], 15.0)
        self.assertEqual(stats["all_nodes"]["max"], 50.0)
        self.assertEqual(len(stats["raw_runs"]), 4)


class ExperimentTests(unittest.TestCase):

    def test_solver_discovery(self):
        self.assertEqual([label for label, _ in discover_bt_solvers()], ["first", "mcv"])
        self.assertEqual([label for label, _ in select_bt_solvers(["mcv"])], ["mcv"])
        with self.assertRaises(ValueError):
            select_bt_solvers(["lcv"])

    def test_single_run(self):
        record = run_single_bt_experiment((6, 0, 123, "first", 5.0, True))
        self.assertTrue(record["success"])
        self.assertFalse(record["timeout"])
        self.assertEqual(record["solver"], "first")
        self.assertGreater(record["nodes"], 0)

    def test_sequential_runner_and_reports(self):
        results = run_backtracking_experiments([4, 5], runs=2, bt_time_limit=5.0, seed=1, validate=True)
        self.assertEqual(sorted(results), [4, 5])
        for N in (4, 5):
            for label in ("first", "mcv"):
                entry = results[N][label]
                self.assertEqual(entry["total_runs"], 2)
                self.assertEqual(entry["success_rate"], 1.0)

        frame = raw_runs_frame(results, [4, 5])
        self.assertEqual(len(frame), 8)

        previous_mode = settings.CURRENT_PIPELINE_MODE
        settings.CURRENT_PIPELINE_MODE = 'sequential'
        try:
            with tempfile.TemporaryDirectory() as tmp:
                summary = save_results_to_csv(results, [4, 5], tmp)
                raw = save_raw_data_to_csv(results, [4, 5], tmp)
                with open(summary, newline="") as f:
                    rows = list(csv.reader(f))
                self.assertEqual(rows[0][:2], ["n", "solver"])
                self.assertEqual(len(rows), 1 + 4)
                with open(raw, newline="") as f:
                    self.assertEqual(len(list(csv.reader(f))), 1 + 8)
                charts = plot_and_save(results, [4, 5], tmp)
                self.assertTrue(charts)
                for chart in charts:
                    self.assertTrue(Path(chart).exists())
        finally:
            settings.CURRENT_PIPELINE_MODE = previous_mode

    def test_parallel_matches_sequential_outcomes(self):
        sequential = run_backtracking_experiments([6], runs=3, bt_time_limit=5.0, bt_solvers=["first"], seed=2)
        parallel = run_backtracking_experiments_parallel([6], runs=3, bt_time_limit=5.0, bt_solvers=["first"], seed=2, workers=2)
        seq_nodes = [r["nodes"] for r in sequential[6]["first"]["raw_runs"]]
        par_nodes = [r["nodes"] for r in parallel[6]["first"]["raw_runs"]]
        self.assertEqual(seq_nodes, par_nodes)


class ExperimentTimeoutTests(unittest.TestCase):

    def setUp(self):
        self.previous = settings.EXPERIMENT_TIMEOUT
        settings.EXPERIMENT_TIMEOUT = 0.0

    def tearDown(self):
        settings.EXPERIMENT_TIMEOUT = self.previous

    def test_sequential_skips_remaining_runs(self):
        with redirect_stdout(io.StringIO()) as out:
            results = run_backtracking_experiments([6], runs=4, bt_time_limit=5.0, bt_solvers=["first"], seed=3)
        self.assertEqual(results[6]["first"]["total_runs"], 0)
        self.assertIn("Experiment timeout reached for N=6", out.getvalue())

    def test_parallel_skips_remaining_runs(self):
        with redirect_stdout(io.StringIO()) as out:
            results = run_backtracking_experiments_parallel(
                [6], runs=4, bt_time_limit=5.0, bt_solvers=["first"], seed=3, workers=2
            )
        self.assertLess(results[6]["first"]["total_runs"], 4)
        self.assertIn("Experiment timeout reached for N=6", out.getvalue())


if __name__ == "__main__":
    unittest.main()
