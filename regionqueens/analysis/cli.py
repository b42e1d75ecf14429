"""Command-line interface for region-queens puzzles and solver benchmarks.

This module wires together configuration loading, puzzle maps, the solver and
validator, and the benchmark pipelines (sequential or parallel). It isolates
I/O, argument parsing, and progress reporting from the core algorithmic
modules so that the rest of the codebase remains easy to test programmatically.
"""
from __future__ import annotations

import argparse
import os
import random
from pathlib import Path
from time import perf_counter
from typing import Dict, List, Optional, Tuple

from . import settings
from .experiments import (
    discover_bt_solvers,
    run_backtracking_experiments,
    run_backtracking_experiments_parallel,
)
from .instances import generate_regions
from .plots import plot_and_save
from .reporting import save_raw_data_to_csv, save_results_to_csv
from config_manager import ConfigManager
from regionqueens.backtracking import solve
from regionqueens.board import format_board, format_regions, parse_board
from regionqueens.puzzle import Puzzle, load_puzzles, parse_puzzles
from regionqueens.solution import generate_solution_with_marks, solution_to_board
from regionqueens.validation import find_violations, is_valid_solution


# ------------- Utils --------------------------------------------------------

def parse_solver_filters(solver_args: Optional[List[str]]) -> Optional[List[str]]:
    """Normalize solver filter CLI inputs into a flat list of labels.

    Accepts repeated flags (e.g., ``-s first -s mcv``) and comma-separated
    lists (e.g., ``-s first,mcv``). Returns ``None`` when no filter is given.
    """
    if not solver_args:
        return None
    selected: List[str] = []
    for entry in solver_args:
        for token in entry.split(","):
            token = token.strip().lower()
            if token:
                selected.append(token)
    unique = list(dict.fromkeys(selected))  # preserve order, remove dups
    return unique or None


def apply_configuration(config_path: str, solver_filter: Optional[List[str]] = None) -> Tuple[ConfigManager, List[str]]:
    """Load configuration and apply optional solver filtering.

    Updates the global ``settings`` module in-place from ``config.json`` (or a
    user-specified path) and returns the ``ConfigManager`` used together with
    the selected solver labels.
    """
    config_mgr = ConfigManager(config_path)

    experiment_settings = config_mgr.get_experiment_settings()
    if experiment_settings:
        settings.N_VALUES = [int(n) for n in experiment_settings.get("N_values", settings.N_VALUES)]
        settings.RUNS_BT_FINAL = int(experiment_settings.get("runs_bt_final", settings.RUNS_BT_FINAL))
        settings.SEED = int(experiment_settings.get("seed", settings.SEED))
        settings.OUT_DIR = experiment_settings.get("output_dir", settings.OUT_DIR)

    timeout_settings = config_mgr.get_timeout_settings()
    if timeout_settings:
        settings.set_timeouts(
            bt_timeout=timeout_settings.get("bt_time_limit", settings.BT_TIME_LIMIT),
            experiment_timeout=timeout_settings.get("experiment_timeout", settings.EXPERIMENT_TIMEOUT),
        )

    available = [label for label, _ in discover_bt_solvers()]
    configured = [label.lower() for label in config_mgr.get_solver_labels()] or available
    unknown = set(configured).difference(available)
    if unknown:
        raise ValueError("Unknown BT solvers in configuration: " + ", ".join(sorted(unknown)))

    if solver_filter:
        requested = set(solver_filter)
        unknown = requested.difference(available)
        if unknown:
            raise ValueError("Unknown BT solvers requested: " + ", ".join(sorted(unknown)))
        selected = [label for label in available if label in requested]
    else:
        selected = configured

    if not selected:
        raise ValueError("No solvers selected after applying filters.")

    settings.BT_SOLVERS = selected
    return config_mgr, selected


def load_maps(config_mgr: ConfigManager, puzzle_path: Optional[str] = None) -> Dict[str, Puzzle]:
    """Return puzzle maps from ``puzzle_path`` or, by default, the configuration."""
    if puzzle_path:
        return load_puzzles(puzzle_path)
    return parse_puzzles(config_mgr.get_maps())


def select_map(puzzles: Dict[str, Puzzle], key: Optional[str]) -> Puzzle:
    """Pick a map by key; the first map when ``key`` is None."""
    if not puzzles:
        raise ValueError("No puzzle maps available.")
    if key is None:
        return next(iter(puzzles.values()))
    if key not in puzzles:
        raise ValueError(f"Unknown map '{key}'. Available: " + ", ".join(puzzles))
    return puzzles[key]


# ------------- Puzzle commands ---------------------------------------------

def solve_map(puzzle: Puzzle) -> bool:
    """Solve one map and print the revealed board with deduced marks."""
    print(f"Map '{puzzle.key}' ({puzzle.name}), N = {puzzle.size}")
    print(format_regions(puzzle.regions))
    start = perf_counter()
    solution = solve(puzzle.size, puzzle.regions)
    elapsed = perf_counter() - start
    if solution is None:
        print(f"No solution found ({elapsed:.4f}s).")
        return False
    board = generate_solution_with_marks(solution_to_board(solution, puzzle.size))
    print(f"Solution {solution} found in {elapsed:.4f}s:")
    print(format_board(board))
    return True


def check_board(puzzle: Puzzle, board_path: str) -> bool:
    """Validate a text board against a map and print every broken rule."""
    path = Path(board_path)
    if not path.exists():
        raise FileNotFoundError(f"Board file not found: {path}")
    board = parse_board(path.read_text())
    violations = find_violations(board, puzzle.regions)
    if not violations:
        print(f"Board solves map '{puzzle.key}'.")
        return True
    print(f"Board does not solve map '{puzzle.key}':")
    for violation in violations:
        print(f"  - [{violation.rule}] {violation.detail}")
    return False


# ------------- Benchmark pipelines -----------------------------------------

def _save_outputs(results, N_values: List[int]) -> None:
    print("Generating charts and CSV reports...")
    save_results_to_csv(results, N_values, settings.OUT_DIR)
    save_raw_data_to_csv(results, N_values, settings.OUT_DIR)
    plot_and_save(results, N_values, settings.OUT_DIR)


def main_sequential(solvers: List[str], validate: bool = False) -> None:
    """Run the benchmark one instance at a time and write reports."""
    settings.CURRENT_PIPELINE_MODE = 'sequential'
    start = perf_counter()
    results = run_backtracking_experiments(
        settings.N_VALUES,
        settings.RUNS_BT_FINAL,
        settings.BT_TIME_LIMIT,
        bt_solvers=solvers,
        seed=settings.SEED,
        progress_label="BT sequential",
        validate=validate,
    )
    _save_outputs(results, settings.N_VALUES)
    total_time = perf_counter() - start
    print("\nSequential pipeline completed.")
    print(f"Total time: {total_time:.1f}s")


def main_parallel(solvers: List[str], validate: bool = False) -> None:
    """Run the benchmark on a process pool and write reports."""
    settings.CURRENT_PIPELINE_MODE = 'parallel'
    print(f"\nStarting parallel pipeline with {settings.NUM_PROCESSES} worker processes")
    print(f"Available CPU cores: {os.cpu_count()}")
    print(f"   - BT: {settings.BT_TIME_LIMIT}s" if settings.BT_TIME_LIMIT else "   - BT: unlimited")
    start = perf_counter()
    results = run_backtracking_experiments_parallel(
        settings.N_VALUES,
        settings.RUNS_BT_FINAL,
        settings.BT_TIME_LIMIT,
        bt_solvers=solvers,
        seed=settings.SEED,
        progress_label="BT parallel",
        validate=validate,
    )
    _save_outputs(results, settings.N_VALUES)
    total_time = perf_counter() - start
    print("\nParallel pipeline completed!")
    print(f"Total time: {total_time:.1f}s ({total_time/60:.1f} minutes)")
    print(f"Worker processes used: {settings.NUM_PROCESSES}")


def run_quick_regression_tests() -> None:
    """Check every solver on fixed and random instances; raise on mismatch."""
    print("Running quick regression tests across all solvers...")

    quadrants = [[0, 0, 1, 1], [0, 0, 1, 1], [2, 2, 3, 3], [2, 2, 3, 3]]
    solution = solve(4, quadrants)
    if solution != [1, 3, 0, 2]:
        raise AssertionError(f"Unexpected first solution on quadrants: {solution}")
    if not is_valid_solution(solution_to_board(solution, 4), quadrants):
        raise AssertionError("Expanded quadrants solution is not a valid board")
    print(f"  Quadrants 4x4: {solution}")

    if solve(4, [[0, 0, 1, 1], [0, 0, 1, 1], [2, 2, 2, 2], [2, 2, 2, 2]]) is not None:
        raise AssertionError("A partition with three labels must have no solution")

    rng = random.Random(settings.SEED)
    regions = generate_regions(8, rng)
    for name, fn in discover_bt_solvers():
        sol, nodes, elapsed = fn(8, regions, time_limit=5.0)
        if sol is None:
            raise AssertionError(f"Solver {name} failed on a generated N=8 instance")
        if not is_valid_solution(solution_to_board(sol, 8), regions):
            raise AssertionError(f"Solver {name} returned an invalid board: {sol}")
        print(f"  [BT] {name}: solution found, nodes={nodes}, time={elapsed:.4f}s")

    print("Quick regression tests passed.")


def build_arg_parser():
    """Construct the argument parser for the CLI entry point."""
    parser = argparse.ArgumentParser(description="Solve region-queens puzzles and benchmark the backtracking solvers.")
    parser.add_argument(
        "--mode",
        choices=["sequential", "parallel"],
        default="parallel",
        help="Benchmark execution mode (default: parallel).",
    )
    parser.add_argument(
        "--solver",
        "-s",
        action="append",
        help="Filter BT solvers to benchmark: first, mcv (comma-separated or multiple flags). Default: configured list.",
    )
    parser.add_argument("--config", default="config.json", help="Path to configuration file (default: config.json).")
    parser.add_argument("--quick-test", action="store_true", help="Run quick regression tests and exit.")
    parser.add_argument("--validate", action="store_true", help="Validate every solver result during the benchmark.")
    parser.add_argument("--puzzle", help="JSON puzzle file with a 'maps' object (default: maps from the configuration).")
    parser.add_argument("--map", dest="map_key", help="Map key to use with --solve or --check (default: first map).")
    parser.add_argument("--solve", action="store_true", help="Solve the selected map and print the marked solution.")
    parser.add_argument("--check", metavar="BOARD_FILE", help="Validate a text board (Q . x symbols) against the selected map.")
    parser.add_argument("--list-maps", action="store_true", help="List the available maps and exit.")
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """CLI entry point: parse arguments and dispatch to the chosen action."""
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    solver_filter = parse_solver_filters(args.solver)

    if args.quick_test:
        run_quick_regression_tests()
        return

    try:
        config_mgr, selected = apply_configuration(args.config, solver_filter)
    except FileNotFoundError as exc:
        print(f"Configuration file not found: {exc}")
        raise SystemExit(1) from exc
    except ValueError as exc:
        print(f"Configuration error: {exc}")
        raise SystemExit(1) from exc

    if args.list_maps or args.solve or args.check:
        try:
            puzzles = load_maps(config_mgr, args.puzzle)
            if args.list_maps:
                for key, puzzle in puzzles.items():
                    print(f"{key}: {puzzle.name} ({puzzle.size}x{puzzle.size})")
                return
            puzzle = select_map(puzzles, args.map_key)
            ok = solve_map(puzzle) if args.solve else check_board(puzzle, args.check)
        except (FileNotFoundError, ValueError) as exc:
            print(f"Puzzle error: {exc}")
            raise SystemExit(1) from exc
        if not ok:
            raise SystemExit(2)
        return

    print(f"Selected solvers: {selected}")
    try:
        if args.mode == "sequential":
            main_sequential(selected, validate=args.validate)
        else:
            main_parallel(selected, validate=args.validate)
    except KeyboardInterrupt:
        print("\nExecution interrupted by user. Cleaning up workers...")
        raise SystemExit(130) from None
    except ValueError as exc:
        print(f"Execution error: {exc}")
        raise SystemExit(1) from exc


if __name__ == "__main__":
    main()
