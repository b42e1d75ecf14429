"""Benchmark runners for the backtracking solvers (sequential and parallel).

For each board size N, ``runs`` random instances are generated from
reproducible seeds and every selected solver is run on each of them.
Outputs are structured dictionaries suitable for CSV export and plotting.
An optional validation hook checks every reported solution.
"""
from __future__ import annotations

import inspect
import random
from concurrent.futures import ProcessPoolExecutor, wait
from time import perf_counter
from typing import Any, Callable, Dict, List, Optional, Tuple

from . import settings
from .instances import generate_regions, instance_seed
from .stats import BTRecord, ExperimentResults, ProgressPrinter, compute_grouped_statistics
from regionqueens.validation import is_valid_assignment

SolverFn = Callable[..., Tuple[Optional[List[int]], int, float]]


def discover_bt_solvers() -> List[Tuple[str, SolverFn]]:
    """Return ``(label, function)`` for every ``bt_regions_*`` solver."""
    import regionqueens.backtracking as bt_mod
    solvers = [(name, fn) for name, fn in inspect.getmembers(bt_mod, inspect.isfunction) if name.startswith("bt_regions_")]
    labelled = [(name[len("bt_regions_"):], fn) for name, fn in solvers]
    priority = {"first": 0, "mcv": 1}
    labelled.sort(key=lambda x: (priority.get(x[0], 100), x[0]))
    return labelled


def select_bt_solvers(labels: Optional[List[str]]) -> List[Tuple[str, SolverFn]]:
    """Filter discovered solvers by label; ``None`` keeps all of them."""
    discovered = discover_bt_solvers()
    if not labels:
        return discovered
    wanted = {label.strip() for label in labels}
    available = {label for label, _ in discovered}
    unknown = wanted.difference(available)
    if unknown:
        raise ValueError("Unknown BT solver(s): " + ", ".join(sorted(unknown)) + ". Available: " + ", ".join(sorted(available)))
    return [(label, fn) for label, fn in discovered if label in wanted]


def run_single_bt_experiment(params: Tuple[int, int, int, str, Optional[float], bool]) -> BTRecord:
    """Worker: build one seeded instance and run one solver on it."""
    N, run, seed, label, time_limit, validate = params
    rng = random.Random(seed)
    regions = generate_regions(N, rng)
    solver = dict(discover_bt_solvers())[label]
    sol, nodes, elapsed = solver(N, regions, time_limit=time_limit)
    if validate and sol is not None and not is_valid_assignment(sol, regions):
        raise AssertionError(f"Invalid BT solution produced for N={N} (seed {seed}) by {label}: {sol}")
    timed_out = sol is None and time_limit is not None and elapsed > time_limit
    return {
        "n": N,
        "run": run,
        "seed": seed,
        "solver": label,
        "success": sol is not None,
        "nodes": nodes,
        "time": elapsed,
        "timeout": timed_out,
    }


def _build_tasks(N: int, runs: int, seed: int, labels: List[str], time_limit: Optional[float], validate: bool):
    return [
        (N, run, instance_seed(seed, N, run), label, time_limit, validate)
        for run in range(runs)
        for label in labels
    ]


def _aggregate(records: List[BTRecord], labels: List[str]) -> Dict[str, Any]:
    return {
        label: compute_grouped_statistics([r for r in records if r["solver"] == label])
        for label in labels
    }


def run_backtracking_experiments(
    N_values: List[int],
    runs: int,
    bt_time_limit: Optional[float],
    bt_solvers: Optional[List[str]] = None,
    seed: int = 42,
    progress_label: Optional[str] = None,
    validate: bool = False,
) -> ExperimentResults:
    """Run the benchmark sequentially, one instance and solver at a time."""
    selected = select_bt_solvers(bt_solvers)
    labels = [label for label, _ in selected]
    results: ExperimentResults = {}
    progress = ProgressPrinter(len(N_values), progress_label) if progress_label else None

    for index, N in enumerate(N_values, start=1):
        if progress:
            progress.update(index, f"N={N}")
        print(f"=== N = {N}, solvers: {', '.join(labels)} ===")

        records: List[BTRecord] = []
        start = perf_counter()
        for task in _build_tasks(N, runs, seed, labels, bt_time_limit, validate):
            if settings.EXPERIMENT_TIMEOUT is not None and perf_counter() - start > settings.EXPERIMENT_TIMEOUT:
                print(f"  Experiment timeout reached for N={N}; skipping remaining runs.")
                break
            records.append(run_single_bt_experiment(task))

        results[N] = _aggregate(records, labels)
        for label in labels:
            entry = results[N][label]
            print(f"  [{label}] success rate {entry['success_rate']:.2f} over {entry['total_runs']} runs")
    return results


def run_backtracking_experiments_parallel(
    N_values: List[int],
    runs: int,
    bt_time_limit: Optional[float],
    bt_solvers: Optional[List[str]] = None,
    seed: int = 42,
    progress_label: Optional[str] = None,
    validate: bool = False,
    workers: Optional[int] = None,
) -> ExperimentResults:
    """Run the benchmark with a process pool, one task per (instance, solver)."""
    selected = select_bt_solvers(bt_solvers)
    labels = [label for label, _ in selected]
    results: ExperimentResults = {}
    progress = ProgressPrinter(len(N_values), progress_label) if progress_label else None

    with ProcessPoolExecutor(max_workers=workers or settings.NUM_PROCESSES) as executor:
        for index, N in enumerate(N_values, start=1):
            if progress:
                progress.update(index, f"N={N}")
            print(f"=== N = {N}, solvers: {', '.join(labels)} (parallel) ===")

            tasks = _build_tasks(N, runs, seed, labels, bt_time_limit, validate)
            futures = [executor.submit(run_single_bt_experiment, task) for task in tasks]
            done, pending = wait(futures, timeout=settings.EXPERIMENT_TIMEOUT)
            for future in pending:
                future.cancel()
            if pending:
                print(f"  Experiment timeout reached for N={N}; skipped {len(pending)} of {len(tasks)} runs.")
            records = [future.result() for future in futures if future in done]
            results[N] = _aggregate(records, labels)
            for label in labels:
                entry = results[N][label]
                print(f"  [{label}] success rate {entry['success_rate']:.2f} over {entry['total_runs']} runs")
    return results
