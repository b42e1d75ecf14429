"""Typed result shapes and statistics helpers for the benchmark pipeline.

Defines ``TypedDict`` structures for experiment outputs and provides utilities
to compute aggregate statistics across per-run records.
"""
from __future__ import annotations

import statistics
from typing import Any, Dict, List, Optional, TypedDict


class StatsSummary(TypedDict, total=False):
    count: int
    mean: Optional[float]
    median: Optional[float]
    std: Optional[float]
    min: Optional[float]
    max: Optional[float]
    q25: Optional[float]
    q75: Optional[float]
    range: Optional[float]


class BTRecord(TypedDict):
    n: int
    run: int
    seed: int
    solver: str
    success: bool
    nodes: int
    time: float
    timeout: bool


class BTResultEntry(TypedDict, total=False):
    success_rate: float
    timeout_rate: float
    failure_rate: float
    total_runs: int
    successes: int
    failures: int
    timeouts: int
    all_time: StatsSummary
    all_nodes: StatsSummary
    success_time: StatsSummary
    success_nodes: StatsSummary
    timeout_time: StatsSummary
    timeout_nodes: StatsSummary
    failure_time: StatsSummary
    failure_nodes: StatsSummary
    raw_runs: List[BTRecord]


# results[N][solver_label] -> aggregated entry
ExperimentResults = Dict[int, Dict[str, BTResultEntry]]

METRICS = ("time", "nodes")


class ProgressPrinter:
    """Minimal, stdout-only progress reporter for long-running loops.

    Parameters
    ----------
    total : int
        Total number of steps expected. Values <= 0 are coerced to 1 to avoid
        division by zero when reporting percentages.
    label : str
        Short label printed in front of the progress counters.
    """

    def __init__(self, total: int, label: str):
        self.total = max(1, total)
        self.label = label

    def update(self, index: int, detail: str = "") -> None:
        """Print a single-line progress update to stdout."""
        percent = (index / self.total) * 100
        suffix = f" - {detail}" if detail else ""
        print(f"[{self.label}] {index}/{self.total} ({percent:.0f}%)" + suffix)


def compute_detailed_statistics(values: List[float]) -> StatsSummary:
    """Compute summary statistics for a numeric sequence.

    Returns count, mean, median, population std, min, max, 25th and 75th
    percentiles (q25, q75) and range. When ``values`` is empty every numeric
    field is ``None`` and ``count`` is 0 so CSV generation stays uniform.
    """
    if not values:
        return {
            "count": 0,
            "mean": None,
            "median": None,
            "std": None,
            "min": None,
            "max": None,
            "q25": None,
            "q75": None,
            "range": None,
        }

    sorted_vals = sorted(values)
    n = len(values)

    min_val = min(values)
    max_val = max(values)

    return {
        "count": n,
        "mean": statistics.mean(values),
        "median": statistics.median(values),
        "std": statistics.pstdev(values) if n > 1 else 0,
        "min": min_val,
        "max": max_val,
        "q25": sorted_vals[n // 4] if n >= 4 else min_val,
        "q75": sorted_vals[3 * n // 4] if n >= 4 else max_val,
        "range": max_val - min_val,
    }


def compute_grouped_statistics(results_list: List[BTRecord]) -> BTResultEntry:
    """Aggregate ``time`` and ``nodes`` by outcome (success, timeout, failure).

    A run is a failure when it neither found a solution nor timed out, i.e.
    the solver proved the instance has no placement.
    """
    successes = [r for r in results_list if r["success"]]
    timeouts = [r for r in results_list if r["timeout"]]
    failures = [r for r in results_list if not r["success"] and not r["timeout"]]
    total = len(results_list)

    stats: Dict[str, Any] = {
        "total_runs": total,
        "successes": len(successes),
        "failures": len(failures),
        "timeouts": len(timeouts),
        "success_rate": len(successes) / total if total else 0,
        "timeout_rate": len(timeouts) / total if total else 0,
        "failure_rate": len(failures) / total if total else 0,
    }

    for group, records in (("all", results_list), ("success", successes), ("timeout", timeouts), ("failure", failures)):
        if not records:
            continue
        for metric in METRICS:
            stats[f"{group}_{metric}"] = compute_detailed_statistics([float(r[metric]) for r in records])

    stats["raw_runs"] = list(results_list)
    return stats  # type: ignore[return-value]
