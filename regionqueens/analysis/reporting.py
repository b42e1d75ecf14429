"""CSV export utilities for benchmark outputs (aggregates and raw runs).

These helpers materialize concise per-N, per-solver CSV summaries as well as
full per-run raw data for downstream analysis or spreadsheet inspection.
"""
from __future__ import annotations

import csv
import os
from typing import List

from . import settings
from .stats import ExperimentResults


def build_suffix() -> str:
    """Build an optional filename suffix from RUN_TAG and RUN_ID settings."""
    parts: List[str] = []
    run_tag = getattr(settings, "RUN_TAG", None)
    if run_tag:
        parts.append(str(run_tag))
    if getattr(settings, "DATE_IN_FILENAMES", False):
        run_id = getattr(settings, "RUN_ID", None)
        if run_id:
            parts.append(str(run_id))
    return ("_" + "_".join(parts)) if parts else ""


def _fmt(value) -> str:
    return "" if value is None else str(value)


def save_results_to_csv(results: ExperimentResults, N_values: List[int], out_dir: str) -> str:
    """Write one row per (N, solver) with rates and time/node summaries.

    Returns the path of the written file.
    """
    os.makedirs(out_dir, exist_ok=True)
    filename = os.path.join(out_dir, f"results_BT{build_suffix()}.csv")

    with open(filename, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow([
            "n",
            "solver",
            "total_runs",
            "success_rate",
            "timeout_rate",
            "failure_rate",
            "time_mean_seconds",
            "time_median_seconds",
            "time_std_seconds",
            "time_max_seconds",
            "nodes_mean",
            "nodes_median",
            "nodes_std",
            "nodes_max",
        ])
        for N in N_values:
            for label, entry in results.get(N, {}).items():
                time_stats = entry.get("all_time", {})
                node_stats = entry.get("all_nodes", {})
                writer.writerow([
                    N,
                    label,
                    entry.get("total_runs", 0),
                    entry.get("success_rate", 0),
                    entry.get("timeout_rate", 0),
                    entry.get("failure_rate", 0),
                    _fmt(time_stats.get("mean")),
                    _fmt(time_stats.get("median")),
                    _fmt(time_stats.get("std")),
                    _fmt(time_stats.get("max")),
                    _fmt(node_stats.get("mean")),
                    _fmt(node_stats.get("median")),
                    _fmt(node_stats.get("std")),
                    _fmt(node_stats.get("max")),
                ])
    print(f"Saved aggregate results: {filename}")
    return filename


def save_raw_data_to_csv(results: ExperimentResults, N_values: List[int], out_dir: str) -> str:
    """Write every individual run (instance seed, solver, outcome, cost)."""
    os.makedirs(out_dir, exist_ok=True)
    filename = os.path.join(out_dir, f"raw_runs_BT{build_suffix()}.csv")

    with open(filename, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["n", "run", "seed", "solver", "success", "timeout", "nodes", "time_seconds"])
        for N in N_values:
            for entry in results.get(N, {}).values():
                for record in entry.get("raw_runs", []):
                    writer.writerow([
                        record["n"],
                        record["run"],
                        record["seed"],
                        record["solver"],
                        record["success"],
                        record["timeout"],
                        record["nodes"],
                        record["time"],
                    ])
    print(f"Saved raw run data: {filename}")
    return filename
