"""Visualization utilities for benchmark outputs.

Charts are written as PNG files into ``out_dir`` with a two-digit prefix for
stable ordering and the same optional suffix as the CSV exports.

Chart map
---------
- 01_success_rate_vs_N.png: share of instances solved within the limit.
- 02_time_vs_N_log_scale.png: mean wall-clock time of successful runs.
- 03_nodes_vs_N_log_scale.png: mean explored nodes (hardware independent).
- 04_nodes_distribution_vs_N.png: box plot of explored nodes per N and solver.
- 05_nodes_vs_time.png: nodes against time with a linear trend (sequential
    mode only; parallel wall-clock noise breaks proportionality).
"""
from __future__ import annotations

import os
from typing import Any, Dict, List

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402
import pandas as pd  # noqa: E402
import seaborn as sns  # noqa: E402

from . import settings  # noqa: E402
from .reporting import build_suffix  # noqa: E402
from .stats import ExperimentResults  # noqa: E402

MARKERS = ["o", "s", "^", "D", "v"]


def _solver_labels(results: ExperimentResults, N_values: List[int]) -> List[str]:
    """Distinct solver labels across N in stable discovery order."""
    labels: List[str] = []
    for N in N_values:
        for label in results.get(N, {}):
            if label not in labels:
                labels.append(label)
    return labels


def _series(results: ExperimentResults, N_values: List[int], label: str, key: str, stat: str = "mean") -> List[float]:
    values: List[float] = []
    for N in N_values:
        entry: Dict[str, Any] = dict(results.get(N, {}).get(label, {}))
        summary = entry.get(key, {})
        values.append(float(summary.get(stat) or 0.0))
    return values


def raw_runs_frame(results: ExperimentResults, N_values: List[int]) -> pd.DataFrame:
    """Flatten every raw run into a long-form DataFrame."""
    rows = [
        record
        for N in N_values
        for entry in results.get(N, {}).values()
        for record in entry.get("raw_runs", [])
    ]
    return pd.DataFrame(rows, columns=["n", "run", "seed", "solver", "success", "nodes", "time", "timeout"])


def _save(fname: str, what: str) -> None:
    plt.savefig(fname, bbox_inches="tight", dpi=150)
    plt.close()
    print(f"Saved {what} chart: {fname}")


def plot_and_save(results: ExperimentResults, N_values: List[int], out_dir: str) -> List[str]:
    """Generate the full chart set; returns the written file paths."""
    os.makedirs(out_dir, exist_ok=True)
    suffix = build_suffix()
    labels = _solver_labels(results, N_values)
    written: List[str] = []

    plt.figure(figsize=(12, 8))
    for i, label in enumerate(labels):
        rates = [float(results.get(N, {}).get(label, {}).get("success_rate", 0.0)) for N in N_values]
        plt.plot(N_values, rates, marker=MARKERS[i % len(MARKERS)], linewidth=2, markersize=8, label=f"BT-{label}")
    plt.xlabel("N (board size)", fontsize=12)
    plt.ylabel("Success rate", fontsize=12)
    plt.title("Success Rate vs Problem Size\n(Instances solved within the time limit)", fontsize=14)
    plt.ylim(-0.05, 1.05)
    plt.legend(fontsize=11)
    plt.grid(True, alpha=0.7)
    plt.xticks(N_values)
    fname = os.path.join(out_dir, f"01_success_rate_vs_N{suffix}.png")
    _save(fname, "success-rate")
    written.append(fname)

    plt.figure(figsize=(12, 8))
    for i, label in enumerate(labels):
        times = [max(t, 1e-6) for t in _series(results, N_values, label, "success_time")]
        plt.semilogy(N_values, times, marker=MARKERS[i % len(MARKERS)], linewidth=2, markersize=8, label=f"BT-{label}")
    plt.xlabel("N (board size)", fontsize=12)
    plt.ylabel("Average time [s] (log scale)", fontsize=12)
    plt.title("Execution Time vs Problem Size\n(Successful runs only)", fontsize=14)
    plt.legend(fontsize=11)
    plt.grid(True, alpha=0.7)
    plt.xticks(N_values)
    fname = os.path.join(out_dir, f"02_time_vs_N_log_scale{suffix}.png")
    _save(fname, "execution-time")
    written.append(fname)

    plt.figure(figsize=(12, 8))
    for i, label in enumerate(labels):
        nodes = [max(n, 1) for n in _series(results, N_values, label, "all_nodes")]
        plt.semilogy(N_values, nodes, marker=MARKERS[i % len(MARKERS)], linewidth=2, markersize=8, label=f"BT-{label}")
    plt.xlabel("N (board size)", fontsize=12)
    plt.ylabel("Explored nodes (log scale)", fontsize=12)
    plt.title("Logical Search Cost vs Problem Size\n(Hardware-independent scalability)", fontsize=14)
    plt.legend(fontsize=11)
    plt.grid(True, alpha=0.7)
    plt.xticks(N_values)
    fname = os.path.join(out_dir, f"03_nodes_vs_N_log_scale{suffix}.png")
    _save(fname, "logical-cost")
    written.append(fname)

    frame = raw_runs_frame(results, N_values)
    if not frame.empty:
        plt.figure(figsize=(12, 8))
        ax = sns.boxplot(data=frame, x="n", y="nodes", hue="solver")
        ax.set_yscale("log")
        ax.set_xlabel("N (board size)", fontsize=12)
        ax.set_ylabel("Explored nodes (log scale)", fontsize=12)
        ax.set_title("Distribution of Explored Nodes per Instance", fontsize=14)
        ax.grid(True, alpha=0.5)
        fname = os.path.join(out_dir, f"04_nodes_distribution_vs_N{suffix}.png")
        _save(fname, "nodes-distribution")
        written.append(fname)

    # Skip the scatter in parallel mode as wall-clock noise breaks proportionality
    valid = frame[(frame["nodes"] > 0) & (frame["time"] > 0)] if not frame.empty else frame
    if settings.CURRENT_PIPELINE_MODE == 'sequential' and len(valid) > 0:
        plt.figure(figsize=(12, 8))
        nodes_valid = valid["nodes"].to_numpy(dtype=float)
        time_valid = valid["time"].to_numpy(dtype=float)
        plt.scatter(nodes_valid, time_valid, c=valid["n"].to_numpy(), cmap="coolwarm", s=60, alpha=0.8)
        plt.colorbar(label="N (size)")
        if len(valid) > 2:
            z = np.polyfit(nodes_valid, time_valid, 1)
            p = np.poly1d(z)
            x_trend = np.linspace(nodes_valid.min(), nodes_valid.max(), 100)
            plt.plot(x_trend, p(x_trend), "r--", alpha=0.8, label=f"Trend: y={z[0]:.2e}x+{z[1]:.2e}")
            plt.legend()
        plt.xlabel("Explored nodes (logical cost)", fontsize=12)
        plt.ylabel("Time [s] (wall-clock)", fontsize=12)
        plt.title("Backtracking: Nodes vs Time\n(Near-linearity expected)", fontsize=14)
        plt.grid(True, alpha=0.7)
        fname = os.path.join(out_dir, f"05_nodes_vs_time{suffix}.png")
        _save(fname, "nodes-vs-time")
        written.append(fname)
    elif len(valid) > 0:
        print("Skipping nodes-vs-time correlation in parallel mode.")

    return written
