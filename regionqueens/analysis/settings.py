"""Global settings and timeouts for the region-queens benchmark pipeline.

This module centralizes tunable constants used across the orchestration code.
Values can be overridden at runtime via the configuration loader in
`regionqueens.analysis.cli.apply_configuration`.
"""
from __future__ import annotations

import multiprocessing
from datetime import datetime
from typing import List, Optional

# Board sizes to benchmark (N = 2 and 3 have no non-touching placement)
N_VALUES: List[int] = [4, 5, 6, 7, 8, 9, 10, 12]

# Random instances generated per N; every solver runs on each instance
RUNS_BT_FINAL: int = 20

# Backtracking time limit per run in seconds (None = no limit)
BT_TIME_LIMIT: Optional[float] = 10.0

# Global timeout per N in seconds (None = no limit)
EXPERIMENT_TIMEOUT: Optional[float] = 120.0

# Base seed for instance generation; run i at size N uses a seed derived from it
SEED: int = 42

# Backtracking solvers to run, by label (see experiments.discover_bt_solvers)
BT_SOLVERS: List[str] = ["first", "mcv"]

# Output directory for CSV and charts
OUT_DIR: str = "results_regionqueens"

# Number of worker processes to use (leave one core for the OS)
NUM_PROCESSES: int = max(1, multiprocessing.cpu_count() - 1)

# Output naming policy --------------------------------------------------------

# When True, results and plots include a datestamp suffix (e.g., _20251113-142530)
DATE_IN_FILENAMES: bool = True

# Unique run identifier used for filename stamping; set once at import time.
RUN_ID: str = datetime.now().strftime("%Y%m%d-%H%M%S")

# Optional run label appended to filenames to avoid overwriting outputs
RUN_TAG: Optional[str] = None

# Current pipeline mode for plotting decisions: 'sequential' | 'parallel'
CURRENT_PIPELINE_MODE: str = 'parallel'


def set_timeouts(
        bt_timeout: Optional[float] = 10.0,
        experiment_timeout: Optional[float] = 120.0,
) -> None:
        """Configure the per-run solver limit and the per-N experiment cap.

        Parameters
        - bt_timeout: Backtracking limit in seconds (None disables the limit).
        - experiment_timeout: Hard cap for all runs at one N in seconds (None
            disables). When reached, remaining runs for that N are skipped.

        Side effects
        - Updates module-level globals and prints a concise summary to stdout.
        """
        global BT_TIME_LIMIT, EXPERIMENT_TIMEOUT
        BT_TIME_LIMIT = bt_timeout
        EXPERIMENT_TIMEOUT = experiment_timeout

        print("Timeout settings configured:")
        print(f"   - BT: {BT_TIME_LIMIT}s" if BT_TIME_LIMIT else "   - BT: unlimited")
        print(
                f"   - Experiment: {EXPERIMENT_TIMEOUT}s"
                if EXPERIMENT_TIMEOUT
                else "   - Experiment: unlimited"
        )
