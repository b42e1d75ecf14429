"""
Benchmark and command-line package for the region-queens solvers.

This package contains:
- settings: global knobs and timeouts
- stats: typed summaries and aggregation helpers
- instances: seeded random region partitions
- experiments: sequential and parallel benchmark runners
- reporting: CSV exports and raw-data writers
- plots: visualization utilities
- cli: top-level entry point and argument parser
"""

from . import settings as settings  # re-export for convenience
from .stats import (
    StatsSummary,
    BTRecord,
    BTResultEntry,
    ExperimentResults,
    compute_detailed_statistics,
    compute_grouped_statistics,
    ProgressPrinter,
)

__all__ = [
    # types
    "StatsSummary",
    "BTRecord",
    "BTResultEntry",
    "ExperimentResults",
    # utils
    "compute_detailed_statistics",
    "compute_grouped_statistics",
    "ProgressPrinter",
    # settings module
    "settings",
]
