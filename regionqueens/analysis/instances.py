"""Seeded random region partitions for benchmarking.

Every generated partition is built around a hidden placement: each of the N
regions grows from exactly one queen of that placement, so the instance is
guaranteed to have at least one solution.
"""
from __future__ import annotations

import random
from typing import Dict, List, Optional, Tuple

from regionqueens.board import Regions


def random_placement(size: int, rng: random.Random) -> List[int]:
    """Return a random ``placement[row] = column`` with no touching queens.

    Uses a randomized depth-first search over rows. Raises ``ValueError`` for
    sizes that have no such placement (N = 2 and N = 3) or N < 1.
    """
    if size < 1:
        raise ValueError(f"Board size must be >= 1, got {size}")

    placement: List[int] = []
    used = [False] * size

    def extend() -> bool:
        if len(placement) == size:
            return True
        columns = list(range(size))
        rng.shuffle(columns)
        for column in columns:
            if used[column]:
                continue
            if placement and abs(placement[-1] - column) == 1:
                continue
            placement.append(column)
            used[column] = True
            if extend():
                return True
            placement.pop()
            used[column] = False
        return False

    if not extend():
        raise ValueError(f"No non-touching placement exists for N={size}")
    return placement


def generate_regions(size: int, rng: random.Random, placement: Optional[List[int]] = None) -> Regions:
    """Grow ``size`` regions, one around each queen of ``placement``.

    Cells start as singleton regions; the borders between orthogonal
    neighbours are shuffled and merged with union-find whenever the merged
    region would still contain at most one queen. Labels are renumbered
    0..N-1 in row-major order of first appearance.
    """
    if placement is None:
        placement = random_placement(size, rng)
    if len(placement) != size:
        raise ValueError(f"Placement has {len(placement)} rows, expected {size}")

    parent = list(range(size * size))
    queens = [0] * (size * size)
    for row, column in enumerate(placement):
        queens[row * size + column] = 1

    def find_root(cell: int) -> int:
        while parent[cell] != cell:
            parent[cell] = parent[parent[cell]]
            cell = parent[cell]
        return cell

    borders: List[Tuple[int, int]] = []
    for r in range(size):
        for c in range(size):
            if r < size - 1:
                borders.append((r * size + c, (r + 1) * size + c))
            if c < size - 1:
                borders.append((r * size + c, r * size + c + 1))
    rng.shuffle(borders)

    for a, b in borders:
        root_a, root_b = find_root(a), find_root(b)
        if root_a != root_b and queens[root_a] + queens[root_b] <= 1:
            parent[root_b] = root_a
            queens[root_a] += queens[root_b]
            queens[root_b] = 0

    labels: Dict[int, int] = {}
    regions: Regions = [[0] * size for _ in range(size)]
    for r in range(size):
        for c in range(size):
            root = find_root(r * size + c)
            if root not in labels:
                labels[root] = len(labels)
            regions[r][c] = labels[root]
    return regions


def instance_seed(base_seed: int, size: int, run: int) -> int:
    """Derive a reproducible per-instance seed."""
    return base_seed * 1_000_003 + size * 1_009 + run
