import random
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import regionqueens.backtracking as back
from regionqueens.analysis.instances import generate_regions

print("Module loaded:", back)

regions = generate_regions(10, random.Random(2024))
for fn_name in ("bt_regions_first", "bt_regions_mcv"):
    fn = getattr(back, fn_name)
    print(f"Running {fn_name}() for N=10")
    sol, nodes, elapsed = fn(10, regions, time_limit=2.0)
    print(f"  -> sol is None? {sol is None}, nodes={nodes}, elapsed={elapsed:.4f}s")
    if sol is not None:
        assert len(sol) == 10
        print("  -> sample solution:", sol)

print("Smoke test finished.")
