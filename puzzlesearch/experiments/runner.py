from __future__ import annotations
import argparse, csv, logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from puzzlesearch.domains.npuzzle import make_unsolvable_variant, scramble
from puzzlesearch.search.solver import HEURISTICS, NPuzzleSolver
from puzzlesearch.settings import RESULTS_DIR

logger = logging.getLogger(__name__)

State = Tuple[int, ...]

HEADER = [
    "heuristic", "n", "depth", "seed",
    "expanded", "max_queue", "g", "time_sec",
    "termination", "solvable",
]

@dataclass
class Instance:
    seed: int
    depth: int
    state: State

def generate_instances(n: int, depths: Sequence[int], per_depth: int, start_seed: int = 0) -> List[Instance]:
    """``per_depth`` scrambled boards for every scramble depth, seeds counted up from ``start_seed``."""
    out: List[Instance] = []
    seed = start_seed
    for d in depths:
        for _ in range(per_depth):
            out.append(Instance(seed=seed, depth=d, state=scramble(d, seed, size=n * n)))
            seed += 1
    return out

def run_batch(
    instances: Sequence[Instance],
    heuristics: Sequence[str],
    n: int,
    include_unsolvable: bool = False,
    timeout_sec: Optional[float] = None,
    max_expanded: Optional[int] = None,
) -> List[dict]:
    rows: List[dict] = []

    def record(solver: NPuzzleSolver, inst: Instance, state: State, solvable_flag: int):
        solver.solve(state)
        st = solver.stats
        rows.append({
            "heuristic": st.heuristic, "n": n, "depth": inst.depth, "seed": inst.seed,
            "expanded": st.expanded, "max_queue": st.max_queue_length,
            "g": "" if st.depth is None else st.depth,
            "time_sec": f"{st.time_sec:.6f}",
            "termination": st.termination, "solvable": solvable_flag,
        })

    for heur in heuristics:
        solver = NPuzzleSolver(heur, timeout_sec=timeout_sec, max_expanded=max_expanded)
        for inst in instances:
            record(solver, inst, inst.state, 1)
            if include_unsolvable:
                record(solver, inst, make_unsolvable_variant(inst.state), 0)
        logger.info(f"{heur}: {len(instances)} instances done")
    return rows

def write_csv(rows: Sequence[dict], out: Path) -> None:
    out.parent.mkdir(parents=True, exist_ok=True)
    with out.open("w", newline="") as f:
        w = csv.DictWriter(f, fieldnames=HEADER)
        w.writeheader()
        w.writerows(rows)

def main(argv=None):
    ap = argparse.ArgumentParser(description="UCS / A* N-puzzle experiment runner")
    ap.add_argument("--n", type=int, default=3, help="Board width (3 = 8-puzzle, 4 = 15-puzzle)")
    ap.add_argument("--depths", type=int, nargs="+", default=[4, 8, 12, 16])
    ap.add_argument("--per_depth", type=int, default=10)
    ap.add_argument("--heuristics", nargs="+", choices=sorted(HEURISTICS),
                    default=["uniform", "misplaced", "manhattan"])
    ap.add_argument("--seed", type=int, default=0, help="First scramble seed")
    ap.add_argument("--include_unsolvable", action="store_true",
                    help="Also run parity-flipped variants (3x3 recommended)")
    ap.add_argument("--timeout_sec", type=float, default=None, help="Per-instance wall time")
    ap.add_argument("--max_expanded", type=int, default=None, help="Per-instance node budget")
    ap.add_argument("--out", type=Path, default=RESULTS_DIR / "last_run.csv")
    ap.add_argument("--log-level", default="INFO")
    args = ap.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper(),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    insts = generate_instances(args.n, args.depths, args.per_depth, args.seed)
    rows = run_batch(insts, args.heuristics, args.n,
                     include_unsolvable=args.include_unsolvable,
                     timeout_sec=args.timeout_sec, max_expanded=args.max_expanded)
    write_csv(rows, args.out)
    print(f"Wrote {args.out} ({len(insts)} instances, {len(rows)} rows)")

if __name__ == "__main__":
    main()
