#!/usr/bin/env python3
import subprocess, sys
from pathlib import Path

# (module, arguments) in run order; later steps read the CSVs of earlier ones
STEPS = [
    ("runner", "--n 3 --depths 4 8 12 16 --per_depth 10 --out results/p8.csv"),
    ("runner", "--n 3 --depths 8 --per_depth 3 --include_unsolvable --heuristics manhattan "
               "--out results/p8_unsolvable.csv"),
    ("runner", "--n 4 --depths 10 20 --per_depth 5 --heuristics misplaced manhattan "
               "--max_expanded 200000 --out results/p15.csv"),
    ("analyze", "results/p8.csv results/p8_unsolvable.csv --out results/p8_summary.csv"),
    ("plot", "results/p8.csv --logy --save results/plots"),
    ("visualize_path", "--depth 12 --seed 0 --out results/plots/p8_path.png"),
]

def main():
    Path("results").mkdir(exist_ok=True)
    for module, args in STEPS:
        cmd = [sys.executable, "-m", f"puzzlesearch.experiments.{module}", *args.split()]
        print("Running:", " ".join(cmd[1:]))
        r = subprocess.run(cmd)
        if r.returncode != 0:
            sys.exit(r.returncode)

if __name__ == "__main__":
    main()
