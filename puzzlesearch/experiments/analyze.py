#!/usr/bin/env python3
import argparse
from pathlib import Path

import numpy as np
import pandas as pd

METRICS = ["expanded", "max_queue", "time_sec"]
HEUR_ORDER = ["uniform", "misplaced", "manhattan"]

def sem(x):
    x = np.asarray(x, float)
    n = np.sum(~np.isnan(x))
    return 0.0 if n <= 1 else np.nanstd(x, ddof=1)/np.sqrt(n)

def load_results(paths) -> pd.DataFrame:
    frames = [pd.read_csv(p) for p in paths]
    df = pd.concat(frames, ignore_index=True)
    for c in METRICS + ["depth", "g"]:
        if c in df.columns:
            df[c] = pd.to_numeric(df[c], errors="coerce")
    return df

def summarize(df: pd.DataFrame) -> pd.DataFrame:
    """Per (heuristic, depth): mean / median / std / sem of every metric, solved runs only."""
    ok = df[df["termination"] == "ok"]
    agg = ok.groupby(["heuristic", "depth"])[METRICS].agg(["mean", "median", "std", sem])
    agg.columns = [f"{m}_{s}" for m, s in agg.columns]
    return agg.reset_index()

def optimal_depth_agreement(df: pd.DataFrame) -> pd.DataFrame:
    """One row per solvable instance; ``agree`` is True when every heuristic found the same g."""
    ok = df[(df["termination"] == "ok") & (df["solvable"] == 1)]
    wide = ok.pivot_table(index=["n", "depth", "seed"], columns="heuristic", values="g", aggfunc="first")
    wide["agree"] = wide.nunique(axis=1) <= 1
    return wide.reset_index()

def expansion_ratios(df: pd.DataFrame) -> pd.DataFrame:
    """Mean expanded per depth, one column per heuristic, in HEUR_ORDER where present."""
    ok = df[df["termination"] == "ok"]
    wide = ok.pivot_table(index="depth", columns="heuristic", values="expanded", aggfunc="mean")
    cols = [h for h in HEUR_ORDER if h in wide.columns] + [h for h in wide.columns if h not in HEUR_ORDER]
    return wide[cols]

def main(argv=None):
    ap = argparse.ArgumentParser(description="Summarize runner CSVs.")
    ap.add_argument("csv", nargs="+", type=Path)
    ap.add_argument("--out", type=Path, default=None, help="Optional CSV for the summary table")
    args = ap.parse_args(argv)

    df = load_results(args.csv)
    summary = summarize(df)
    print("=" * 80)
    print("Search statistics per heuristic and scramble depth")
    print("=" * 80)
    with pd.option_context("display.width", 160, "display.max_columns", None):
        print(summary.to_string(index=False, float_format=lambda v: f"{v:.2f}"))
        print("\nMean nodes expanded:")
        print(expansion_ratios(df).to_string(float_format=lambda v: f"{v:.1f}"))

    agree = optimal_depth_agreement(df)
    if len(agree):
        print(f"\nOptimal depth agreement: {int(agree['agree'].sum())}/{len(agree)} instances")

    unsolv = df[df["solvable"] == 0]
    if len(unsolv):
        counts = unsolv.groupby(["heuristic", "termination"]).size()
        print("\nUnsolvable variants by termination:")
        print(counts.to_string())

    if args.out:
        args.out.parent.mkdir(parents=True, exist_ok=True)
        summary.to_csv(args.out, index=False)
        print(f"Saved: {args.out}")

if __name__ == "__main__":
    main()
