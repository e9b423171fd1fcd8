#!/usr/bin/env python3
import argparse, os, sys
from pathlib import Path

import matplotlib
# Default to a non-interactive backend; we'll only show() if --show
if "MPLBACKEND" not in os.environ:
    matplotlib.use("Agg")
import matplotlib.pyplot as plt

from puzzlesearch.experiments.analyze import HEUR_ORDER, load_results, sem

# Okabe-Ito palette
COLORS = {
    "uniform":   "#E69F00",
    "misplaced": "#009E73",
    "manhattan": "#0072B2",
}
LABEL = {
    "uniform":   "Uniform Cost (h = 0)",
    "misplaced": "A* misplaced tiles",
    "manhattan": "A* Manhattan",
}

def plot_metric(ax, df, metric, logy=False):
    ok = df[df["termination"] == "ok"]
    grouped = ok.groupby(["heuristic", "depth"])[metric].agg(["mean", sem]).reset_index()
    heurs = [h for h in HEUR_ORDER if h in set(grouped["heuristic"])]
    heurs += sorted(set(grouped["heuristic"]) - set(heurs))
    for heur in heurs:
        g = grouped[grouped["heuristic"] == heur].sort_values("depth")
        ax.errorbar(g["depth"], g["mean"], yerr=g["sem"], marker="o", capsize=3,
                    color=COLORS.get(heur), label=LABEL.get(heur, heur))
    if logy:
        ax.set_yscale("log")
    ax.set_xlabel("Scramble depth")
    ax.set_ylabel(metric)
    ax.set_title(f"{metric} vs depth (mean ± sem)")
    ax.grid(True, alpha=0.3)
    ax.legend()

def save_fig(fig, outdir: Path, name: str) -> Path:
    outdir.mkdir(parents=True, exist_ok=True)
    path = outdir / f"{name}.png"
    fig.savefig(path, dpi=200, bbox_inches="tight")
    print(f"Saved: {path}")
    return path

def main(argv=None):
    ap = argparse.ArgumentParser(description="Plot runner CSVs and save PNGs.")
    ap.add_argument("csv", nargs="+", help="One or more CSV result files")
    ap.add_argument("--save", default="results/plots", help="Directory to save plots")
    ap.add_argument("--logy", action="store_true", help="Log scale for the y axis")
    ap.add_argument("--show", action="store_true", help="Also open interactive windows (if GUI available)")
    args = ap.parse_args(argv)

    df = load_results(args.csv)
    if df.empty:
        print("No rows to plot. Are your CSVs empty?")
        sys.exit(0)

    outdir = Path(args.save)
    base = "combo" if len(args.csv) > 1 else Path(args.csv[0]).stem

    fig, axes = plt.subplots(1, 3, figsize=(15, 5))
    for ax, metric in zip(axes, ["expanded", "max_queue", "time_sec"]):
        plot_metric(ax, df, metric, logy=args.logy)
    plt.tight_layout()
    save_fig(fig, outdir, f"{base}_combined")

    if args.show:
        plt.show()
    plt.close(fig)

if __name__ == "__main__":
    main()
