#!/usr/bin/env python3
import argparse, math, os
from pathlib import Path
from typing import List, Sequence

import matplotlib
if "MPLBACKEND" not in os.environ:
    matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.colors import ListedColormap
import numpy as np

from puzzlesearch.domains.npuzzle import NPuzzleNode, grid_width, scramble
from puzzlesearch.search.solver import HEURISTICS, NPuzzleSolver
from puzzlesearch.settings import BLANK

IN_PLACE = "#009E73"
OUT_OF_PLACE = "#E69F00"


def placement_grid(state: Sequence[int], goal: Sequence[int]) -> np.ndarray:
    """W×W array: 1 where a tile already sits on its goal cell, 0 elsewhere, NaN for the blank."""
    w = grid_width(len(state))
    cells = np.array(state).reshape(w, w)
    grid = (cells == np.array(goal).reshape(w, w)).astype(float)
    grid[cells == BLANK] = np.nan
    return grid


def draw_node(ax, node: NPuzzleNode, goal: Sequence[int], h: int) -> None:
    w = grid_width(len(node.state))
    cmap = ListedColormap([OUT_OF_PLACE, IN_PLACE])
    cmap.set_bad("white")
    ax.imshow(placement_grid(node.state, goal), cmap=cmap, vmin=0, vmax=1)
    for idx, t in enumerate(node.state):
        if t != BLANK:
            r, c = divmod(idx, w)
            ax.text(c, r, str(t), ha="center", va="center", fontsize=14)
    ax.set_xticks(np.arange(-0.5, w, 1), minor=True)
    ax.set_yticks(np.arange(-0.5, w, 1), minor=True)
    ax.grid(which="minor", color="black", linewidth=1)
    ax.tick_params(which="both", bottom=False, left=False, labelbottom=False, labelleft=False)
    ax.set_title(f"g = {node.depth}, h = {h}", fontsize=9)


def save_path_sheet(solver: NPuzzleSolver, goal: Sequence[int], out_path: Path, cols: int = 5) -> int:
    """Draw every node of the last solution path into one figure; returns the panel count."""
    path: List[NPuzzleNode] = solver.solution_path()
    cols = max(1, min(cols, len(path)))
    rows = math.ceil(len(path) / cols)
    fig, axes = plt.subplots(rows, cols, figsize=(2.2 * cols, 2.4 * rows), squeeze=False)
    for ax in axes.flat[len(path):]:
        ax.axis("off")
    for ax, node in zip(axes.flat, path):
        draw_node(ax, node, goal, solver.h_func(node))
    fig.suptitle(f"{solver.heuristic_name}: {len(path) - 1} moves, "
                 f"{solver.total_nodes_expanded} nodes expanded")
    out_path.parent.mkdir(parents=True, exist_ok=True)
    fig.tight_layout()
    fig.savefig(out_path, dpi=150)
    plt.close(fig)
    return len(path)


def main(argv=None):
    p = argparse.ArgumentParser(description="Solve one instance and draw its solution path.")
    p.add_argument("--heuristic", choices=sorted(HEURISTICS), default="manhattan")
    p.add_argument("--n", type=int, default=3)
    p.add_argument("--state", type=int, nargs="+", default=None,
                   help="Start state; scrambled from the goal when omitted")
    p.add_argument("--depth", type=int, default=10)
    p.add_argument("--seed", type=int, default=1, help="Scramble seed (the runner CSV 'seed' column)")
    p.add_argument("--cols", type=int, default=5)
    p.add_argument("--out", type=Path, default=Path("results/figs/example_path.png"))
    args = p.parse_args(argv)

    start = tuple(args.state) if args.state else scramble(args.depth, args.seed, size=args.n * args.n)
    solver = NPuzzleSolver(args.heuristic)
    res = solver.solve(start)
    if not res.succeeded:
        print(f"No path ({solver.stats.termination}).")
        return 1

    panels = save_path_sheet(solver, res.final_node.state, args.out, args.cols)
    print(f"Saved {panels} boards to {args.out}")
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
