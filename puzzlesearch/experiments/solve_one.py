#!/usr/bin/env python3
import argparse, logging, sys

from puzzlesearch.domains.npuzzle import format_state, is_solvable
from puzzlesearch.errors import PuzzleSearchError
from puzzlesearch.search.solver import HEURISTICS, NPuzzleSolver
from puzzlesearch.settings import DEFAULT_HEURISTIC, DEFAULT_INITIAL_STATE


def print_expansion(node, g, h):
    print(f"The best state to expand with a g(n) = {g} and h(n) = {h} is...")
    print(format_state(node.state))
    print("Expanding this node...\n")


def main(argv=None):
    p = argparse.ArgumentParser(description="Solve one N-puzzle instance (UCS / A*).")
    p.add_argument("--state", type=int, nargs="+", default=list(DEFAULT_INITIAL_STATE),
                   help="Row-major tiles, 0 is the blank")
    p.add_argument("--goal", type=int, nargs="+", default=None,
                   help="Goal tiles (default: 1..N then blank)")
    p.add_argument("--heuristic", choices=sorted(HEURISTICS), default=DEFAULT_HEURISTIC)
    p.add_argument("--trace", action="store_true", help="Print every node as it is expanded")
    p.add_argument("--check_solvable", action="store_true",
                   help="Skip the search when the parity check says the goal is unreachable")
    p.add_argument("--timeout_sec", type=float, default=None)
    p.add_argument("--max_expanded", type=int, default=None)
    p.add_argument("--log-level", default="WARNING")
    args = p.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper(),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    solver = NPuzzleSolver(args.heuristic,
                           display_hook=print_expansion if args.trace else None,
                           timeout_sec=args.timeout_sec,
                           max_expanded=args.max_expanded)
    try:
        if args.check_solvable and not is_solvable(args.state, args.goal):
            print("No solution! (parity check)")
            return 0
        print("Expanding state:")
        print(format_state(args.state))
        print()
        result = solver.solve(args.state, args.goal)
    except PuzzleSearchError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    stats = solver.stats
    if not result.succeeded:
        print(f"No solution! ({stats.termination})")
    else:
        print("Goal!!\n")
        print(f"To solve this problem, the search algorithm expanded a total of {stats.expanded} nodes.")
        print(f"The maximum number of nodes in the queue at any one time was {stats.max_queue_length}.")
        print(f"The depth of the goal node was {stats.depth}.")
    print(f"Elapsed: {stats.time_sec:.6f} s")
    return 0


if __name__ == "__main__":
    sys.exit(main())
