"""Puzzle size, move cost and other defaults shared by the solver and the tools."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Tuple

# Value used for the blank tile.
BLANK = 0

# Cost of sliding the blank one cell (up, down, left or right).
MOVE_COST = 1

# Number of cells on the default board (3x3, the 8-puzzle).
DEFAULT_PUZZLE_SIZE = 9

DEFAULT_INITIAL_STATE: Tuple[int, ...] = (4, 2, 8, 6, 0, 3, 7, 5, 1)

DEFAULT_HEURISTIC = "manhattan"

RESULTS_DIR = Path(os.environ.get("PUZZLESEARCH_RESULTS_DIR", "results"))
