from functools import lru_cache
from typing import Dict, Sequence, Tuple

from puzzlesearch.domains.npuzzle import grid_width
from puzzlesearch.settings import BLANK


@lru_cache(maxsize=32)
def _goal_positions(goal: Tuple[int, ...]) -> Dict[int, Tuple[int, int]]:
    w = grid_width(len(goal))
    return {tile: divmod(idx, w) for idx, tile in enumerate(goal)}


def manhattan_distance(s: Sequence[int], goal: Sequence[int]) -> int:
    """Sum of Manhattan distances to goal positions (blank ignored)."""
    goal_pos = _goal_positions(tuple(goal))
    w = grid_width(len(s))
    dist = 0
    for idx, tile in enumerate(s):
        if tile == BLANK:
            continue
        r, c = divmod(idx, w)
        gr, gc = goal_pos[tile]
        dist += abs(r - gr) + abs(c - gc)
    return dist
