from typing import Sequence

from puzzlesearch.settings import BLANK


def misplaced_tiles(s: Sequence[int], goal: Sequence[int]) -> int:
    """Number of non-blank tiles that are not where ``goal`` has them."""
    return sum(1 for tile, want in zip(s, goal) if tile != BLANK and tile != want)
