from typing import Sequence


def uniform_cost(s: Sequence[int], goal: Sequence[int]) -> int:
    """h = 0; A* with this heuristic is Uniform-Cost Search."""
    return 0
