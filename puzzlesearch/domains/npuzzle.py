from __future__ import annotations
from typing import Iterable, List, Optional, Sequence, Tuple
import math
import random

from puzzlesearch.errors import InvalidStateError
from puzzlesearch.search.problem import OperationResult, Problem
from puzzlesearch.settings import BLANK, DEFAULT_PUZZLE_SIZE, MOVE_COST

State = Tuple[int, ...]  # row-major, BLANK is the empty cell


# ---------- Grid helpers ----------
def grid_width(size: int) -> int:
    """Width W of a W×W board with ``size`` cells."""
    w = math.isqrt(size)
    if w < 2 or w * w != size:
        raise InvalidStateError(f"{size} cells do not form a square board of width >= 2")
    return w

def index_to_matrix(index: int, width: int) -> Tuple[int, int]:
    return index // width, index % width

def matrix_to_index(row: int, col: int, width: int) -> int:
    return row * width + col

def canonical_goal(size: int) -> State:
    """1..N in order with the blank last."""
    return tuple(list(range(1, size)) + [BLANK])

def validate_state(state: Iterable[int], size: Optional[int] = None) -> State:
    s = tuple(state)
    if size is not None and len(s) != size:
        raise InvalidStateError(f"expected {size} tiles, got {len(s)}")
    grid_width(len(s))
    if not all(isinstance(t, int) for t in s):
        raise InvalidStateError(f"state {s} has non-integer tiles")
    if sorted(s) != list(range(len(s))):
        raise InvalidStateError(f"state {s} is not a permutation of 0..{len(s) - 1}")
    return s

def format_state(state: Sequence[int]) -> str:
    """One line per row, tiles separated by spaces."""
    w = grid_width(len(state))
    return "\n".join(
        " ".join(str(t) for t in state[r * w:(r + 1) * w]) for r in range(w)
    )


# ---------- Search node ----------
class NPuzzleNode:
    """
    A state plus its depth (accumulated move cost, g).

    Equality and hashing use the (state, depth) pair, so the same board
    reached at two depths gives two distinct nodes.
    """
    FAILURE_DEPTH = -1
    __slots__ = ("_state", "_depth")

    def __init__(self, state: State, depth: int):
        self._state = tuple(state)
        self._depth = depth

    @classmethod
    def failure(cls) -> "NPuzzleNode":
        return cls((), cls.FAILURE_DEPTH)

    @property
    def state(self) -> State:
        return self._state

    @property
    def depth(self) -> int:
        return self._depth

    @property
    def is_failure(self) -> bool:
        return self._depth == self.FAILURE_DEPTH

    def __eq__(self, other) -> bool:
        if not isinstance(other, NPuzzleNode):
            return NotImplemented
        return self._depth == other._depth and self._state == other._state

    def __hash__(self) -> int:
        return hash((self._state, self._depth))

    def __repr__(self) -> str:
        return f"NPuzzleNode(state={self._state}, depth={self._depth})"


# ---------- Operators (blank moves) ----------
def _move_blank(state: State, drow: int, dcol: int) -> OperationResult:
    w = grid_width(len(state))
    blank = state.index(BLANK)
    row, col = index_to_matrix(blank, w)
    r2, c2 = row + drow, col + dcol
    if not (0 <= r2 < w and 0 <= c2 < w):
        return OperationResult.failure()
    j = matrix_to_index(r2, c2, w)
    lst = list(state)
    lst[blank], lst[j] = lst[j], lst[blank]
    return OperationResult.success(tuple(lst), MOVE_COST)

def move_up(state: State) -> OperationResult:
    return _move_blank(state, -1, 0)

def move_down(state: State) -> OperationResult:
    return _move_blank(state, 1, 0)

def move_left(state: State) -> OperationResult:
    return _move_blank(state, 0, -1)

def move_right(state: State) -> OperationResult:
    return _move_blank(state, 0, 1)

# Expansion order: up, down, left, right.
OPERATORS = (move_up, move_down, move_left, move_right)


class NPuzzleProblem(Problem[State]):
    """Sliding-tile puzzle on a W×W board; the goal defaults to ``canonical_goal``."""
    def __init__(self, initial_state: Iterable[int], goal_state: Optional[Iterable[int]] = None):
        initial = validate_state(initial_state)
        super().__init__(initial)
        self.size = len(initial)
        self.width = grid_width(self.size)
        if goal_state is None:
            self.goal_state = canonical_goal(self.size)
        else:
            self.goal_state = validate_state(goal_state, self.size)

    @Problem.initial_state.setter
    def initial_state(self, state: Iterable[int]) -> None:
        self._initial_state = validate_state(state, self.size)

    def goal_test(self, state: State) -> bool:
        return state == self.goal_state

    def get_operators(self) -> List:
        return list(OPERATORS)


# ---------- Solvability ----------
def count_inversions(state: Sequence[int]) -> int:
    arr = [x for x in state if x != BLANK]
    inv = 0
    for i in range(len(arr)):
        for j in range(i + 1, len(arr)):
            if arr[i] > arr[j]:
                inv += 1
    return inv

def _parity(state: Sequence[int]) -> int:
    """
    Invariant preserved by every blank move:
      - width odd:  inversions mod 2
      - width even: (inversions + blank row counted 1-based from the bottom) mod 2
    """
    w = grid_width(len(state))
    inv = count_inversions(state)
    if w % 2 == 1:
        return inv % 2
    blank_row_from_bottom = w - state.index(BLANK) // w
    return (inv + blank_row_from_bottom) % 2

def is_solvable(state: Sequence[int], goal: Optional[Sequence[int]] = None) -> bool:
    """True when ``goal`` (canonical by default) is reachable from ``state``."""
    s = validate_state(state)
    g = canonical_goal(len(s)) if goal is None else validate_state(goal, len(s))
    return _parity(s) == _parity(g)


# ---------- Instance generation ----------
def scramble(depth: int, seed: int, size: int = DEFAULT_PUZZLE_SIZE) -> State:
    """Random walk of ``depth`` blank moves from the canonical goal, no immediate backtrack."""
    rng = random.Random(seed)
    w = grid_width(size)
    s = canonical_goal(size)
    last_blank = None
    for _ in range(depth):
        z = s.index(BLANK)
        r, c = index_to_matrix(z, w)
        cand = [matrix_to_index(r + dr, c + dc, w)
                for dr, dc in ((-1, 0), (1, 0), (0, -1), (0, 1))
                if 0 <= r + dr < w and 0 <= c + dc < w]
        if last_blank in cand and len(cand) > 1:
            cand.remove(last_blank)
        j = rng.choice(cand)
        lst = list(s)
        lst[z], lst[j] = lst[j], lst[z]
        last_blank = z
        s = tuple(lst)
    return s

def make_unsolvable_variant(state: Sequence[int]) -> State:
    """Swap the first two non-blank tiles; this flips the parity invariant."""
    lst = list(state)
    i = next(k for k, v in enumerate(lst) if v != BLANK)
    j = next(k for k, v in enumerate(lst[i + 1:], start=i + 1) if v != BLANK)
    lst[i], lst[j] = lst[j], lst[i]
    return tuple(lst)
