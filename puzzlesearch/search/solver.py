from __future__ import annotations
from dataclasses import dataclass
from time import perf_counter
from typing import Callable, Dict, Iterable, List, Optional, Set, Union
import logging

from puzzlesearch.domains.npuzzle import NPuzzleNode, NPuzzleProblem, State
from puzzlesearch.errors import UnknownHeuristicError
from puzzlesearch.heuristics.manhattan import manhattan_distance
from puzzlesearch.heuristics.misplaced import misplaced_tiles
from puzzlesearch.heuristics.uniform import uniform_cost
from puzzlesearch.search.frontier import PriorityQueue
from puzzlesearch.search.general import GeneralSearcher
from puzzlesearch.search.results import ExpandResult, SearchResult
from puzzlesearch.settings import DEFAULT_HEURISTIC

logger = logging.getLogger(__name__)

Heuristic = Callable[[State, State], int]
DisplayHook = Callable[[NPuzzleNode, int, int], None]

HEURISTICS: Dict[str, Heuristic] = {
    "uniform": uniform_cost,
    "misplaced": misplaced_tiles,
    "manhattan": manhattan_distance,
}


def get_heuristic(name: str) -> Heuristic:
    key = name.lower()
    if key not in HEURISTICS:
        available = ", ".join(HEURISTICS)
        raise UnknownHeuristicError(f"Unknown heuristic: {name}. Available: {available}")
    return HEURISTICS[key]


@dataclass
class SolveStats:
    heuristic: str
    expanded: int = 0
    max_queue_length: int = 1
    depth: Optional[int] = None
    time_sec: float = 0.0
    termination: str = "ok"  # ok | exhausted | timeout | budget


class _SearchAborted(Exception):
    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class NPuzzleSolver:
    """
    A*/Uniform-Cost solver for the N-puzzle on top of GeneralSearcher.

    The frontier is ordered by f(n) = g(n) + h(n); on equal f the node with
    the larger g leaves first. A state enters the frontier at most once per
    solve: states are marked visited when enqueued, not when popped.

    ``total_nodes_expanded`` counts nodes pushed onto the frontier, and
    ``max_queue_length`` is the largest frontier size seen after a
    queuing step.

    Optional limits (``timeout_sec``, ``max_expanded``) are checked in the
    queuing function; hitting one ends the solve with a failure result and
    ``stats.termination`` set to ``"timeout"`` or ``"budget"``.
    """
    def __init__(
        self,
        heuristic: Union[str, Heuristic] = DEFAULT_HEURISTIC,
        display_hook: Optional[DisplayHook] = None,
        timeout_sec: Optional[float] = None,
        max_expanded: Optional[int] = None,
    ):
        self.heuristic = heuristic
        self.display_hook = display_hook
        self.timeout_sec = timeout_sec
        self.max_expanded = max_expanded

        self.total_nodes_expanded = 0
        self.max_queue_length = 1
        self.final_node = NPuzzleNode.failure()
        self.stats = SolveStats(heuristic=self.heuristic_name)

        self._visited: Set[State] = set()
        self._parents: Dict[NPuzzleNode, NPuzzleNode] = {}
        self._goal: Optional[State] = None

    # ---------- heuristic ----------
    @property
    def heuristic(self) -> Heuristic:
        return self._heuristic

    @heuristic.setter
    def heuristic(self, heuristic: Union[str, Heuristic]) -> None:
        if isinstance(heuristic, str):
            self._heuristic = get_heuristic(heuristic)
            self.heuristic_name = heuristic.lower()
        else:
            self._heuristic = heuristic
            self.heuristic_name = getattr(heuristic, "__name__", "custom")
        self._h_cache: Dict[State, int] = {}

    @staticmethod
    def g_func(node: NPuzzleNode) -> int:
        return node.depth

    def h_func(self, node: NPuzzleNode) -> int:
        """Heuristic value of ``node`` against the goal of the last solve."""
        h = self._h_cache.get(node.state)
        if h is None:
            h = self._heuristic(node.state, self._goal)
            self._h_cache[node.state] = h
        return h

    def precedes(self, a: NPuzzleNode, b: NPuzzleNode) -> bool:
        fa = self.g_func(a) + self.h_func(a)
        fb = self.g_func(b) + self.h_func(b)
        if fa == fb:
            return self.g_func(a) > self.g_func(b)
        return fa < fb

    # ---------- solving ----------
    def solve(self, initial_state: Iterable[int], goal_state: Optional[Iterable[int]] = None) -> SearchResult[NPuzzleNode]:
        """
        Search for ``goal_state`` (canonical goal by default) from ``initial_state``.

        Unsolvable instances return ``SearchResult.failure()`` once the
        reachable half of the state space is exhausted. Malformed states raise
        InvalidStateError before any search happens.
        """
        problem = NPuzzleProblem(initial_state, goal_state)

        self._visited.clear()
        self._parents.clear()
        self._h_cache.clear()
        self._goal = problem.goal_state
        self.total_nodes_expanded = 0
        self.max_queue_length = 1
        self.final_node = NPuzzleNode.failure()
        self.stats = SolveStats(heuristic=self.heuristic_name)

        searcher = GeneralSearcher(
            lambda state: NPuzzleNode(state, 0),
            lambda node: node.state,
            self.precedes,
        )

        initial = problem.initial_state
        self._visited.add(initial)
        self._parents[NPuzzleNode(initial, 0)] = NPuzzleNode.failure()

        t0 = perf_counter()

        def queuing_function(queue: PriorityQueue, expand: ExpandResult) -> None:
            if self.timeout_sec is not None and (perf_counter() - t0) > self.timeout_sec:
                raise _SearchAborted("timeout")

            current = expand.current_node
            if self.display_hook is not None:
                self.display_hook(current, self.g_func(current), self.h_func(current))

            for next_state, cost in expand.result:
                if next_state in self._visited:
                    continue
                if self.max_expanded is not None and self.total_nodes_expanded >= self.max_expanded:
                    raise _SearchAborted("budget")

                child = NPuzzleNode(next_state, current.depth + cost)
                queue.push(child)
                self._parents[child] = current
                self._visited.add(next_state)
                self.total_nodes_expanded += 1

                # the searcher's own goal test on the next pop ends the run
                if problem.goal_test(next_state):
                    break

            if len(queue) > self.max_queue_length:
                self.max_queue_length = len(queue)

        logger.debug(f"solving {initial} -> {problem.goal_state} with h={self.heuristic_name}")
        try:
            result = searcher.general_search(problem, queuing_function)
        except _SearchAborted as e:
            result = SearchResult.failure()
            self.stats.termination = e.reason
        else:
            self.stats.termination = "ok" if result.succeeded else "exhausted"

        if result.succeeded:
            self.final_node = result.final_node
        self.stats.expanded = self.total_nodes_expanded
        self.stats.max_queue_length = self.max_queue_length
        self.stats.depth = self.final_node.depth if result.succeeded else None
        self.stats.time_sec = perf_counter() - t0
        logger.debug(f"solve finished: {self.stats}")
        return result

    def solution_path(self) -> List[NPuzzleNode]:
        """Nodes from the initial state to the goal, both included; [] after a failed solve."""
        if self.final_node.is_failure:
            return []
        path: List[NPuzzleNode] = []
        node = self.final_node
        while not node.is_failure:
            path.append(node)
            node = self._parents[node]
        path.reverse()
        return path
