"""NPuzzleSolver: optimality, statistics, path reconstruction and search policy.

The step-by-step numbers for SAMPLE (11 nodes enqueued, peak frontier 7)
follow from the operator order up, down, left, right and the
prefer-deeper tie-break.
"""

from __future__ import annotations

from typing import List, Sequence

import pytest

from puzzlesearch.domains.npuzzle import (
    OPERATORS,
    NPuzzleNode,
    canonical_goal,
    is_solvable,
    make_unsolvable_variant,
    scramble,
)
from puzzlesearch.errors import InvalidStateError, UnknownHeuristicError
from puzzlesearch.search.frontier import PriorityQueue
from puzzlesearch.search.solver import HEURISTICS, NPuzzleSolver, get_heuristic
from puzzlesearch.settings import DEFAULT_INITIAL_STATE

GOAL8 = canonical_goal(9)
SAMPLE = (1, 2, 3, 4, 8, 0, 7, 6, 5)
TWO_MOVES = (1, 2, 3, 4, 5, 6, 0, 7, 8)
ALL_HEURISTICS = ["uniform", "misplaced", "manhattan"]

# (scramble depth, seed) pairs kept small enough for uniform-cost search
FIXTURES = [(d, seed) for d in (4, 8, 12) for seed in range(3)]


# -- helpers ------------------------------------------------------------------


def _replay(path: Sequence[NPuzzleNode]) -> tuple:
    """Re-derive each step with exactly one operator and return the last state."""
    current = path[0].state
    for nxt in path[1:]:
        matches = [op for op in OPERATORS
                   if op(current).succeeded and op(current).state == nxt.state]
        assert len(matches) == 1, f"no single blank move from {current} to {nxt.state}"
        current = matches[0](current).state
    return current


# -- concrete scenarios -------------------------------------------------------


def test_two_move_instance() -> None:
    solver = NPuzzleSolver("manhattan")
    res = solver.solve(TWO_MOVES, GOAL8)
    assert res.succeeded
    assert res.final_node == NPuzzleNode(GOAL8, 2)
    assert [n.state for n in solver.solution_path()] == [
        TWO_MOVES,
        (1, 2, 3, 4, 5, 6, 7, 0, 8),
        GOAL8,
    ]
    assert solver.total_nodes_expanded == 4


def test_sample_instance_with_manhattan() -> None:
    solver = NPuzzleSolver("manhattan")
    res = solver.solve(SAMPLE, GOAL8)
    assert res.succeeded
    assert res.final_node.depth == 5
    assert solver.total_nodes_expanded == 11
    assert solver.max_queue_length == 7
    path = solver.solution_path()
    assert [n.depth for n in path] == [0, 1, 2, 3, 4, 5]
    assert path[0].state == SAMPLE and path[-1].state == GOAL8
    assert solver.stats.termination == "ok"
    assert solver.stats.depth == 5


@pytest.mark.parametrize("heuristic", ALL_HEURISTICS)
def test_already_solved(heuristic: str) -> None:
    solver = NPuzzleSolver(heuristic)
    res = solver.solve(GOAL8)
    assert res.succeeded
    assert res.final_node.depth == 0
    assert solver.total_nodes_expanded == 0
    assert solver.max_queue_length == 1
    assert solver.solution_path() == [NPuzzleNode(GOAL8, 0)]


@pytest.mark.parametrize("heuristic", ALL_HEURISTICS)
def test_unsolvable_2x2_fails(heuristic: str) -> None:
    solver = NPuzzleSolver(heuristic)
    res = solver.solve((2, 1, 3, 0))
    assert not res.succeeded
    assert res.final_node is None
    assert solver.final_node.is_failure
    assert solver.solution_path() == []
    assert solver.stats.termination == "exhausted"
    assert solver.stats.depth is None
    # the 12 reachable boards minus the start
    assert solver.total_nodes_expanded == 11


@pytest.mark.slow
def test_unsolvable_8_puzzle_fails() -> None:
    start = make_unsolvable_variant(GOAL8)
    assert not is_solvable(start)
    solver = NPuzzleSolver("manhattan")
    res = solver.solve(start, GOAL8)
    assert not res.succeeded
    # 9!/2 reachable boards minus the start
    assert solver.total_nodes_expanded == 181439


def test_explicit_goal() -> None:
    goal = (1, 2, 3, 4, 5, 6, 7, 0, 8)
    solver = NPuzzleSolver("misplaced")
    res = solver.solve(GOAL8, goal)
    assert res.succeeded
    assert res.final_node == NPuzzleNode(goal, 1)


# -- optimality and statistics ------------------------------------------------


@pytest.mark.parametrize("depth, seed", FIXTURES)
def test_heuristics_agree_on_optimal_depth(depth: int, seed: int) -> None:
    start = scramble(depth, seed)
    depths = {}
    for name in ALL_HEURISTICS:
        solver = NPuzzleSolver(name)
        res = solver.solve(start)
        assert res.succeeded
        depths[name] = res.final_node.depth
        assert _replay(solver.solution_path()) == GOAL8
    assert len(set(depths.values())) == 1
    found = depths["manhattan"]
    assert found <= depth and (depth - found) % 2 == 0


def test_expansions_shrink_with_better_heuristics() -> None:
    totals = {}
    for name in ALL_HEURISTICS:
        solver = NPuzzleSolver(name)
        total = 0
        for depth, seed in FIXTURES:
            solver.solve(scramble(depth, seed))
            total += solver.total_nodes_expanded
        totals[name] = total
    assert totals["manhattan"] <= totals["misplaced"] <= totals["uniform"]


def test_default_instance_round_trip() -> None:
    solver = NPuzzleSolver()
    res = solver.solve(DEFAULT_INITIAL_STATE)
    assert res.succeeded
    path = solver.solution_path()
    assert path[0].state == DEFAULT_INITIAL_STATE
    assert len(path) == res.final_node.depth + 1
    assert _replay(path) == GOAL8
    assert solver.stats.max_queue_length >= 1


def test_no_state_enqueued_twice(monkeypatch) -> None:
    pushed: List[tuple] = []
    original = PriorityQueue.push

    def spy(self, value):
        pushed.append(value.state)
        original(self, value)

    monkeypatch.setattr(PriorityQueue, "push", spy)
    solver = NPuzzleSolver("uniform")
    solver.solve(scramble(10, 3))
    assert len(pushed) == len(set(pushed))
    # the searcher pushes the start node, the solver pushes the rest
    assert len(pushed) == solver.total_nodes_expanded + 1


def test_popped_f_values_never_decrease() -> None:
    seen = []
    solver = NPuzzleSolver("manhattan", display_hook=lambda node, g, h: seen.append((g + h, g)))
    solver.solve(scramble(14, 2))
    fs = [f for f, _ in seen]
    assert fs == sorted(fs)


def test_tie_break_prefers_larger_g() -> None:
    table = {(1,): 1, (2,): 2, (3,): 4, (4,): 0}
    solver = NPuzzleSolver(lambda s, goal: table[s])
    q = PriorityQueue(solver.precedes)
    b = NPuzzleNode((2,), 1)   # f = 3
    c = NPuzzleNode((3,), 0)   # f = 4
    a = NPuzzleNode((1,), 2)   # f = 3, deeper than b
    d = NPuzzleNode((4,), 3)   # f = 3, deepest
    for node in (b, c, a, d):
        q.push(node)
    assert [q.pop() for _ in range(4)] == [d, a, b, c]


# -- hooks, limits and configuration ------------------------------------------


def test_display_hook_sees_each_expanded_node() -> None:
    calls = []
    solver = NPuzzleSolver("manhattan", display_hook=lambda node, g, h: calls.append((node.state, g, h)))
    solver.solve(TWO_MOVES)
    assert calls == [
        (TWO_MOVES, 0, 2),
        ((1, 2, 3, 4, 5, 6, 7, 0, 8), 1, 1),
    ]


def test_node_budget() -> None:
    solver = NPuzzleSolver("uniform", max_expanded=5)
    res = solver.solve(DEFAULT_INITIAL_STATE)
    assert not res.succeeded
    assert solver.stats.termination == "budget"
    assert solver.total_nodes_expanded == 5
    assert solver.solution_path() == []


def test_timeout() -> None:
    solver = NPuzzleSolver("uniform", timeout_sec=0.0)
    res = solver.solve(DEFAULT_INITIAL_STATE)
    assert not res.succeeded
    assert solver.stats.termination == "timeout"


def test_solver_state_resets_between_solves() -> None:
    solver = NPuzzleSolver("manhattan")
    solver.solve(SAMPLE)
    assert solver.total_nodes_expanded == 11
    solver.solve(GOAL8)
    assert solver.total_nodes_expanded == 0
    assert solver.max_queue_length == 1
    assert len(solver.solution_path()) == 1


def test_heuristic_registry() -> None:
    assert set(HEURISTICS) == set(ALL_HEURISTICS)
    assert get_heuristic("Manhattan") is HEURISTICS["manhattan"]
    with pytest.raises(UnknownHeuristicError):
        get_heuristic("euclid")
    with pytest.raises(ValueError):
        NPuzzleSolver("euclid")

    solver = NPuzzleSolver("uniform")
    assert solver.heuristic_name == "uniform"
    solver.heuristic = "misplaced"
    assert solver.heuristic is HEURISTICS["misplaced"]
    assert solver.stats.heuristic == "uniform"
    solver.solve(SAMPLE)
    assert solver.stats.heuristic == "misplaced"


def test_h_func_uses_goal_of_last_solve() -> None:
    solver = NPuzzleSolver("misplaced")
    solver.solve(SAMPLE)
    assert solver.h_func(NPuzzleNode(SAMPLE, 0)) == 3
    assert solver.g_func(NPuzzleNode(SAMPLE, 4)) == 4


def test_invalid_state_raises() -> None:
    solver = NPuzzleSolver()
    with pytest.raises(InvalidStateError):
        solver.solve((1, 2, 3, 4, 5, 6, 7, 8))
    with pytest.raises(InvalidStateError):
        solver.solve(GOAL8, (1, 2, 3, 0))


def test_swapping_heuristic_drops_cached_values() -> None:
    solver = NPuzzleSolver("manhattan")
    solver.solve(SAMPLE)
    node = solver.solution_path()[1]
    assert solver.h_func(node) == HEURISTICS["manhattan"](node.state, GOAL8)

    solver.heuristic = "misplaced"
    expected = HEURISTICS["misplaced"](node.state, GOAL8)
    assert expected != HEURISTICS["manhattan"](node.state, GOAL8)
    assert solver.h_func(node) == expected
