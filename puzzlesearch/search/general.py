from __future__ import annotations
from typing import Any, Callable, Generic, List, TypeVar
import logging

from puzzlesearch.search.frontier import Comparator, PriorityQueue
from puzzlesearch.search.problem import Operator, Problem
from puzzlesearch.search.results import ExpandResult, SearchResult

logger = logging.getLogger(__name__)

NodeT = TypeVar("NodeT")

QueuingFunction = Callable[[PriorityQueue, ExpandResult], None]


class GeneralSearcher(Generic[NodeT]):
    """
    Generic best-first search (GENERAL-SEARCH with a QUEUING-FUNCTION).

    make_node: state -> node, used for the initial state only.
    to_state:  node -> state, the only view the searcher has of a node.
    comparator: frontier ordering, see PriorityQueue.

    The searcher keeps no per-run state. Which successors enter the frontier,
    and how they are wrapped into nodes, is decided by the queuing function.
    """
    def __init__(
        self,
        make_node: Callable[[Any], NodeT],
        to_state: Callable[[NodeT], Any],
        comparator: Comparator,
    ):
        self.make_node = make_node
        self.to_state = to_state
        self.comparator = comparator

    def expand(self, node: NodeT, operators: List[Operator]) -> ExpandResult[NodeT]:
        state = self.to_state(node)
        result = []
        for op in operators:
            res = op(state)
            # inapplicable operators are dropped here
            if res.succeeded:
                result.append((res.state, res.cost))
        return ExpandResult(node, result)

    def general_search(self, problem: Problem, queuing_function: QueuingFunction) -> SearchResult[NodeT]:
        nodes: PriorityQueue[NodeT] = PriorityQueue(self.comparator)
        nodes.push(self.make_node(problem.initial_state))

        while True:
            if nodes.is_empty():
                logger.debug("frontier exhausted")
                return SearchResult.failure()

            node = nodes.pop()
            if problem.goal_test(self.to_state(node)):
                logger.debug(f"goal reached: {node!r}")
                return SearchResult.success(node)

            queuing_function(nodes, self.expand(node, problem.get_operators()))
