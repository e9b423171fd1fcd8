from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Generic, List, Optional, Tuple, TypeVar

NodeT = TypeVar("NodeT")


@dataclass(frozen=True)
class ExpandResult(Generic[NodeT]):
    """The node that was expanded and the (state, cost) pairs its operators produced."""
    current_node: NodeT
    result: List[Tuple[Any, Any]] = field(default_factory=list)

    @property
    def expanded_states(self) -> List[Any]:
        return [state for state, _ in self.result]


@dataclass(frozen=True)
class SearchResult(Generic[NodeT]):
    """Either ``failure()`` (frontier exhausted) or ``success(final_node)``."""
    succeeded: bool
    final_node: Optional[NodeT] = None

    @classmethod
    def failure(cls) -> "SearchResult[NodeT]":
        return cls(False)

    @classmethod
    def success(cls, final_node: NodeT) -> "SearchResult[NodeT]":
        return cls(True, final_node)
