from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Generic, List, Optional, TypeVar

StateT = TypeVar("StateT")


@dataclass(frozen=True)
class OperationResult(Generic[StateT]):
    """
    Outcome of applying one operator to a state.

    Build it with ``OperationResult.failure()`` when the operator does not
    apply, or ``OperationResult.success(state, cost)`` otherwise.
    """
    succeeded: bool
    state: Optional[StateT] = None
    cost: Any = None

    def __post_init__(self):
        if self.succeeded and self.state is None:
            raise ValueError("a successful operation needs a resulting state")
        if not self.succeeded and (self.state is not None or self.cost is not None):
            raise ValueError("a failed operation carries no state or cost")

    @classmethod
    def failure(cls) -> "OperationResult[StateT]":
        return cls(False)

    @classmethod
    def success(cls, state: StateT, cost) -> "OperationResult[StateT]":
        return cls(True, state, cost)


Operator = Callable[[Any], OperationResult]


class Problem(ABC, Generic[StateT]):
    """
    A search problem: an initial state, a goal test and the operators.

    Operators are plain functions ``state -> OperationResult``; they must
    work on a copy of the state and never touch the problem itself. The order
    returned by ``get_operators`` is the order successors are generated in.
    """
    def __init__(self, initial_state: StateT):
        self._initial_state = initial_state

    @property
    def initial_state(self) -> StateT:
        return self._initial_state

    @initial_state.setter
    def initial_state(self, state: StateT) -> None:
        self._initial_state = state

    @abstractmethod
    def goal_test(self, state: StateT) -> bool:
        """True when ``state`` is a goal state."""

    @abstractmethod
    def get_operators(self) -> List[Operator]:
        """Operators applicable to this problem, in expansion order."""
