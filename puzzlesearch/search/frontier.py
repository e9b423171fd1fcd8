from __future__ import annotations
from typing import Callable, Generic, List, TypeVar
import heapq
import itertools

from puzzlesearch.errors import EmptyFrontierError

T = TypeVar("T")

# comparator(a, b) -> True when a must leave the queue before b
Comparator = Callable[[T, T], bool]


class _Entry(Generic[T]):
    """Heap slot. Orders by the owning queue's current comparator, then by insertion."""
    __slots__ = ("queue", "seq", "value")

    def __init__(self, queue: "PriorityQueue[T]", seq: int, value: T):
        self.queue = queue
        self.seq = seq
        self.value = value

    def __lt__(self, other: "_Entry[T]") -> bool:
        cmp = self.queue.comparator
        if cmp(self.value, other.value):
            return True
        if cmp(other.value, self.value):
            return False
        return self.seq < other.seq


class PriorityQueue(Generic[T]):
    """
    Binary heap whose ordering comes from a comparator chosen at construction.

    The comparator can be replaced through the ``comparator`` property, but the
    existing contents are not re-heapified; swap it only between runs.
    Values the comparator considers equal come out in insertion order.
    """
    def __init__(self, comparator: Comparator):
        self._comparator = comparator
        self._heap: List[_Entry[T]] = []
        self._counter = itertools.count()

    @property
    def comparator(self) -> Comparator:
        return self._comparator

    @comparator.setter
    def comparator(self, comparator: Comparator) -> None:
        self._comparator = comparator

    def push(self, value: T) -> None:
        heapq.heappush(self._heap, _Entry(self, next(self._counter), value))

    def pop(self) -> T:
        if not self._heap:
            raise EmptyFrontierError("pop from an empty frontier")
        return heapq.heappop(self._heap).value

    def peek(self) -> T:
        if not self._heap:
            raise EmptyFrontierError("peek at an empty frontier")
        return self._heap[0].value

    def is_empty(self) -> bool:
        return not self._heap

    def size(self) -> int:
        return len(self._heap)

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)
