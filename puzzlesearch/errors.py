"""Exceptions raised by puzzlesearch.

Running out of nodes is not an error: the searcher reports it with
``SearchResult.failure()``. These classes cover caller mistakes only.
"""


class PuzzleSearchError(Exception):
    """Base class for every error raised by this package."""


class InvalidStateError(PuzzleSearchError, ValueError):
    """A puzzle state has the wrong size or is not a permutation of 0..N."""


class UnknownHeuristicError(PuzzleSearchError, ValueError):
    """A heuristic was requested by a name that is not registered."""


class EmptyFrontierError(PuzzleSearchError, IndexError):
    """pop() or peek() on an empty frontier."""
