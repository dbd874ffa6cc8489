"""
Combination Traversal Module - Depth-bounded enumeration of combined sequences.

Walks the tree of every sequence of pool elements up to a maximum depth,
combining as it goes, so each node costs a single ``combine`` call instead
of rebuilding the sequence from scratch.
"""

from enum import Enum, auto
from typing import Callable, Optional, Sequence, TypeVar

T = TypeVar("T")
A = TypeVar("A")


class TraverseResult(Enum):
    """
    Visitor signal controlling a traversal.

    States:
        CONTINUE: Explore beneath this node, then its siblings
        BREAK: Abort the entire traversal immediately
    """
    CONTINUE = auto()
    BREAK = auto()


def traverse_combinations(
    pool: Sequence[T],
    max_depth: int,
    seed: A,
    combine: Callable[[A, T], A],
    visit: Callable[[A], Optional[TraverseResult]],
) -> TraverseResult:
    """
    Visit every combination of pool elements from depth 1 to ``max_depth``.

    Nodes are visited depth-first in pre-order: a node is visited, then the
    subtree below it, then its next sibling. Siblings follow pool order and
    the whole pool is offered again at every depth, so elements may repeat.
    The seed itself (depth 0) is never visited.

    Args:
        pool: Candidate elements, offered in order at every depth
        max_depth: Deepest sequence length to visit
        seed: Accumulator the root of the tree starts from
        combine: ``combine(accumulated, candidate)`` returning the child accumulator
        visit: Called once per node; returning BREAK stops everything
               (None counts as CONTINUE)

    Returns:
        BREAK if a visit aborted the traversal, CONTINUE otherwise
    """
    if max_depth <= 0 or not pool:
        return TraverseResult.CONTINUE
    return _traverse(pool, max_depth, seed, combine, visit)


def _traverse(pool, remaining, accumulated, combine, visit) -> TraverseResult:
    for candidate in pool:
        combined = combine(accumulated, candidate)
        if visit(combined) is TraverseResult.BREAK:
            return TraverseResult.BREAK
        if remaining > 1:
            if _traverse(pool, remaining - 1, combined, combine, visit) is TraverseResult.BREAK:
                return TraverseResult.BREAK
    return TraverseResult.CONTINUE
