"""
Metamove Discovery Module - Build a library of cheap turn sequences.

A useful metamove is a sequence of turns whose net effect displaces fewer
pieces than any single turn: most of what the turns move cancels out. The
pipeline enumerates such sequences, smooshes them together, repeats them
to cancel more cycles, and keeps one representative per distinct effect.
"""

import logging
from typing import Callable, Dict, Iterable, List, TYPE_CHECKING

from ..puzzle import TwistyPuzzle
from .base import SolverConfigurationError
from .metamove import MetaMove, turn_metamoves
from .traverse import TraverseResult, traverse_combinations

if TYPE_CHECKING:
    from .strategies.metamove_solver import MetaMoveSolverOptions

logger = logging.getLogger(__name__)

AcceptFn = Callable[[MetaMove], bool]


def _collect(puzzle: TwistyPuzzle, pool: List[MetaMove], accept: AcceptFn,
             depth: int) -> List[MetaMove]:
    """Traverse combinations of ``pool`` and keep every accepted node."""
    found: List[MetaMove] = []

    def visit(metamove: MetaMove) -> TraverseResult:
        if accept(metamove):
            found.append(metamove)
        return TraverseResult.CONTINUE

    traverse_combinations(pool, depth, MetaMove.empty(puzzle), MetaMove.apply, visit)
    return found


def discover_metamoves(puzzle: TwistyPuzzle, accept: AcceptFn,
                       max_depth: int) -> List[MetaMove]:
    """
    Enumerate raw-turn sequences up to ``max_depth`` and keep accepted ones.

    Args:
        puzzle: Puzzle whose turns form the candidate pool
        accept: Predicate selecting useful metamoves
        max_depth: Longest turn sequence to try

    Returns:
        Accepted metamoves in traversal order
    """
    return _collect(puzzle, turn_metamoves(puzzle), accept, max_depth)


def combine_metamoves(puzzle: TwistyPuzzle, accept: AcceptFn,
                      base_metamoves: List[MetaMove], depth: int) -> List[MetaMove]:
    """
    Build compound metamoves from sequences of existing ones.

    Args:
        puzzle: Puzzle the metamoves belong to
        accept: Predicate selecting useful compounds
        base_metamoves: Candidate pool of metamoves
        depth: Number of metamoves combined at most

    Returns:
        Accepted compounds in traversal order (depth 1 yields the bases themselves)
    """
    return _collect(puzzle, base_metamoves, accept, depth)


def filter_duplicates(metamoves: Iterable[MetaMove]) -> List[MetaMove]:
    """
    Keep one metamove per distinct net effect.

    Metamoves with identical face maps are interchangeable for solving;
    the one with the fewest turns survives (first seen wins ties).

    Returns:
        Deduplicated metamoves in first-seen order of their effect
    """
    reduced: Dict[bytes, MetaMove] = {}
    for metamove in metamoves:
        key = metamove.effect_key
        current = reduced.get(key)
        if current is None or len(metamove.turns) < len(current.turns):
            reduced[key] = metamove
    return list(reduced.values())


def expand_repeats(metamoves: Iterable[MetaMove], max_repeats: int) -> List[MetaMove]:
    """Each metamove followed by its repeated versions."""
    expanded: List[MetaMove] = []
    for metamove in metamoves:
        expanded.extend(metamove.discover_repeat_metamoves(max_repeats))
        expanded.append(metamove)
    return expanded


def _log_library(stage: str, metamoves: List[MetaMove]) -> None:
    if not metamoves:
        logger.info(f"[MetaMove] {stage}: no metamoves")
        return
    best = min(metamoves)
    logger.info(
        f"[MetaMove] {stage}: {len(metamoves)} metamoves, best is "
        f"{len(best.turns)} turns affecting {best.num_affected_pieces} pieces"
    )


def build_metamove_library(puzzle: TwistyPuzzle,
                           options: 'MetaMoveSolverOptions') -> List[MetaMove]:
    """
    Run the full discovery pipeline.

    Steps:
        1. Discover turn sequences affecting fewer pieces than any single turn
        2. Deduplicate, then combine them with each other
        3. Deduplicate, add repeated versions, keep the cheapest ones
        4. Deduplicate and sort best first

    Args:
        puzzle: Puzzle to build the library for
        options: Depths and thresholds for each stage

    Returns:
        Effect-deduplicated metamoves, sorted by affected pieces then length

    Raises:
        SolverConfigurationError: If discovery or the final library is empty
    """
    turn_affected = min(mm.num_affected_pieces for mm in turn_metamoves(puzzle))

    metamoves = discover_metamoves(
        puzzle,
        lambda mm: 0 < mm.num_affected_pieces < turn_affected,
        options.discover_depth,
    )
    _log_library("discovered", metamoves)
    if not metamoves:
        raise SolverConfigurationError(
            f"No metamove up to depth {options.discover_depth} affects fewer than "
            f"{turn_affected} pieces"
        )

    # Effect-equivalent bases only produce effect-equivalent compounds
    metamoves = filter_duplicates(metamoves)
    metamoves = combine_metamoves(
        puzzle,
        lambda mm: mm.num_affected_pieces > 0,
        metamoves,
        options.combine_depth,
    )
    _log_library("combined", metamoves)

    metamoves = [
        mm for mm in expand_repeats(filter_duplicates(metamoves), options.max_repeats)
        if 0 < mm.num_affected_pieces <= options.max_affected_pieces
    ]
    logger.debug(f"[MetaMove] {len(metamoves)} metamoves after repeats and filtering")

    metamoves = filter_duplicates(metamoves)
    metamoves.sort()
    _log_library("library", metamoves)

    if not metamoves:
        raise SolverConfigurationError(
            f"No metamove affects at most {options.max_affected_pieces} pieces"
        )
    return metamoves
