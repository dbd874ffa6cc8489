"""
MetaMove Solver - Two-phase heuristic solver built on a metamove library.

Phase 1 searches short raw-turn sequences to raise the solved-piece score
quickly. Once no shallow sequence improves anything, phase 2 searches
combinations of precomputed metamoves, each of which disturbs only a few
pieces, to finish the solve.
"""

import logging
from collections import deque
from dataclasses import dataclass, fields
from enum import Enum, auto
from typing import Any, Deque, List, Mapping, Optional, Tuple

from ...puzzle import PuzzleState, TwistyPuzzle
from ..base import ScrambleSolver
from ..factory import register_solver
from ..metamove import MetaMove, turn_metamoves
from ..metamoves import build_metamove_library
from ..traverse import TraverseResult, traverse_combinations

logger = logging.getLogger(__name__)


def _check_positive(name: str, value: Any) -> None:
    # bool is an int subclass but never a depth
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValueError(f"{name} must be an integer of at least 1, got {value!r}")


@dataclass(frozen=True)
class MetaMoveSolverOptions:
    """
    Tunable depths and thresholds for the metamove solver.

    These are empirical defaults for a 3x3x3 cube, not derived limits;
    other puzzles may need different values.

    Attributes:
        discover_depth: Longest raw-turn sequence tried during discovery
        combine_depth: Number of discovered metamoves smooshed together
        max_affected_pieces: Largest number of displaced pieces kept in the library
        max_repeats: Highest repetition count tried per metamove
        search_depths: Raw-turn search depths tried in order during phase 1
        solve_depth: Number of library metamoves combined per phase 2 search
    """
    discover_depth: int = 5
    combine_depth: int = 2
    max_affected_pieces: int = 3
    max_repeats: int = 6
    search_depths: Tuple[int, ...] = (4, 5)
    solve_depth: int = 2

    def __post_init__(self):
        for name in ("discover_depth", "combine_depth", "max_affected_pieces",
                     "max_repeats", "solve_depth"):
            _check_positive(name, getattr(self, name))

        if not isinstance(self.search_depths, (list, tuple)):
            raise ValueError(
                f"search_depths must be a list of depths, got {self.search_depths!r}"
            )
        for depth in self.search_depths:
            _check_positive("search_depths entry", depth)
        # JSON settings deliver lists
        object.__setattr__(self, "search_depths", tuple(self.search_depths))

    @classmethod
    def from_settings(cls, settings: Mapping[str, Any]) -> 'MetaMoveSolverOptions':
        """
        Create options from a settings mapping, ignoring unknown keys.

        Args:
            settings: Mapping such as the "metamove" section of config.json

        Returns:
            MetaMoveSolverOptions instance
        """
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in settings.items() if key in known})


class SolvePhase(Enum):
    """
    Solving phases.

    States:
        SEARCH: Shallow raw-turn search for score improvements
        METAMOVES: Library search until exhaustion
    """
    SEARCH = auto()
    METAMOVES = auto()


@register_solver
class MetaMoveSolver(ScrambleSolver):
    """
    Heuristic solver using a library of cheap metamoves.

    Turns of a chosen multi-turn move are buffered and handed out on the
    following pulls without searching again, in either phase.

    Algorithm:
        1. Build the metamove library (construction time)
        2. SEARCH: try raw-turn sequences at each search depth, take the one
           giving the highest score (fewest turns on ties)
        3. When no depth improves the score, switch to METAMOVES
        4. METAMOVES: try combinations of library metamoves, take the highest
           score, stop early on a full solve
        5. Exhaust when no combination improves the score
    """
    name = "metamove"
    description = "MetaMove (heuristic) - Shallow search, then metamove library search"

    def __init__(self, puzzle: TwistyPuzzle, initial_state: PuzzleState,
                 options: Optional[MetaMoveSolverOptions] = None):
        """
        Initialize solver and build its metamove library.

        Args:
            puzzle: Shared puzzle description
            initial_state: Scrambled state to solve
            options: Depths and thresholds (defaults if None)

        Raises:
            SolverConfigurationError: If no usable metamoves exist for this puzzle
        """
        super().__init__(puzzle, initial_state, options)
        self.options = options or MetaMoveSolverOptions()
        self.phase = SolvePhase.SEARCH
        self.metamoves: List[MetaMove] = build_metamove_library(puzzle, self.options)
        self._turn_metamoves = turn_metamoves(puzzle)
        self._buffered_turns: Deque[int] = deque()

    @classmethod
    def options_from_settings(cls, settings: Mapping[str, Any]) -> MetaMoveSolverOptions:
        return MetaMoveSolverOptions.from_settings(settings)

    @property
    def buffered_turns(self) -> Tuple[int, ...]:
        """Turns already decided but not yet yielded."""
        return tuple(self._buffered_turns)

    def advance(self) -> Optional[int]:
        """
        Decide, apply and return the next turn.

        Returns:
            Turn index that was applied, or None when exhausted
        """
        if self._buffered_turns:
            return self._apply_turn(self._buffered_turns.popleft())

        if self.is_solved():
            return None

        if self.phase is SolvePhase.SEARCH:
            for depth in self.options.search_depths:
                best = self._search_turns(depth)
                if best is not None:
                    logger.debug(
                        f"[MetaMove] Search depth {depth}: {len(best.turns)} turns improve score"
                    )
                    return self._start(best)
            logger.info(
                f"[MetaMove] Shallow search stalled at score "
                f"{self.puzzle.score(self._state)}/{self.puzzle.num_pieces}, using metamoves"
            )
            self.phase = SolvePhase.METAMOVES

        best = self._search_metamoves()
        if best is None:
            logger.info(
                f"[MetaMove] Exhausted at score "
                f"{self.puzzle.score(self._state)}/{self.puzzle.num_pieces}"
            )
            return None
        logger.debug(
            f"[MetaMove] Metamove search: {len(best.turns)} turns, "
            f"{best.num_affected_pieces} pieces affected"
        )
        return self._start(best)

    def _start(self, metamove: MetaMove) -> int:
        """Apply the first turn of a chosen metamove and buffer the rest."""
        self._buffered_turns.clear()
        self._buffered_turns.extend(metamove.turns[1:])
        return self._apply_turn(metamove.turns[0])

    def _search_turns(self, depth: int) -> Optional[MetaMove]:
        """
        Find the raw-turn sequence that most improves the score.

        Args:
            depth: Longest sequence to try

        Returns:
            Best improving sequence (fewest turns on score ties), or None
        """
        best: Optional[MetaMove] = None
        best_score = self.puzzle.score(self._state)

        def visit(metamove: MetaMove) -> TraverseResult:
            nonlocal best, best_score
            score = self.puzzle.score(self.puzzle.derive_state(self._state, metamove.face_map))
            if score > best_score or (
                    score == best_score and best is not None
                    and len(metamove.turns) < len(best.turns)):
                best = metamove
                best_score = score
            return TraverseResult.CONTINUE

        traverse_combinations(
            self._turn_metamoves, depth, MetaMove.empty(self.puzzle), MetaMove.apply, visit
        )
        return best

    def _search_metamoves(self) -> Optional[MetaMove]:
        """
        Find the library combination giving the highest score.

        Stops at the first combination that solves the puzzle.

        Returns:
            Best improving combination, or None if nothing improves
        """
        best: Optional[MetaMove] = None
        best_score = self.puzzle.score(self._state)
        num_pieces = self.puzzle.num_pieces

        def visit(metamove: MetaMove) -> TraverseResult:
            nonlocal best, best_score
            score = self.puzzle.score(self.puzzle.derive_state(self._state, metamove.face_map))
            if score > best_score:
                best = metamove
                best_score = score
            if score == num_pieces:
                return TraverseResult.BREAK
            return TraverseResult.CONTINUE

        traverse_combinations(
            self.metamoves, self.options.solve_depth, MetaMove.empty(self.puzzle),
            MetaMove.apply, visit
        )
        return best
