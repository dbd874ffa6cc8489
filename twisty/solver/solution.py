"""
Solution Module - Drive a solver to exhaustion and collect its turns.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from ..puzzle import PuzzleState, TwistyPuzzle
from .base import ScrambleSolver

logger = logging.getLogger(__name__)


@dataclass
class SolutionMetrics:
    """
    Performance metrics for a solve.

    Attributes:
        computation_time_ms: Time spent pulling turns in milliseconds
        pulls: Number of turns pulled from the solver
        solver_name: Name of solver that produced the turns
    """
    computation_time_ms: float = 0.0
    pulls: int = 0
    solver_name: str = ""


@dataclass
class Solution:
    """
    Result of driving a solver.

    Attributes:
        turns: Turn indices in the order they were yielded
        initial_state: State the solver started from
        final_state: Solver state after the last yielded turn
        is_solved: True if the final state is solved
        is_exhausted: True if the solver stopped deciding turns
                      (False when the caller's pull limit cut it short)
        metrics: Performance statistics
    """
    turns: List[int] = field(default_factory=list)
    initial_state: Optional[PuzzleState] = None
    final_state: Optional[PuzzleState] = None
    is_solved: bool = False
    is_exhausted: bool = False
    metrics: SolutionMetrics = field(default_factory=SolutionMetrics)

    @property
    def turn_count(self) -> int:
        """Number of turns in solution."""
        return len(self.turns)

    @property
    def is_stalled(self) -> bool:
        """True if the solver gave up before solving."""
        return self.is_exhausted and not self.is_solved

    def turn_names(self, puzzle: TwistyPuzzle) -> List[str]:
        """Turn names for display (e.g. ["R", "U'"])."""
        return [puzzle.turn(index).name for index in self.turns]


def replay(puzzle: TwistyPuzzle, state: PuzzleState, turns: Iterable[int]) -> PuzzleState:
    """
    Apply a recorded turn sequence to a state.

    Args:
        puzzle: Puzzle the turns belong to
        state: State to start from
        turns: Turn indices to apply in order

    Returns:
        Resulting state
    """
    return puzzle.derive_state_from_sequence(state, turns)


def solve_scramble(solver: ScrambleSolver, max_pulls: Optional[int] = None) -> Solution:
    """
    Pull turns from a solver until it is exhausted.

    Args:
        solver: Freshly constructed solver
        max_pulls: Optional bound on the number of pulls

    Returns:
        Solution with the yielded turns and final state
    """
    start_time = time.perf_counter()
    initial_state = solver.state
    turns: List[int] = []
    exhausted = False

    while max_pulls is None or len(turns) < max_pulls:
        turn = solver.advance()
        if turn is None:
            exhausted = True
            break
        turns.append(turn)

    elapsed_ms = (time.perf_counter() - start_time) * 1000
    solution = Solution(
        turns=turns,
        initial_state=initial_state,
        final_state=solver.state,
        is_solved=solver.is_solved(),
        is_exhausted=exhausted,
        metrics=SolutionMetrics(
            computation_time_ms=elapsed_ms,
            pulls=len(turns),
            solver_name=solver.name,
        ),
    )

    if solution.is_solved:
        logger.info(f"[Solution] Solved in {len(turns)} turns ({elapsed_ms:.0f}ms)")
    else:
        logger.info(
            f"[Solution] Stopped unsolved after {len(turns)} turns, score "
            f"{solver.puzzle.score(solver.state)}/{solver.puzzle.num_pieces}"
        )
    return solution
