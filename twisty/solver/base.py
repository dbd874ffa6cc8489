"""
Base Solver Module - Pull-based protocol shared by all scramble solvers.
"""

from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional

from ..puzzle import PuzzleState, TwistyPuzzle


class SolverConfigurationError(ValueError):
    """Raised when a solver cannot be built for the given puzzle and options."""


class ScrambleSolver(ABC):
    """
    Abstract base class for all scramble solvers.

    A solver is a stateful producer of turns. Each call to ``advance()``
    applies exactly one turn to the solver's own state and returns its
    index, or returns None once no further turn is decided. Exhaustion is
    not necessarily "solved": callers check the resulting state.

    Subclasses do all precomputation in ``__init__`` so that cost is paid
    once per solve, and define name and description class attributes.

    Attributes:
        name: Short identifier for the solver
        description: Human-readable description
    """
    name: str = "base"
    description: str = "Base solver"

    def __init__(self, puzzle: TwistyPuzzle, initial_state: PuzzleState,
                 options: Optional[Any] = None):
        """
        Initialize solver.

        Args:
            puzzle: Shared puzzle description
            initial_state: Scrambled state to solve
            options: Solver-specific configuration
        """
        self.puzzle = puzzle
        self._state = initial_state

    @classmethod
    def options_from_settings(cls, settings: Mapping[str, Any]) -> Optional[Any]:
        """
        Build solver options from this solver's settings section.

        Args:
            settings: Settings mapping for this solver (may be empty)

        Returns:
            Options object, or None to use the solver defaults
        """
        return None

    @property
    def state(self) -> PuzzleState:
        """Current puzzle state (after every turn yielded so far)."""
        return self._state

    @abstractmethod
    def advance(self) -> Optional[int]:
        """
        Decide, apply and return the next turn.

        Returns:
            Turn index that was applied, or None when exhausted
        """
        pass

    def is_solved(self) -> bool:
        """Check whether the current state is solved."""
        return self.puzzle.is_solved(self._state)

    def _apply_turn(self, turn_index: int) -> int:
        """Apply one turn to the solver state and return it."""
        self._state = self.puzzle.derive_state_turn(self._state, turn_index)
        return turn_index
