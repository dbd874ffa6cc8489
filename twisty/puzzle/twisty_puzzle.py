"""
Twisty Puzzle Module - Immutable puzzle description and state derivation.

A puzzle is a fixed set of face positions, grouped into pieces, plus a
fixed library of turns. Each turn is a permutation of face positions:
``face_map[i]`` is the position the face at position ``i`` moves to.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import numpy as np

from .state import PuzzleState

logger = logging.getLogger(__name__)


def as_face_map(values: Sequence[int]) -> np.ndarray:
    """Convert a sequence of positions into a read-only permutation array."""
    face_map = np.array(values, dtype=np.intp)
    face_map.setflags(write=False)
    return face_map


def cycles_to_face_map(num_faces: int, cycles: Iterable[Sequence[int]]) -> np.ndarray:
    """
    Build a face map from cycle notation.

    Each cycle ``(a, b, c)`` sends the face at ``a`` to ``b``, ``b`` to ``c``
    and ``c`` back to ``a``. Positions not mentioned stay in place.

    Args:
        num_faces: Number of face positions in the puzzle
        cycles: Iterable of position cycles

    Returns:
        Read-only face map array
    """
    face_map = list(range(num_faces))
    for cycle in cycles:
        for i, position in enumerate(cycle):
            face_map[position] = cycle[(i + 1) % len(cycle)]
    return as_face_map(face_map)


@dataclass(frozen=True, eq=False)
class Turn:
    """
    One atomic, reversible move of a puzzle.

    Attributes:
        name: Human-readable turn name (e.g. "R'")
        face_map: Permutation of face positions applied by this turn
    """
    name: str
    face_map: np.ndarray


class TwistyPuzzle:
    """
    Immutable description of a twisty puzzle.

    Shared by reference between every state, metamove and solver that
    needs puzzle metadata; nothing mutates it after construction.

    Attributes:
        turns: Ordered list of available turns
        num_faces: Number of face positions
        pieces: Ordered tuple of face-position groups. A piece is solved when
                all of its faces are home, and affected when any of them moves.
    """

    def __init__(self, turns: Sequence[Turn], num_faces: int,
                 pieces: Optional[Sequence[Sequence[int]]] = None):
        """
        Initialize and validate a puzzle definition.

        Args:
            turns: Turns available on this puzzle
            num_faces: Number of face positions
            pieces: Face groups forming pieces (default: one piece per face)

        Raises:
            ValueError: If a face map is not a bijection over the positions
                        or the piece groups are malformed
        """
        if num_faces <= 0:
            raise ValueError(f"Puzzle needs at least one face, got {num_faces}")
        if not turns:
            raise ValueError("Puzzle needs at least one turn")

        # Face maps always compose as read-only index arrays
        turns = [Turn(turn.name, as_face_map(turn.face_map)) for turn in turns]
        identity = np.arange(num_faces, dtype=np.intp)
        for turn in turns:
            if len(turn.face_map) != num_faces:
                raise ValueError(
                    f"Turn {turn.name} has {len(turn.face_map)} entries, expected {num_faces}"
                )
            if not np.array_equal(np.sort(turn.face_map), identity):
                raise ValueError(f"Turn {turn.name} is not a permutation of face positions")

        if pieces is None:
            pieces = [(face,) for face in range(num_faces)]
        pieces = tuple(tuple(int(face) for face in piece) for piece in pieces)
        if not pieces:
            raise ValueError("Puzzle needs at least one piece")

        seen = set()
        for piece in pieces:
            if not piece:
                raise ValueError("Pieces must contain at least one face")
            for face in piece:
                if not 0 <= face < num_faces:
                    raise ValueError(f"Piece face {face} out of range 0..{num_faces - 1}")
                if face in seen:
                    raise ValueError(f"Face {face} belongs to more than one piece")
                seen.add(face)

        self.turns: Tuple[Turn, ...] = tuple(turns)
        self.num_faces = num_faces
        self.pieces: Tuple[Tuple[int, ...], ...] = pieces

        # Flattened piece layout for vectorised per-piece reductions
        self._piece_faces = np.array([f for piece in pieces for f in piece], dtype=np.intp)
        self._piece_starts = np.cumsum([0] + [len(piece) for piece in pieces[:-1]])
        self._solved = PuzzleState.solved(num_faces)

    @classmethod
    def from_cycles(cls, num_faces: int, turns: Dict[str, Iterable[Sequence[int]]],
                    pieces: Optional[Sequence[Sequence[int]]] = None) -> 'TwistyPuzzle':
        """
        Create a puzzle from turns written in cycle notation.

        Args:
            num_faces: Number of face positions
            turns: Mapping of turn name to its position cycles
            pieces: Face groups forming pieces (default: one piece per face)

        Returns:
            TwistyPuzzle instance
        """
        return cls(
            [Turn(name, cycles_to_face_map(num_faces, cycles)) for name, cycles in turns.items()],
            num_faces,
            pieces,
        )

    @property
    def num_pieces(self) -> int:
        """Number of pieces (maximum possible score)."""
        return len(self.pieces)

    @property
    def num_turns(self) -> int:
        """Number of available turns."""
        return len(self.turns)

    def turn(self, index: int) -> Turn:
        """
        Get turn by index.

        Raises:
            IndexError: If index is out of range
        """
        if not 0 <= index < len(self.turns):
            raise IndexError(f"Turn index {index} out of range 0..{len(self.turns) - 1}")
        return self.turns[index]

    def turn_index(self, name: str) -> int:
        """
        Look up a turn index by name.

        Raises:
            ValueError: If no turn has that name
        """
        for index, turn in enumerate(self.turns):
            if turn.name == name:
                return index
        raise ValueError(f"Unknown turn: {name}")

    def initial_state(self) -> PuzzleState:
        """Get the canonical solved state."""
        return self._solved

    def derive_state(self, state: PuzzleState, face_map: np.ndarray) -> PuzzleState:
        """
        Apply a permutation to a state.

        Args:
            state: State to derive from (unchanged)
            face_map: Permutation of face positions

        Returns:
            New PuzzleState
        """
        faces = np.empty_like(state.faces)
        faces[face_map] = state.faces
        faces.setflags(write=False)
        return PuzzleState(faces=faces)

    def derive_state_turn(self, state: PuzzleState, turn_index: int) -> PuzzleState:
        """Apply a single turn, by index, to a state."""
        return self.derive_state(state, self.turn(turn_index).face_map)

    def derive_state_from_sequence(self, state: PuzzleState,
                                   turn_indices: Iterable[int]) -> PuzzleState:
        """Apply an ordered sequence of turns to a state."""
        for turn_index in turn_indices:
            state = self.derive_state_turn(state, turn_index)
        return state

    def score(self, state: PuzzleState) -> int:
        """
        Count solved pieces.

        A piece is solved when every one of its faces is occupied by the
        same face as in the solved state.

        Returns:
            Number of solved pieces, in range [0, num_pieces]
        """
        home = state.faces[self._piece_faces] == self._solved.faces[self._piece_faces]
        return int(np.logical_and.reduceat(home, self._piece_starts).sum())

    def is_solved(self, state: PuzzleState) -> bool:
        """Check whether every piece is solved."""
        return self.score(state) == self.num_pieces

    def num_affected_pieces(self, face_map: np.ndarray) -> int:
        """Count pieces with at least one face moved by a permutation."""
        moved = face_map[self._piece_faces] != self._piece_faces
        return int(np.logical_or.reduceat(moved, self._piece_starts).sum())

    def scramble_turns(self, num_turns: int, rng: np.random.Generator) -> List[int]:
        """
        Pick turns uniformly at random.

        Args:
            num_turns: Number of turns to pick
            rng: Seedable random source

        Returns:
            List of turn indices
        """
        return [int(index) for index in rng.integers(0, len(self.turns), size=num_turns)]

    def scramble(self, state: PuzzleState, num_turns: int,
                 rng: np.random.Generator) -> PuzzleState:
        """
        Apply ``num_turns`` uniformly random turns to a state.

        Args:
            state: State to scramble
            num_turns: Number of random turns
            rng: Seedable random source (e.g. ``np.random.default_rng(seed)``)

        Returns:
            Scrambled PuzzleState
        """
        turns = self.scramble_turns(num_turns, rng)
        logger.debug(f"[Puzzle] Scramble: {' '.join(self.turns[i].name for i in turns)}")
        return self.derive_state_from_sequence(state, turns)
