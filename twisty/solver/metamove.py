"""
MetaMove Module - Net effect of a sequence of turns.
"""

from dataclasses import dataclass, field
from functools import cached_property
from typing import List, Sequence, Tuple

import numpy as np

from ..puzzle import TwistyPuzzle, as_face_map


@dataclass(frozen=True, eq=False)
class MetaMove:
    """
    A turn sequence together with its composed permutation.

    ``face_map`` is always exactly the composition of the face maps of
    ``turns`` in order. ``num_affected_pieces`` is derived from ``face_map``
    on first use and cached.

    Ordering: fewer affected pieces first, then fewer turns. This is what
    "better" means for selection and for duplicate tie-breaking.

    Attributes:
        puzzle: Shared puzzle description (not copied)
        turns: Ordered turn indices
        face_map: Net permutation of applying ``turns`` in order
    """
    puzzle: TwistyPuzzle = field(repr=False)
    turns: Tuple[int, ...]
    face_map: np.ndarray = field(repr=False)

    @classmethod
    def empty(cls, puzzle: TwistyPuzzle) -> 'MetaMove':
        """Create the identity metamove (no turns)."""
        return cls(puzzle, (), as_face_map(np.arange(puzzle.num_faces)))

    @classmethod
    def from_turn(cls, puzzle: TwistyPuzzle, turn_index: int) -> 'MetaMove':
        """Create a metamove for a single raw turn."""
        return cls(puzzle, (turn_index,), puzzle.turn(turn_index).face_map)

    @classmethod
    def from_turns(cls, puzzle: TwistyPuzzle, turns: Sequence[int]) -> 'MetaMove':
        """
        Create a metamove by composing a turn sequence.

        Args:
            puzzle: Puzzle the turns belong to
            turns: Ordered turn indices

        Returns:
            MetaMove with the inferred face map
        """
        metamove = cls.empty(puzzle)
        for turn_index in turns:
            metamove = metamove.apply(cls.from_turn(puzzle, turn_index))
        return metamove

    @cached_property
    def num_affected_pieces(self) -> int:
        """Number of pieces this metamove displaces."""
        return self.puzzle.num_affected_pieces(self.face_map)

    @property
    def is_identity(self) -> bool:
        """True if the net effect moves nothing."""
        return bool(np.array_equal(self.face_map, np.arange(len(self.face_map))))

    @property
    def effect_key(self) -> bytes:
        """Hashable identity of the net effect (two metamoves with equal keys are interchangeable)."""
        return self.face_map.tobytes()

    @property
    def sort_key(self) -> Tuple[int, int]:
        """Key for the "better" ordering: affected pieces, then turn count."""
        return (self.num_affected_pieces, len(self.turns))

    def apply(self, other: 'MetaMove') -> 'MetaMove':
        """
        Follow this metamove with another.

        Args:
            other: Metamove performed after this one

        Returns:
            New metamove with concatenated turns and composed face map
        """
        face_map = other.face_map[self.face_map]
        face_map.setflags(write=False)
        return MetaMove(self.puzzle, self.turns + other.turns, face_map)

    def repeat(self, times: int) -> 'MetaMove':
        """Perform this metamove ``times`` times in a row."""
        metamove = MetaMove.empty(self.puzzle)
        for _ in range(times):
            metamove = metamove.apply(self)
        return metamove

    def discover_repeat_metamoves(self, max_repeats: int) -> List['MetaMove']:
        """
        Collect repeated versions of this metamove.

        Repeating a metamove can cancel some of its internal piece cycles,
        leaving a longer sequence that displaces fewer pieces.

        Args:
            max_repeats: Highest repetition count to try

        Returns:
            Metamoves for 2..max_repeats repetitions, stopping before the
            first repetition that returns to the identity
        """
        repeats = []
        current = self
        for _ in range(2, max_repeats + 1):
            current = current.apply(self)
            if current.is_identity:
                break
            repeats.append(current)
        return repeats

    def __lt__(self, other: 'MetaMove') -> bool:
        return self.sort_key < other.sort_key

    def __eq__(self, other):
        if not isinstance(other, MetaMove):
            return False
        return self.turns == other.turns and np.array_equal(self.face_map, other.face_map)

    def __hash__(self):
        return hash((self.turns, self.effect_key))


def turn_metamoves(puzzle: TwistyPuzzle) -> List[MetaMove]:
    """One single-turn metamove per raw turn, in turn order."""
    return [MetaMove.from_turn(puzzle, index) for index in range(puzzle.num_turns)]
