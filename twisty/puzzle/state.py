"""
Puzzle State Module - Immutable piece arrangement for a twisty puzzle.
"""

from dataclasses import dataclass
from typing import List, Sequence, Union

import numpy as np


@dataclass(frozen=True)
class PuzzleState:
    """
    Immutable puzzle state representation.

    Wraps a read-only integer array so states can be shared between
    search branches without copying. Position ``p`` holds the identifier
    of the face currently occupying it.

    Attributes:
        faces: Read-only array of face identifiers, one per position
    """
    faces: np.ndarray

    @classmethod
    def from_faces(cls, faces: Union[Sequence[int], np.ndarray]) -> 'PuzzleState':
        """
        Create PuzzleState from a sequence of face identifiers.

        Args:
            faces: Face identifier for each position

        Returns:
            PuzzleState instance with an immutable array
        """
        array = np.array(faces, dtype=np.intp)
        array.setflags(write=False)
        return cls(faces=array)

    @classmethod
    def solved(cls, num_faces: int) -> 'PuzzleState':
        """Create the canonical solved state (every face at its own position)."""
        return cls.from_faces(np.arange(num_faces, dtype=np.intp))

    @property
    def num_faces(self) -> int:
        """Number of positions in this state."""
        return len(self.faces)

    def diff(self, other: 'PuzzleState') -> List[int]:
        """
        Find positions that differ between this state and another.

        Args:
            other: Another PuzzleState to compare against

        Returns:
            List of position indices where occupants differ
        """
        if not isinstance(other, PuzzleState):
            raise TypeError("Can only diff against another PuzzleState")
        return [int(p) for p in np.flatnonzero(self.faces != other.faces)]

    def __hash__(self):
        """Enable using PuzzleState as dict key or in sets."""
        return hash(self.faces.tobytes())

    def __eq__(self, other):
        """Enable state equality comparison."""
        if not isinstance(other, PuzzleState):
            return False
        return np.array_equal(self.faces, other.faces)

    def to_list(self) -> List[int]:
        """Convert to a plain list of face identifiers."""
        return [int(face) for face in self.faces]
