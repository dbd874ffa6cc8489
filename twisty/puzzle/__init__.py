"""
Puzzle Package - Puzzle model, immutable states and concrete puzzle builders.

Public API:
    - TwistyPuzzle: Immutable puzzle description (turns, faces, pieces)
    - Turn: Named face-position permutation
    - PuzzleState: Immutable piece arrangement
    - rubiks_cube(): n x n x n cube by cubie position
    - rubiks_cube_stickers(): n x n x n cube by facelet (orientation counts)

Usage:
    from twisty.puzzle import rubiks_cube_3x3
    import numpy as np

    puzzle = rubiks_cube_3x3()
    scrambled = puzzle.scramble(puzzle.initial_state(), 20, np.random.default_rng(1))
    print(f"{puzzle.score(scrambled)}/{puzzle.num_pieces} pieces solved")
"""

from .state import PuzzleState
from .twisty_puzzle import Turn, TwistyPuzzle, as_face_map, cycles_to_face_map
from .puzzles import rubiks_cube, rubiks_cube_2x2, rubiks_cube_3x3, rubiks_cube_stickers

__all__ = [
    "PuzzleState",
    "Turn",
    "TwistyPuzzle",
    "as_face_map",
    "cycles_to_face_map",
    "rubiks_cube",
    "rubiks_cube_2x2",
    "rubiks_cube_3x3",
    "rubiks_cube_stickers",
]
