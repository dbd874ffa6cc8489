"""
Puzzle Builders - Concrete puzzle definitions for driving and testing the solver.

``rubiks_cube`` models a cube by cubie position: every cubie that a face
turn can move is one position, and its orientation is not tracked.
``rubiks_cube_stickers`` models the same cube facelet by facelet, with the
facelets of one cubie grouped into a piece, so a twisted cubie is unsolved.

Coordinates are doubled so every cubie centre lands on an integer lattice
point.
"""

from typing import Dict, List, Set, Tuple

import numpy as np

from .twisty_puzzle import Turn, TwistyPuzzle, as_face_map

# Face name -> (axis, sign) of its outward normal
CUBE_FACES: Dict[str, Tuple[int, int]] = {
    "U": (1, 1),
    "D": (1, -1),
    "F": (2, 1),
    "B": (2, -1),
    "L": (0, -1),
    "R": (0, 1),
}

# Quarter turn (+90 degrees, right-hand rule) about each axis
_QUARTER_ROTATIONS = (
    np.array([[1, 0, 0], [0, 0, -1], [0, 1, 0]]),
    np.array([[0, 0, 1], [0, 1, 0], [-1, 0, 0]]),
    np.array([[0, -1, 0], [1, 0, 0], [0, 0, 1]]),
)

# A face position as a tuple of vectors; the first vector is the cubie position
Element = Tuple[Tuple[int, ...], ...]


def _check_size(n: int) -> None:
    if n < 2:
        raise ValueError(f"Cube size must be at least 2, got {n}")


def _cubies(n: int) -> List[Element]:
    """Every cubie an outer-face turn can move (no interior, no fixed centres)."""
    outer = n - 1
    coords = range(-outer, outer + 1, 2)
    cubies = []
    for x in coords:
        for y in coords:
            for z in coords:
                position = (x, y, z)
                if outer not in (abs(x), abs(y), abs(z)):
                    continue
                # Odd cubes: a face centre only spins in place
                if sum(c != 0 for c in position) == 1:
                    continue
                cubies.append((position,))
    return cubies


def _stickers(n: int) -> List[Element]:
    """List (cubie position, outward normal) for every facelet, face by face."""
    outer = n - 1
    coords = range(-outer, outer + 1, 2)
    stickers = []
    for axis, sign in CUBE_FACES.values():
        normal = tuple(sign if a == axis else 0 for a in range(3))
        for u in coords:
            for v in coords:
                position = [u, v]
                position.insert(axis, sign * outer)
                stickers.append((tuple(position), normal))
    return stickers


def _face_turn(elements: List[Element], index: Dict[Element, int],
               axis: int, sign: int, outer: int, rotation: np.ndarray) -> np.ndarray:
    """Face map rotating every element in the outer layer of one face."""
    face_map = list(range(len(elements)))
    for i, element in enumerate(elements):
        if element[0][axis] != sign * outer:
            continue
        moved = tuple(tuple(int(c) for c in rotation @ np.array(vector)) for vector in element)
        face_map[i] = index[moved]
    return as_face_map(face_map)


def _cube_turns(elements: List[Element], n: int) -> List[Turn]:
    """The twelve outer-face quarter turns, ordered ``U U' D D' F F' B B' L L' R R'``."""
    outer = n - 1
    index = {element: i for i, element in enumerate(elements)}

    turns = []
    for name, (axis, sign) in CUBE_FACES.items():
        quarter = _QUARTER_ROTATIONS[axis]
        # Clockwise seen from outside is a negative rotation about the outward normal
        clockwise = quarter.T if sign > 0 else quarter
        turns.append(Turn(name, _face_turn(elements, index, axis, sign, outer, clockwise)))
        turns.append(Turn(name + "'", _face_turn(elements, index, axis, sign, outer, clockwise.T)))
    return turns


def _moving_faces(turns: List[Turn], num_faces: int) -> Set[int]:
    moving = set()
    for turn in turns:
        moving.update(int(i) for i in np.flatnonzero(turn.face_map != np.arange(num_faces)))
    return moving


def rubiks_cube(n: int = 3) -> TwistyPuzzle:
    """
    Build an n x n x n cube with the twelve outer-face quarter turns.

    Each movable cubie position is one piece; a cubie sitting in its home
    position counts as solved whatever its orientation. Turns are ordered
    ``U U' D D' F F' B B' L L' R R'``; an unprimed turn is clockwise when
    looking at that face.

    Args:
        n: Cube size (2 or more)

    Returns:
        TwistyPuzzle with one face per cubie position: 20 for the 3x3x3,
        8 for the 2x2x2
    """
    _check_size(n)
    cubies = _cubies(n)
    return TwistyPuzzle(_cube_turns(cubies, n), len(cubies))


def rubiks_cube_stickers(n: int = 3) -> TwistyPuzzle:
    """
    Build an n x n x n cube tracking every facelet.

    Same turns, in the same order, as ``rubiks_cube``. The facelets of one
    cubie form a piece, so a cubie is only solved when it is home and
    correctly oriented. Facelets that no turn moves (the fixed centres of
    odd cubes) do not belong to any piece.

    Args:
        n: Cube size (2 or more)

    Returns:
        TwistyPuzzle with 6*n*n faces; the 3x3x3 has 20 pieces and the
        2x2x2 has 8
    """
    _check_size(n)
    stickers = _stickers(n)
    turns = _cube_turns(stickers, n)
    moving = _moving_faces(turns, len(stickers))

    cubies: Dict[Tuple[int, ...], List[int]] = {}
    for i, (position, _) in enumerate(stickers):
        if i in moving:
            cubies.setdefault(position, []).append(i)

    return TwistyPuzzle(turns, len(stickers), list(cubies.values()))


def rubiks_cube_3x3() -> TwistyPuzzle:
    """Standard 3x3x3 cube: 20 cubie positions, 12 quarter turns."""
    return rubiks_cube(3)


def rubiks_cube_2x2() -> TwistyPuzzle:
    """2x2x2 pocket cube: 8 cubie positions, 12 quarter turns."""
    return rubiks_cube(2)
