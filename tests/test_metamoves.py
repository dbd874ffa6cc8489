"""
Tests for MetaMove values and the discovery / combination pipeline.

Usage:
    pytest tests/test_metamoves.py
"""

from collections import defaultdict

import numpy as np
import pytest

from twisty.solver import (
    MetaMove,
    MetaMoveSolverOptions,
    SolverConfigurationError,
    build_metamove_library,
    combine_metamoves,
    discover_metamoves,
    expand_repeats,
    filter_duplicates,
    turn_metamoves,
)


def test_metamove_effect_matches_turns(cube, rng):
    """Applying a metamove's face map equals replaying its turns."""
    for _ in range(20):
        turns = [int(i) for i in rng.integers(0, cube.num_turns, size=6)]
        metamove = MetaMove.from_turns(cube, turns)
        state = cube.scramble(cube.initial_state(), 10, rng)

        assert metamove.turns == tuple(turns)
        assert cube.derive_state_from_sequence(state, metamove.turns) == \
            cube.derive_state(state, metamove.face_map)


def test_apply_concatenates(cube):
    r = MetaMove.from_turn(cube, cube.turn_index("R"))
    u = MetaMove.from_turn(cube, cube.turn_index("U"))
    ru = r.apply(u)

    assert ru.turns == r.turns + u.turns
    assert ru == MetaMove.from_turns(cube, list(ru.turns))
    assert ru != u.apply(r)


def test_affected_pieces_derived_from_face_map(cube):
    names = ("R", "U", "R'", "U'")
    sexy = MetaMove.from_turns(cube, [cube.turn_index(n) for n in names])
    assert sexy.num_affected_pieces == 7
    assert sexy.num_affected_pieces == cube.num_affected_pieces(sexy.face_map)
    assert MetaMove.empty(cube).num_affected_pieces == 0
    assert MetaMove.empty(cube).is_identity


def test_better_ordering(toy_puzzle):
    """Fewer affected pieces first, then fewer turns."""
    a, b = turn_metamoves(toy_puzzle)
    swap = MetaMove.from_turns(toy_puzzle, [0, 1, 1])
    long_b = MetaMove.from_turns(toy_puzzle, [1, 1, 1, 1])

    ordered = sorted([a, long_b, b, swap])
    assert ordered == [swap, b, long_b, a]
    assert min([a, b, swap]) == swap


def test_discover_enumerates_all_depths(toy_puzzle):
    found = discover_metamoves(toy_puzzle, lambda mm: True, 3)
    assert len(found) == 2 + 4 + 8
    assert found[0].turns == (0,)


def test_discover_finds_cheap_moves(toy_puzzle):
    """A then B twice swaps just two pieces."""
    found = discover_metamoves(toy_puzzle, lambda mm: 0 < mm.num_affected_pieces < 3, 3)
    assert found
    assert all(mm.num_affected_pieces == 2 for mm in found)
    assert (0, 1, 1) in [mm.turns for mm in found]


def test_combine_uses_metamoves_as_pool(toy_puzzle):
    base = [MetaMove.from_turns(toy_puzzle, [0, 1, 1]), MetaMove.from_turns(toy_puzzle, [1])]
    combined = combine_metamoves(toy_puzzle, lambda mm: True, base, 2)

    assert len(combined) == 2 + 4
    assert combined[0] == base[0]
    assert combined[1].turns == (0, 1, 1, 0, 1, 1)
    assert combined[1].is_identity


def test_filter_duplicates_soundness(toy_puzzle):
    """One survivor per effect, always with the fewest turns."""
    metamoves = discover_metamoves(toy_puzzle, lambda mm: True, 5)
    reduced = filter_duplicates(metamoves)

    keys = [mm.effect_key for mm in reduced]
    assert len(set(keys)) == len(keys)

    shortest = defaultdict(lambda: 99)
    for mm in metamoves:
        shortest[mm.effect_key] = min(shortest[mm.effect_key], len(mm.turns))
    assert set(shortest) == set(keys)
    for mm in reduced:
        assert len(mm.turns) == shortest[mm.effect_key]


def test_repeat_stops_at_identity(toy_puzzle):
    a = MetaMove.from_turn(toy_puzzle, 0)
    repeats = a.discover_repeat_metamoves(6)

    assert [mm.turns for mm in repeats] == [(0, 0), (0, 0, 0)]
    assert a.repeat(4).is_identity
    assert a.repeat(2) == repeats[0]
    assert a.discover_repeat_metamoves(2) == [repeats[0]]


def test_expand_repeats_keeps_original(toy_puzzle):
    b = MetaMove.from_turn(toy_puzzle, 1)
    expanded = expand_repeats([b], 6)
    assert [mm.turns for mm in expanded] == [(1, 1), (1,)]


def test_library_is_cheap_unique_and_sorted(toy_puzzle):
    options = MetaMoveSolverOptions(max_affected_pieces=3)
    library = build_metamove_library(toy_puzzle, options)

    assert library
    assert all(0 < mm.num_affected_pieces <= 3 for mm in library)
    assert len({mm.effect_key for mm in library}) == len(library)
    assert [mm.sort_key for mm in library] == sorted(mm.sort_key for mm in library)

    state = toy_puzzle.initial_state()
    for mm in library:
        assert toy_puzzle.derive_state_from_sequence(state, mm.turns) == \
            toy_puzzle.derive_state(state, mm.face_map)


def test_library_respects_piece_cap(toy_puzzle):
    library = build_metamove_library(toy_puzzle, MetaMoveSolverOptions(max_affected_pieces=2))
    assert library
    assert all(mm.num_affected_pieces == 2 for mm in library)


def test_empty_discovery_is_fatal(swap_puzzle):
    """Nothing cheaper than a single swap exists."""
    with pytest.raises(SolverConfigurationError):
        build_metamove_library(swap_puzzle, MetaMoveSolverOptions())


def test_metamove_hashable(toy_puzzle):
    first = MetaMove.from_turns(toy_puzzle, [0, 1])
    second = MetaMove.from_turns(toy_puzzle, [0, 1])
    assert len({first, second}) == 1
    assert np.array_equal(first.face_map, second.face_map)
