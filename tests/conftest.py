"""
Shared fixtures and command line options for the solver tests.

Slow tests (full 3x3x3 solves) only run with ``--runslow``:

    pytest --runslow
"""

import sys
from pathlib import Path

import numpy as np
import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from twisty.puzzle import TwistyPuzzle, rubiks_cube_2x2, rubiks_cube_3x3, rubiks_cube_stickers


def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption(
        "--runslow",
        action="store_true",
        default=False,
        help="Run slow end-to-end solver tests",
    )


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow (run with --runslow)")


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless --runslow was given."""
    if config.getoption("--runslow"):
        return
    skip_slow = pytest.mark.skip(reason="needs --runslow")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


@pytest.fixture
def toy_puzzle() -> TwistyPuzzle:
    """Two turns on four pieces: A cycles all four, B cycles the last three."""
    return TwistyPuzzle.from_cycles(4, {"A": [(0, 1, 2, 3)], "B": [(1, 2, 3)]})


@pytest.fixture
def swap_puzzle() -> TwistyPuzzle:
    """A single swap of two pieces; nothing is cheaper than the turn itself."""
    return TwistyPuzzle.from_cycles(2, {"S": [(0, 1)]})


@pytest.fixture(scope="session")
def cube() -> TwistyPuzzle:
    return rubiks_cube_3x3()


@pytest.fixture(scope="session")
def pocket_cube() -> TwistyPuzzle:
    return rubiks_cube_2x2()


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(1)


@pytest.fixture(scope="session")
def sticker_cube() -> TwistyPuzzle:
    """3x3x3 tracked by facelet, where a twisted cubie is unsolved."""
    return rubiks_cube_stickers(3)
