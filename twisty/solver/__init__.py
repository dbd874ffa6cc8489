"""
Solver Package - Combinatorial search engine for twisty puzzles.

This package provides the combination traversal engine, the metamove
discovery pipeline and a pluggable pull-based solver framework. Solvers
are selected by name via the registry.

Public API:
    - traverse_combinations(): Depth-bounded combination traversal
    - TraverseResult: Visitor CONTINUE / BREAK signal
    - MetaMove: Turn sequence plus its net permutation
    - discover_metamoves(), combine_metamoves(), filter_duplicates()
    - build_metamove_library(): Full discovery pipeline
    - ScrambleSolver: Abstract base for solvers
    - create_solver(): Factory function
    - solve_scramble(): Pull a solver to exhaustion
    - Solution: Result of a solve

Usage:
    import numpy as np
    from twisty.puzzle import rubiks_cube_3x3
    from twisty.solver import create_solver, solve_scramble

    puzzle = rubiks_cube_3x3()
    scrambled = puzzle.scramble(puzzle.initial_state(), 20, np.random.default_rng(1))

    solver = create_solver("metamove", puzzle, scrambled)
    solution = solve_scramble(solver)

    if solution.is_solved:
        print(" ".join(solution.turn_names(puzzle)))
"""

# Search engine
from .traverse import TraverseResult, traverse_combinations
from .metamove import MetaMove, turn_metamoves
from .metamoves import (
    build_metamove_library,
    combine_metamoves,
    discover_metamoves,
    expand_repeats,
    filter_duplicates,
)

# Solver framework
from .base import ScrambleSolver, SolverConfigurationError
from .solution import Solution, SolutionMetrics, replay, solve_scramble
from .factory import (
    create_solver,
    create_solver_from_settings,
    get_default_solver_name,
    get_solver_class,
    get_solver_info,
    get_solver_names,
    register_solver,
)

# Import strategies to register them
from . import strategies
from .strategies import MetaMoveSolver, MetaMoveSolverOptions, SolvePhase

__all__ = [
    # Search engine
    "TraverseResult",
    "traverse_combinations",
    "MetaMove",
    "turn_metamoves",
    "build_metamove_library",
    "combine_metamoves",
    "discover_metamoves",
    "expand_repeats",
    "filter_duplicates",
    # Solver framework
    "ScrambleSolver",
    "SolverConfigurationError",
    "Solution",
    "SolutionMetrics",
    "replay",
    "solve_scramble",
    "create_solver",
    "create_solver_from_settings",
    "get_default_solver_name",
    "get_solver_class",
    "get_solver_info",
    "get_solver_names",
    "register_solver",
    # Solvers
    "MetaMoveSolver",
    "MetaMoveSolverOptions",
    "SolvePhase",
]
