"""
Strategies Package - Concrete solver implementations.

Import this module to register all built-in solvers.
"""

from .metamove_solver import MetaMoveSolver, MetaMoveSolverOptions, SolvePhase

__all__ = [
    "MetaMoveSolver",
    "MetaMoveSolverOptions",
    "SolvePhase",
]
