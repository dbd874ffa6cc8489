"""
Solver Factory Module - Registry and factory for solver instantiation.
"""

from typing import Any, Dict, List, Mapping, Optional, Type

from ..puzzle import PuzzleState, TwistyPuzzle
from .base import ScrambleSolver


# Global registry of solvers
_SOLVERS: Dict[str, Type[ScrambleSolver]] = {}


def register_solver(cls: Type[ScrambleSolver]) -> Type[ScrambleSolver]:
    """
    Decorator to register a solver class.

    Usage:
        @register_solver
        class MySolver(ScrambleSolver):
            name = "my_solver"
            ...

    Args:
        cls: Solver class to register

    Returns:
        The same class (for decorator chaining)
    """
    _SOLVERS[cls.name] = cls
    return cls


def create_solver(name: str, puzzle: TwistyPuzzle, initial_state: PuzzleState,
                  options: Optional[Any] = None) -> ScrambleSolver:
    """
    Create a solver instance by name.

    Construction runs the solver's precomputation, so this may be slow.

    Args:
        name: Solver name (e.g., "metamove")
        puzzle: Shared puzzle description
        initial_state: Scrambled state to solve
        options: Solver-specific options (solver defaults if None)

    Returns:
        Solver instance

    Raises:
        ValueError: If solver name not found
    """
    if name not in _SOLVERS:
        available = ", ".join(_SOLVERS.keys())
        raise ValueError(f"Unknown solver: {name}. Available: {available}")
    return _SOLVERS[name](puzzle, initial_state, options)


def create_solver_from_settings(puzzle: TwistyPuzzle, initial_state: PuzzleState,
                                settings: Mapping[str, Any]) -> ScrambleSolver:
    """
    Create the solver named in a settings mapping, with its configured options.

    Args:
        puzzle: Shared puzzle description
        initial_state: Scrambled state to solve
        settings: Settings mapping (see twisty.settings.load_settings)

    Returns:
        Solver instance

    Raises:
        ValueError: If the configured solver name is not registered
    """
    name = settings.get("solver_name") or get_default_solver_name()
    cls = get_solver_class(name)
    options = cls.options_from_settings(settings.get(name) or {})
    return cls(puzzle, initial_state, options)


def get_solver_class(name: str) -> Type[ScrambleSolver]:
    """
    Get a registered solver class by name.

    Raises:
        ValueError: If solver name not found
    """
    if name not in _SOLVERS:
        available = ", ".join(_SOLVERS.keys())
        raise ValueError(f"Unknown solver: {name}. Available: {available}")
    return _SOLVERS[name]


def get_solver_names() -> List[str]:
    """
    Get list of available solver names.

    Returns:
        List of registered solver names
    """
    return list(_SOLVERS.keys())


def get_solver_info() -> List[Dict[str, str]]:
    """
    Get name and description for all registered solvers.

    Returns:
        List of dicts with 'name' and 'description' keys
    """
    return [
        {"name": cls.name, "description": cls.description}
        for cls in _SOLVERS.values()
    ]


def get_default_solver_name() -> str:
    """
    Get the default solver name.

    Returns:
        Default solver name ("metamove" if available, else first registered)
    """
    if "metamove" in _SOLVERS:
        return "metamove"
    if _SOLVERS:
        return next(iter(_SOLVERS.keys()))
    return ""
