"""
Twisty - Heuristic solver for permutation twisty puzzles.
"""

__version__ = "0.1.0"
