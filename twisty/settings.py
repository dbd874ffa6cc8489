"""
Settings Module for the twisty puzzle solver

Provides persistent storage for solver configuration using JSON.
Settings are stored in config.json in the working directory by default.
"""

import copy
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

# Settings file location (working directory)
SETTINGS_FILE = Path("config.json")

# Default settings
DEFAULT_SETTINGS: Dict[str, Any] = {
    "solver_name": "metamove",
    "metamove": {
        "discover_depth": 5,
        "combine_depth": 2,
        "max_affected_pieces": 3,
        "max_repeats": 6,
        "search_depths": [4, 5],
        "solve_depth": 2,
    },
}


def _defaults() -> Dict[str, Any]:
    return copy.deepcopy(DEFAULT_SETTINGS)


def load_settings(path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load settings from a JSON file.

    Solver sections are merged key by key, so a file only needs to
    mention the values it changes.

    Args:
        path: Settings file (default: SETTINGS_FILE)

    Returns:
        Settings dictionary. Returns defaults if file missing or invalid.
    """
    path = Path(path) if path is not None else SETTINGS_FILE
    if not path.exists():
        logger.debug("Settings file not found, using defaults")
        return _defaults()

    try:
        with open(path, 'r', encoding='utf-8') as f:
            settings = json.load(f)
        if not isinstance(settings, dict):
            raise ValueError("top-level JSON value is not an object")

        # Merge with defaults to handle missing keys
        result = _defaults()
        for key, value in settings.items():
            if isinstance(result.get(key), dict) and isinstance(value, dict):
                result[key].update(value)
            else:
                result[key] = value
        logger.debug(f"Settings loaded: {result}")
        return result

    except (json.JSONDecodeError, ValueError, IOError) as e:
        logger.warning(f"Failed to load settings: {e}, using defaults")
        return _defaults()


def save_settings(settings: Dict[str, Any], path: Optional[Path] = None) -> None:
    """
    Save settings to a JSON file.

    Args:
        settings: Settings dictionary to save
        path: Settings file (default: SETTINGS_FILE)
    """
    path = Path(path) if path is not None else SETTINGS_FILE
    try:
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(settings, f, indent=2)
        logger.debug(f"Settings saved: {settings}")
    except IOError as e:
        logger.error(f"Failed to save settings: {e}")
