"""
Tests for JSON settings persistence.

Usage:
    pytest tests/test_settings.py
"""

import json
import logging

from twisty.settings import DEFAULT_SETTINGS, load_settings, save_settings
from twisty.solver import MetaMoveSolverOptions


def test_missing_file_gives_defaults(tmp_path):
    settings = load_settings(tmp_path / "config.json")
    assert settings == DEFAULT_SETTINGS
    assert settings is not DEFAULT_SETTINGS

    settings["metamove"]["solve_depth"] = 9
    assert DEFAULT_SETTINGS["metamove"]["solve_depth"] == 2


def test_sections_merge_with_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"metamove": {"solve_depth": 1}}), encoding="utf-8")

    settings = load_settings(path)
    assert settings["solver_name"] == "metamove"
    assert settings["metamove"]["solve_depth"] == 1
    assert settings["metamove"]["discover_depth"] == 5


def test_invalid_file_gives_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")
    assert load_settings(path) == DEFAULT_SETTINGS

    path.write_text("[1, 2]", encoding="utf-8")
    assert load_settings(path) == DEFAULT_SETTINGS


def test_save_then_load(tmp_path):
    path = tmp_path / "config.json"
    settings = load_settings(path)
    settings["metamove"]["search_depths"] = [3]
    save_settings(settings, path)

    loaded = load_settings(path)
    assert loaded["metamove"]["search_depths"] == [3]
    assert MetaMoveSolverOptions.from_settings(loaded["metamove"]).search_depths == (3,)


def test_default_settings_match_default_options():
    options = MetaMoveSolverOptions.from_settings(DEFAULT_SETTINGS["metamove"])
    assert options == MetaMoveSolverOptions()


def test_only_invalid_files_warn(tmp_path, caplog):
    """A missing file is normal; an unreadable one is reported."""
    path = tmp_path / "config.json"
    with caplog.at_level(logging.DEBUG, logger="twisty.settings"):
        load_settings(path)
    assert not [r for r in caplog.records if r.levelno >= logging.WARNING]

    caplog.clear()
    path.write_text("{not json", encoding="utf-8")
    with caplog.at_level(logging.DEBUG, logger="twisty.settings"):
        load_settings(path)
    assert [r.levelno for r in caplog.records] == [logging.WARNING]
