"""Smoke test for the script-splitting recipebook notebook."""

from __future__ import annotations

import importlib

import pytest

marimo = pytest.importorskip("marimo")


def test_script_splitting_recipe_runs() -> None:
    """Every cell of the marimo App executes without raising."""
    recipe = importlib.import_module("recipes.script_splitting")
    assert isinstance(recipe.app, marimo.App)
    recipe.app.run()
