"""Sphinx configuration for tsqlsplit documentation."""

import os
import sys

# Add src/ to path so Sphinx can import tsqlsplit modules directly
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src")))

project = "tsqlsplit"
author = "tsqlsplit contributors"
copyright = "2026, tsqlsplit contributors"  # noqa: A001

extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.intersphinx",
    "sphinx.ext.napoleon",
    "sphinx.ext.viewcode",
    "sphinx_autodoc_typehints",
    "sphinx_copybutton",
]

# Napoleon (Google-style docstrings)
napoleon_google_docstring = True
napoleon_numpy_docstring = False

# Theme
html_theme = "furo"
html_title = "tsqlsplit"

# Autodoc
autodoc_member_order = "bysource"
autodoc_typehints = "description"

# Intersphinx
intersphinx_mapping = {
    "python": ("https://docs.python.org/3", None),
}

# General
exclude_patterns = ["_build"]
