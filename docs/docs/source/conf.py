# Configuration file for the Sphinx documentation builder.
#
# For the full list of built-in configuration values, see the documentation:
# https://www.sphinx-doc.org/en/master/usage/configuration.html

import os
import sys

# -- Project information -----------------------------------------------------
# https://www.sphinx-doc.org/en/master/usage/configuration.html#project-information

project = 'Pose Tracker'
copyright = '2025, AISRA'
author = 'AISRA'
release = '0.1.0'

# Add the project src to Python path
sys.path.insert(0, os.path.abspath('../../../src'))

# -- General configuration ---------------------------------------------------
# https://www.sphinx-doc.org/en/master/usage/configuration.html#general-configuration

extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.napoleon",      # Google/NumPy docstrings
    "sphinx.ext.viewcode",      # "View Source" links
    "myst_parser",              # Markdown support
    "sphinx_autodoc_typehints", # Nice type-hint formatting
    "sphinx.ext.autosectionlabel",
]

templates_path = ['_templates']
exclude_patterns = []

# -- Options for HTML output -------------------------------------------------
# https://www.sphinx-doc.org/en/master/usage/configuration.html#options-for-html-output

html_theme = "furo"  # clean, responsive theme

autodoc_default_options = {
    "members": True,
    "undoc-members": False,
    "private-members": False,
    "show-inheritance": True,
}

napoleon_google_docstring = True
napoleon_numpy_docstring = False
napoleon_include_init_with_doc = True
napoleon_use_param = True
napoleon_use_rtype = True

# Heavy native deps are not needed to render the API pages
autodoc_mock_imports = [
    "cv2",
    "PySide6",
    "mediapipe",
]
