# Configuration file for the Sphinx documentation builder.

import os
import sys
sys.path.insert(0, os.path.abspath('../../src'))

# -- Project information -----------------------------------------------------
project = 'hillshade'
copyright = '2026, hillshade contributors'
author = 'hillshade contributors'
release = '1.0'

# -- General configuration ---------------------------------------------------
# autosummary builds the API pages listed in index.md; myst reads index.md
extensions = [
    'sphinx.ext.autodoc',
    'sphinx.ext.autosummary',
    'sphinx.ext.napoleon',
    'sphinx.ext.intersphinx',
    'myst_parser',
]

# Google-style docstrings only
napoleon_google_docstring = True
napoleon_numpy_docstring = False

autodoc_default_options = {
    'members': True,
    'member-order': 'bysource',
    'undoc-members': True,
}
autodoc_typehints = 'description'
autosummary_generate = True

exclude_patterns = []

# -- Options for HTML output -------------------------------------------------
html_theme = 'sphinx_rtd_theme'
html_title = 'hillshade'

# np.ndarray in docstrings links to the numpy docs
intersphinx_mapping = {
    'python': ('https://docs.python.org/3', None),
    'numpy': ('https://numpy.org/doc/stable/', None),
}
