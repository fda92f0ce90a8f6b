# Configuration file for the Sphinx documentation builder.
#
# This file only contains a selection of the most common options. For a full
# list see the documentation:
# https://www.sphinx-doc.org/en/master/usage/configuration.html

# -- Path setup --------------------------------------------------------------

import os
import sys
import datetime
import sphinx_rtd_theme
sys.path.insert(0, os.path.abspath('../..'))


# -- Project information -----------------------------------------------------

project = 'demproj'
year = datetime.datetime.now().year
copyright = '2024-{}, demproj developers'.format(year)
author = 'demproj developers'

# The full version, including alpha/beta/rc tags
release = '0.1.0'


# -- General configuration ---------------------------------------------------

extensions = [
    'sphinx.ext.autodoc',   # Pull in documentation from docstrings in a semi-automatic way
    'sphinx.ext.napoleon',  # Support for google style docstrings
    "sphinx_rtd_theme",     # Read the docs theme https://github.com/readthedocs/sphinx_rtd_theme
    'sphinx.ext.imgmath',   # The demand model equations use :math:
    'sphinx_copybutton',    # Makes availability to copy code cells from icon
]

# Read the Docs sets the master doc to index
master_doc = 'index'

templates_path = ['_templates']

exclude_patterns = []

# -- Options for autodoc ext -------------------------------------------------
autodoc_member_order = 'bysource'
autodoc_typehints = 'description'
autodoc_inherit_docstrings = True
autodoc_type_aliases = {'GetMethod': ':py:data:`demproj.utils.sim_types.GetMethod`'}


# -- Options for HTML output -------------------------------------------------

html_theme = "sphinx_rtd_theme"

numfig = True

html_static_path = ['_static']
