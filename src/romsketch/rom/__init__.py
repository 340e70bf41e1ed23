# rom/__init__.py
"""Reduced-order linear systems built from a strategy basis.

.. currentmodule:: romsketch.rom

**Functions**

.. autosummary::
    :toctree: _autosummaries

    reduced_operator
    initial_guess
"""

from ._linear import *
