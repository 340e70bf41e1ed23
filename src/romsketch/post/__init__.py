# post/__init__.py
"""Tools for evaluating the accuracy of a basis and choosing its rank.

.. currentmodule:: romsketch.post

**Functions**

.. autosummary::
    :toctree: _autosummaries

    projection_error
    best_rank_error
    frobenius_error
    svdval_decay
    cumulative_energy
    residual_energy
"""

from ._errors import *
from ._svdvals import *
