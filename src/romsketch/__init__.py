# __init__.py
"""Streaming randomized order reduction for time-stepped simulations.

Incrementally maintained low-rank bases for the column space of a rolling
history of state snapshots, with deterministic (POD) and randomized
(range finder, randomized SVD, generalized Nystrom) strategies.
"""

__version__ = "0.1.0"

from . import (
    errors,
    post,
    rom,
    strategies,
    utils,
)

from .strategies import *
