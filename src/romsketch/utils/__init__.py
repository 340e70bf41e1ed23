# utils/__init__.py
r"""Miscellaneous utility functions."""


from ._repr import *
from ._requires import *
from ._timer import *
