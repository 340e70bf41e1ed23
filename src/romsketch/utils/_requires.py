# utils/_requires.py
"""Wrappers for methods that require an attribute to be initialized."""

__all__ = [
    "requires",
    "requires2",
]

import functools


def requires2(attr: str, message: str) -> callable:
    """Guard a method that cannot run until ``attr`` is set (not ``None``).

    Parameters
    ----------
    attr : str
        Name of the required attribute.
    message : str
        Message of the :class:`AttributeError` raised when ``attr`` is unset.
    """

    def _wrapper(func):
        @functools.wraps(func)
        def _decorator(self, *args, **kwargs):
            if getattr(self, attr, None) is None:
                raise AttributeError(message)
            return func(self, *args, **kwargs)

        return _decorator

    return _wrapper


def requires(attr: str) -> callable:
    """Guard a method that cannot run until ``attr`` is set (not ``None``).

    Parameters
    ----------
    attr : str
        Name of the required attribute.
    """
    return requires2(attr, f"{attr} not set")
