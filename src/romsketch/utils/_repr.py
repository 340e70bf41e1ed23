# utils/_repr.py
"""Canonical string representation for objects with a ``__str__()`` method."""

__all__ = [
    "str2repr",
]


def str2repr(obj) -> str:
    """Unique object ID followed by the object's string representation."""
    return f"<{obj.__class__.__name__} object at {hex(id(obj))}>\n{obj}"
