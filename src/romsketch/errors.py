# errors.py
"""Custom exception and warning classes."""


class DimensionalityError(ValueError):  # pragma: no cover
    """Dimension of data not aligned with the strategy dimensions."""

    pass


class VerificationError(RuntimeError):  # pragma: no cover
    """Computed basis fails to meet its structural requirements."""

    pass


class UsageWarning(UserWarning):  # pragma: no cover
    """Generic warning for package usage."""

    pass
