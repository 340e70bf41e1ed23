# strategies/_randomized.py
"""Base class for strategies built on an incrementally updated sketch."""

__all__ = [
    "RandomizedStrategyTemplate",
]

import warnings
import numpy as np
import scipy.linalg as la

from .. import errors
from ._base import StrategyTemplate, _positive_int
from ._sketch import SketchState, sketch_update


class RandomizedStrategyTemplate(StrategyTemplate):
    r"""Template for strategies that extract a basis from a random sketch
    :math:`\bfOmega \approx \X\Z` of the history :math:`\X`.

    Each call to :meth:`order_reduction` first updates the sketch with
    :func:`sketch_update`, then extracts the basis from it.

    Parameters
    ----------
    dim : int
        Dimension :math:`n` of each snapshot.
    M : int
        Number :math:`M` of snapshots kept in the history.
    m : int
        Target rank :math:`m`, the number of basis columns.
    p : int
        Oversampling :math:`p`; the sketch has :math:`m + p` columns.
    freq : int
        Number of sketch updates between full resynchronizations.
    rng : None, int, or numpy.random.Generator
        Source of the Gaussian test matrices.
    """

    def __init__(
        self,
        dim: int,
        M: int,
        m: int,
        p: int = 0,
        freq: int = 50,
        rng=None,
    ):
        """Validate dimensions and allocate the sketch."""
        m = _positive_int(m, "m")
        if int(p) != p or p < 0:
            raise ValueError("p must be a nonnegative integer")
        p = int(p)
        StrategyTemplate.__init__(self, dim, M, m, rng=rng)
        if m + p > self.history_width:
            raise errors.DimensionalityError(
                f"m + p = {m + p:d} exceeds history width M = "
                f"{self.history_width:d}"
            )
        if m + p > self.full_state_dimension:
            raise errors.DimensionalityError(
                f"m + p = {m + p:d} exceeds state dimension "
                f"dim = {self.full_state_dimension:d}"
            )
        self.__p = p
        self.__sketch = SketchState(
            self.full_state_dimension, self.history_width, m + p, freq
        )
        self.__workspace = np.empty((self.full_state_dimension, m))

    # Properties --------------------------------------------------------------
    @property
    def oversampling(self) -> int:
        """Number :math:`p` of extra sketch columns."""
        return self.__p

    @property
    def frequency(self) -> int:
        """Number of sketch updates between full resynchronizations."""
        return self.__sketch.frequency

    @property
    def sketch(self) -> SketchState:
        """Sketch of the history."""
        return self.__sketch

    @property
    def counter(self) -> int:
        """Number of sketch updates performed so far."""
        return self.__sketch.counter

    def __str__(self):
        out = [StrategyTemplate.__str__(self)]
        out.append(f"Oversampling            p = {self.oversampling:d}")
        out.append(f"Resync frequency          = {self.frequency:d}")
        out.append(f"Sketch updates            = {self.counter:d}")
        return "\n  ".join(out)

    # Order reduction ---------------------------------------------------------
    def _update_sketch(self):
        """Advance the sketch, warning if the history cadence looks off."""
        if (
            self._push_driven
            and not self.__sketch.resync_due
            and self._pushes != 1
        ):
            warnings.warn(
                f"history advanced by {self._pushes:d} snapshots since the "
                "last sketch update (expected 1), sketch may be out of sync "
                "until the next resync",
                errors.UsageWarning,
            )
        sketch_update(self.__sketch, self.solutions, self.rng)

    def _orthonormalize_sketch(self):
        r"""QR factorization :math:`\bfOmega = \Q\R` of the sketch."""
        return la.qr(self.__sketch.sketch, mode="economic")

    def _truncate(self, Q, U):
        r"""Write :math:`\Q\U_{:,:m}` into the reused basis workspace."""
        m = self.reduced_state_dimension
        return np.matmul(Q, U[:, :m], out=self.__workspace)
