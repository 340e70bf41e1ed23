# strategies/_sketch.py
"""Incremental maintenance of a random sketch of a rolling history."""

__all__ = [
    "SketchState",
    "sketch_update",
]

import logging
import numpy as np


class SketchState:
    r"""Random sketch :math:`\bfOmega = \X\Z` of an :math:`n \times M`
    rolling history :math:`\X`.

    Parameters
    ----------
    dim : int
        Number of rows :math:`n` of the history.
    M : int
        Number of columns :math:`M` of the history.
    sketch_width : int
        Number of columns :math:`\ell` of the sketch.
    frequency : int
        Number of updates between full resynchronizations.

    Attributes
    ----------
    test_matrix : (M, ell) ndarray
        Gaussian test matrix :math:`\Z`; row ``j`` belongs to column ``j`` of
        the history.
    sketch : (n, ell) ndarray
        Sketch :math:`\bfOmega`.
    evicted : (n, ell) ndarray
        Contribution of the oldest history column to the sketch, which is
        subtracted when that column is evicted.
    counter : int
        Number of updates performed so far.
    """

    def __init__(self, dim: int, M: int, sketch_width: int, frequency: int):
        if int(frequency) != frequency or frequency < 1:
            raise ValueError("freq must be a positive integer")
        self.frequency = int(frequency)
        self.test_matrix = np.zeros((M, sketch_width))
        self.sketch = np.zeros((dim, sketch_width))
        self.evicted = np.zeros((dim, sketch_width))
        self.counter = 0

    @property
    def sketch_width(self) -> int:
        """Number of columns of the sketch."""
        return self.sketch.shape[1]

    @property
    def resync_due(self) -> bool:
        """``True`` if the next update is a full resynchronization."""
        return self.counter % self.frequency == 0

    def __str__(self):
        return (
            f"SketchState(width={self.sketch_width:d}, "
            f"frequency={self.frequency:d}, counter={self.counter:d})"
        )


def sketch_update(sketch: SketchState, solutions, rng: np.random.Generator):
    r"""Update the sketch after the history advanced by one snapshot.

    Every ``sketch.frequency`` updates (including the first), a fresh
    Gaussian test matrix :math:`\Z` is drawn and the sketch is recomputed as
    :math:`\bfOmega = \X\Z`. Otherwise a single Gaussian row :math:`\z` is
    drawn for the newest column and the sketch is corrected with two
    rank-one terms,

    .. math::
       \bfOmega \leftarrow \bfOmega + \x_{M}\z\trp - \x_{\text{old}}\z_1\trp,

    where :math:`\x_{\text{old}}\z_1\trp` is the contribution of the evicted
    column, cached by the previous update. The rows of :math:`\Z` are shifted
    up by one and :math:`\z` becomes the last row.

    Parameters
    ----------
    sketch : SketchState
        Sketch to update in place.
    solutions : (n, M) ndarray
        Current history, which has advanced by exactly one snapshot since the
        previous update.
    rng : numpy.random.Generator
        Source of the Gaussian draws.
    """
    Z = sketch.test_matrix
    if sketch.resync_due:
        logging.debug(f"full sketch resync at update {sketch.counter:d}")
        Z[:] = rng.standard_normal(Z.shape)
        np.matmul(solutions, Z, out=sketch.sketch)
    else:
        z = rng.standard_normal(sketch.sketch_width)
        sketch.sketch += np.outer(solutions[:, -1], z) - sketch.evicted
        Z[:-1] = Z[1:].copy()
        Z[-1] = z

    np.outer(solutions[:, 0], Z[0], out=sketch.evicted)
    sketch.counter += 1
