# strategies/_rsvd.py
"""Randomized singular value decomposition."""

__all__ = [
    "RandomizedSVD",
]

import numpy as np
import scipy.linalg as la

from ._randomized import RandomizedStrategyTemplate


class RandomizedSVD(RandomizedStrategyTemplate):
    r"""Randomized SVD of the snapshot history.

    The sketch :math:`\bfOmega \approx \X\Z` is orthonormalized,
    :math:`\bfOmega = \Q\R`, and the history is projected onto its range,
    :math:`\B = \Q\trp\X\in\RR^{(m+p)\times M}`. With the thin SVD
    :math:`\B = \U_B\bfSigma_B\V_B\trp`, the basis is
    :math:`\Q(\U_B)_{:,:m}`.

    Projecting the full history makes this strategy more accurate than
    :class:`RandomizedQR` for the same sketch, at the cost of the extra
    product :math:`\Q\trp\X`.

    Parameters
    ----------
    dim : int
        Dimension :math:`n` of each snapshot.
    M : int
        Number :math:`M` of snapshots kept in the history.
    m : int
        Target rank :math:`m`, the number of basis columns.
    p : int
        Oversampling :math:`p`, default 0.
    freq : int
        Number of sketch updates between full resynchronizations, default 50.
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
        """Validate dimensions and allocate the sketch and workspace."""
        RandomizedStrategyTemplate.__init__(
            self, dim, M, m, p=p, freq=freq, rng=rng
        )
        width = self.reduced_state_dimension + self.oversampling
        self.__projected = np.empty((width, self.history_width), order="F")

    def _compute_basis(self):
        """Project the history onto the sketch range and truncate."""
        self._update_sketch()
        Q = self._orthonormalize_sketch()[0]
        B = np.matmul(Q.T, self.solutions, out=self.__projected)
        # Only the left singular vectors are needed; B is scratch.
        U_B = la.svd(B, full_matrices=False, overwrite_a=True)[0]
        return self._truncate(Q, U_B)
