# strategies/_rqr.py
"""Randomized QR range finder."""

__all__ = [
    "RandomizedQR",
]

import logging
import numpy as np
import scipy.linalg as la

from ._randomized import RandomizedStrategyTemplate


class RandomizedQR(RandomizedStrategyTemplate):
    r"""Randomized range finder based on a QR factorization of the sketch.

    The sketch :math:`\bfOmega \approx \X\Z\in\RR^{n\times(m+p)}` is
    factorized as :math:`\bfOmega = \Q\R`. Without oversampling
    (:math:`p = 0`) the basis is :math:`\Q`. With oversampling, the range
    estimate is truncated to rank :math:`m` with the SVD
    :math:`\R = \U_R\bfSigma_R\V_R\trp`, giving the basis
    :math:`\Q(\U_R)_{:,:m}`.

    A rank-deficient sketch is not repaired: the factorization completes and
    the trailing basis columns span arbitrary directions. A warning is logged
    when the diagonal of :math:`\R` indicates numerical rank deficiency.

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
    rank_tol : float
        Relative tolerance on the diagonal of :math:`\R` below which the
        sketch is reported as rank deficient.
    """

    def __init__(
        self,
        dim: int,
        M: int,
        m: int,
        p: int = 0,
        freq: int = 50,
        rng=None,
        rank_tol: float = 1e-12,
    ):
        RandomizedStrategyTemplate.__init__(
            self, dim, M, m, p=p, freq=freq, rng=rng
        )
        self.rank_tol = rank_tol

    def _compute_basis(self):
        """Orthonormalize the sketch, truncating if it is oversampled."""
        self._update_sketch()
        Q, R = self._orthonormalize_sketch()

        diag = np.abs(np.diag(R))
        if diag.min() <= self.rank_tol * diag.max():
            logging.warning(
                "RandomizedQR: sketch is numerically rank deficient "
                f"(min |R_ii| = {diag.min():.2e}), basis is degenerate"
            )

        if self.oversampling == 0:
            return Q
        U_R = la.svd(R, full_matrices=False, overwrite_a=True)[0]
        return self._truncate(Q, U_R)
