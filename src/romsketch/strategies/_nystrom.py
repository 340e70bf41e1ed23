# strategies/_nystrom.py
"""Generalized Nystrom approximation."""

__all__ = [
    "Nystrom",
]

import logging
import numpy as np
import scipy.linalg as la

from .. import errors
from ._base import StrategyTemplate, _positive_int


class Nystrom(StrategyTemplate):
    r"""Left factor of the generalized Nystrom approximation of the history.

    With fixed Gaussian sampling matrices
    :math:`\bfOmega_1\in\RR^{M\times k}` and
    :math:`\bfOmega_2\in\RR^{n\times(k+p)}`, the history satisfies

    .. math::
       \X \approx \X\bfOmega_1(\bfOmega_2\trp\X\bfOmega_1)^{\dagger}
       \bfOmega_2\trp\X,

    and the basis is the oblique factor
    :math:`\X\bfOmega_1(\bfOmega_2\trp\X\bfOmega_1)^{\dagger}`,
    where :math:`\dagger` is the Moore--Penrose pseudo-inverse.

    The basis has :math:`k + p` columns and rank at most :math:`k`. It is
    **not** orthonormal; :meth:`compress` uses a least-squares fit.
    The sampling matrices are drawn once at construction and never updated.

    Parameters
    ----------
    dim : int
        Dimension :math:`n` of each snapshot.
    M : int
        Number :math:`M` of snapshots kept in the history.
    k : int
        Target rank :math:`k`.
    p : int
        Oversampling :math:`p` of the right sampling matrix, default 0.
    rng : None, int, or numpy.random.Generator
        Source of the sampling matrices.
    """

    _orthonormal = False

    def __init__(self, dim: int, M: int, k: int, p: int = 0, rng=None):
        """Validate dimensions and draw the sampling matrices."""
        k = _positive_int(k, "k")
        if int(p) != p or p < 0:
            raise ValueError("p must be a nonnegative integer")
        p = int(p)
        StrategyTemplate.__init__(self, dim, M, k + p, rng=rng)
        if k > self.history_width:
            raise errors.DimensionalityError(
                f"k = {k:d} exceeds history width M = {self.history_width:d}"
            )
        if k + p > self.full_state_dimension:
            raise errors.DimensionalityError(
                f"k + p = {k + p:d} exceeds state dimension "
                f"dim = {self.full_state_dimension:d}"
            )
        self.__k = k
        self.__p = p
        self.__left = self.rng.standard_normal((self.history_width, k))
        self.__right = self.rng.standard_normal(
            (self.full_state_dimension, k + p)
        )
        self.__prod1 = np.empty((self.full_state_dimension, k))
        self.__prod2 = np.empty((k + p, k))
        self.__workspace = np.empty((self.full_state_dimension, k + p))

    @property
    def rank(self) -> int:
        """Target rank :math:`k`."""
        return self.__k

    @property
    def oversampling(self) -> int:
        """Number :math:`p` of extra columns of the right sampling matrix."""
        return self.__p

    @property
    def left_sampling(self) -> np.ndarray:
        r"""Left sampling matrix :math:`\bfOmega_1`, shape (M, k)."""
        return self.__left

    @property
    def right_sampling(self) -> np.ndarray:
        r"""Right sampling matrix :math:`\bfOmega_2`, shape (n, k + p)."""
        return self.__right

    def __str__(self):
        out = [StrategyTemplate.__str__(self)]
        out.append(f"Target rank             k = {self.rank:d}")
        out.append(f"Oversampling            p = {self.oversampling:d}")
        return "\n  ".join(out)

    def _compute_basis(self):
        """Apply the pseudo-inverse of the core matrix to the left sketch."""
        prod1 = np.matmul(self.solutions, self.__left, out=self.__prod1)
        prod2 = np.matmul(self.__right.T, prod1, out=self.__prod2)
        core_pinv, rank = la.pinv(prod2, return_rank=True)
        if rank < self.__k:
            logging.debug(f"Nystrom: core matrix has rank {rank:d} < k")
        return np.matmul(prod1, core_pinv, out=self.__workspace)
