# strategies/_pod.py
"""Deterministic order reduction with Proper Orthogonal Decomposition (POD)."""

__all__ = [
    "POD",
]

import types
import logging
import numpy as np
import scipy.linalg as la
import sklearn.utils.extmath as sklmath
import matplotlib.pyplot as plt

from .. import errors, post, utils
from ._base import StrategyTemplate, _positive_int


requires_svdvals = utils.requires2(
    "svdvals",
    "no singular value data, call order_reduction()",
)


def _randomized_svd(states, num_vectors, rng):
    """Randomized SVD from scikit-learn, seeded from ``rng``."""
    seed = int(rng.integers(np.iinfo(np.int32).max))
    return sklmath.randomized_svd(states, num_vectors, random_state=seed)


class POD(StrategyTemplate):
    r"""Proper orthogonal decomposition of the snapshot history.

    .. math::
       \text{svd}(\X) = \bfPhi\bfSigma\bfPsi\trp
       \qquad\Longrightarrow\qquad
       \text{basis} = \bfPhi_{:,:m}

    The basis consists of the :math:`m` leading left singular vectors of the
    history :math:`\X\in\RR^{n \times M}`, ordered by decreasing singular
    value, and is recomputed from scratch on every call to
    :meth:`order_reduction`. It is the best rank-:math:`m` approximation of
    the range of :math:`\X` and serves as the baseline that the randomized
    strategies approximate.

    Parameters
    ----------
    dim : int
        Dimension :math:`n` of each snapshot.
    M : int
        Number :math:`M` of snapshots kept in the history.
    m : int
        Number of basis vectors, :math:`m \le \min(n, M)`.
    svdsolver : str or callable
        Strategy for computing the SVD of the history.

        **Options:**

        * ``"dense"`` (default): :func:`scipy.linalg.svd()`.
        * ``"randomized"``: :func:`sklearn.utils.extmath.randomized_svd()`,
          seeded from ``rng``. Only the leading ``m`` singular values are
          computed.
        * callable: ``U, s, Vh = svdsolver(states)``.
    rng : None, int, or numpy.random.Generator
        Source of randomness, only used by ``svdsolver="randomized"``.
    """

    __SVDSOLVERS = types.MappingProxyType(
        {
            "dense": lambda states, m, rng: la.svd(
                states, full_matrices=False
            ),
            "randomized": _randomized_svd,
        }
    )

    def __init__(
        self,
        dim: int,
        M: int,
        m: int,
        svdsolver="dense",
        rng=None,
    ):
        """Validate dimensions and allocate buffers."""
        m = _positive_int(m, "m")
        StrategyTemplate.__init__(self, dim, M, m, rng=rng)
        if m > self.history_width:
            raise errors.DimensionalityError(
                f"m = {m:d} exceeds history width M = {self.history_width:d}"
            )
        if m > self.full_state_dimension:
            raise errors.DimensionalityError(
                f"m = {m:d} exceeds state dimension "
                f"dim = {self.full_state_dimension:d}"
            )
        self.svdsolver = svdsolver
        self.__svdvals = None
        self.__total_energy = None

    # Properties --------------------------------------------------------------
    @property
    def svdsolver(self) -> str:
        """Strategy for computing the SVD of the history, either
        ``'dense'``, ``'randomized'``, or ``'custom'``.
        """
        return self.__svdsolverlabel

    @svdsolver.setter
    def svdsolver(self, s):
        if callable(s):
            self.__svdsolverlabel = "custom"
            self.__svdengine = lambda states, m, rng: s(states)
            return

        if s not in self.__SVDSOLVERS:
            raise AttributeError(
                f"invalid svdsolver '{s}', options: "
                + ", ".join(self.__SVDSOLVERS.keys())
            )
        self.__svdsolverlabel = s
        self.__svdengine = self.__SVDSOLVERS[s]

    @property
    def svdvals(self):
        """Singular values of the history at the last reduction."""
        return self.__svdvals

    @property
    def cumulative_energy(self) -> float:
        r"""Singular value energy captured by the basis,
        :math:`\sum_{i=1}^m\sigma_i^2\big/\sum_{j}\sigma_j^2`.
        """
        if self.__svdvals is None:
            return None
        return 1 - self.residual_energy

    @property
    def residual_energy(self) -> float:
        r"""Singular value energy *not* captured by the basis,
        :math:`\sum_{i>m}\sigma_i^2\big/\sum_{j}\sigma_j^2`.

        The total energy is taken from :math:`\|\X\|_F^2`, so only the
        leading :math:`m` singular values are needed.
        """
        if self.__svdvals is None:
            return None
        total = self.__total_energy
        if total == 0:
            return 0.0
        m = self.reduced_state_dimension
        retained = np.sum(self.__svdvals[:m] ** 2)
        return max(total - retained, 0.0) / total

    def __str__(self):
        out = [StrategyTemplate.__str__(self)]
        if (ce := self.cumulative_energy) is not None:
            if self.svdsolver == "randomized":
                out.append(f"Approximate cumulative energy: {ce:%}")
            else:
                out.append(f"Cumulative energy: {ce:%}")
        out.append(f"SVD solver: {self.svdsolver}")
        return "\n  ".join(out)

    # Order reduction ---------------------------------------------------------
    def _compute_basis(self):
        """Leading left singular vectors of the history."""
        m = self.reduced_state_dimension
        U, svdvals, _ = self.__svdengine(self.solutions, m, self.rng)
        self.__svdvals = np.asarray(svdvals)
        self.__total_energy = la.norm(self.solutions) ** 2
        logging.debug(f"POD: sigma_1 = {svdvals[0]:.4e}")
        return U[:, :m]

    # Visualization -----------------------------------------------------------
    @requires_svdvals
    def plot_svdval_decay(self, threshold: float = None, ax=None, **kwargs):
        """Plot the normalized singular values of the history.

        Parameters
        ----------
        threshold : float or None
            Cutoff value to draw.
        ax : matplotlib.Axes or None
            Axes to plot on. If not given, a new figure is created.
        kwargs : dict
            Options to pass to :func:`matplotlib.pyplot.semilogy()`.

        Returns
        -------
        ax : matplotlib.Axes
            Axes for the plot.
        """
        if ax is None:
            ax = plt.figure().add_subplot(111)
        post.svdval_decay(
            self.svdvals,
            threshold=threshold,
            plot=True,
            ax=ax,
            **kwargs,
        )
        ax.axvline(self.reduced_state_dimension, color="C0", linewidth=0.5)
        return ax
