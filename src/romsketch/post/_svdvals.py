# post/_svdvals.py
"""Singular value diagnostics for choosing the target rank."""

__all__ = [
    "svdval_decay",
    "cumulative_energy",
    "residual_energy",
]

import numpy as np
import matplotlib.pyplot as plt


def _sorted_energies(singular_values):
    """Squared singular values in descending order."""
    return np.sort(np.asarray(singular_values, dtype=float))[::-1] ** 2


def svdval_decay(
    singular_values,
    threshold: float = 1e-8,
    plot: bool = True,
    ax: plt.Axes = None,
    **kwargs,
):
    """Count the number of **normalized** singular values that are greater
    than a specified threshold.

    Parameters
    ----------
    singular_values : (k,) ndarray
        Singular values of a snapshot history, e.g., ``POD.svdvals``.
    threshold : float or None
        Cutoff value for the normalized singular values.
    plot : bool
        If ``True``, plot the normalized singular values (and the cutoff)
        against the singular value index.
    ax : matplotlib.Axes or None
        Axes to plot the results on if ``plot=True``.
        If not given, a new single-axes figure is created.
    kwargs : dict
        Options to pass to :func:`matplotlib.pyplot.semilogy()`.

    Returns
    -------
    rank : int or None
        Number of normalized singular values greater than ``threshold``,
        or ``None`` if no threshold is given.
    """
    normalized = np.sqrt(_sorted_energies(singular_values))
    if normalized[0] > 0:
        normalized = normalized / normalized[0]
    rank = None
    if threshold:
        rank = int(np.count_nonzero(normalized > threshold))

    if plot:
        if ax is None:
            ax = plt.figure().add_subplot(111)
        options = dict(marker="*", color="k", markersize=8, linewidth=0)
        options.update(kwargs)
        j = np.arange(1, normalized.size + 1)
        ax.semilogy(j, normalized, **options)
        if rank is not None:
            ax.axhline(threshold, color="gray", linewidth=0.5)
            ax.axvline(rank, color="gray", linewidth=0.5)
        ax.set_xlim((0, j.size + 1))
        ax.set_xlabel("Singular value index")
        ax.set_ylabel("Normalized singular values")

    return rank


def cumulative_energy(singular_values, threshold: float = 0.9999) -> int:
    r"""Compute the number of singular values needed to surpass a given
    cumulative energy threshold.

    The cumulative energy of :math:`r` singular values is

    .. math::
       \kappa_r = \sum_{i=1}^r\sigma_i^2 \bigg/ \sum_{j=1}^k\sigma_j^2.

    Parameters
    ----------
    singular_values : (k,) ndarray
        Singular values of a snapshot history.
    threshold : float
        Energy capture threshold. Default is 99.99%.

    Returns
    -------
    rank : int
        Smallest :math:`r` such that :math:`\kappa_r \ge` ``threshold``.
    """
    svdvals2 = _sorted_energies(singular_values)
    energy = np.concatenate(([0], np.cumsum(svdvals2) / np.sum(svdvals2)))
    return min(int(np.searchsorted(energy, threshold)), svdvals2.size)


def residual_energy(singular_values, threshold: float = 1e-6) -> int:
    r"""Compute the number of singular values needed such that the residual
    energy drops beneath a given threshold.

    The residual energy of :math:`r` singular values is
    :math:`\epsilon_r = 1 - \kappa_r`, see :func:`cumulative_energy`.

    Parameters
    ----------
    singular_values : (k,) ndarray
        Singular values of a snapshot history.
    threshold : float
        Residual energy threshold. Default is :math:`10^{-6}`.

    Returns
    -------
    rank : int
        Smallest :math:`r` such that :math:`\epsilon_r \le` ``threshold``.
    """
    svdvals2 = _sorted_energies(singular_values)
    residual = 1 - np.cumsum(svdvals2) / np.sum(svdvals2)
    residual = np.concatenate(([1], residual))
    return int(np.count_nonzero(residual > threshold))
