# post/_errors.py
"""Tools for accuracy and error evaluation."""

__all__ = [
    "projection_error",
    "best_rank_error",
    "frobenius_error",
]

import numpy as np
import scipy.linalg as la

from .. import errors


def _absolute_and_relative_error(Qtrue, Qapprox, norm=la.norm):
    """Compute the absolute and relative errors between Qtrue and Qapprox,
    where Qapprox approximates Qtrue:

        absolute_error = ||Qtrue - Qapprox||,
        relative_error = ||Qtrue - Qapprox|| / ||Qtrue||,

    with ||Q|| defined by norm(Q).
    """
    norm_of_data = norm(Qtrue)
    absolute_error = norm(Qtrue - Qapprox)
    if norm_of_data == 0:
        return absolute_error, np.inf if absolute_error else 0.0
    return absolute_error, absolute_error / norm_of_data


def projection_error(states, basis, orthonormal: bool = True):
    """Calculate the absolute and relative projection errors induced by
    projecting states onto the range of a basis, i.e.,

        absolute_error = ||Q - P Q||_F,
        relative_error = ||Q - P Q||_F / ||Q||_F

    where Q = states and P is the orthogonal projector onto range(basis).

    Parameters
    ----------
    states : (n, k) or (n,) ndarray
        Matrix of k snapshots where each column is a single snapshot, or a
        single 1D snapshot. If 2D, use the Frobenius norm; if 1D, the l2 norm.
    basis : (n, r) ndarray
        Basis matrix. Each column is one basis vector.
    orthonormal : bool
        If ``True`` (default), assume the basis has orthonormal columns so
        that P = basis basis^T. If ``False`` (e.g., for a Nystrom basis),
        the projection is computed with a least-squares fit.

    Returns
    -------
    absolute_error : float
        Absolute projection error.
    relative_error : float
        Relative projection error.
    """
    if basis.shape[0] != states.shape[0]:
        raise errors.DimensionalityError("states and basis not aligned")
    if orthonormal:
        Qapprox = basis @ (basis.T @ states)
    else:
        Qapprox = basis @ la.lstsq(basis, states)[0]
    return _absolute_and_relative_error(states, Qapprox)


def best_rank_error(states, r: int):
    """Calculate the error of the best rank-r approximation of the states,

        absolute_error = sqrt(sum_{i > r} sigma_i^2),
        relative_error = absolute_error / ||Q||_F,

    where sigma_i are the singular values of Q = states. This is the
    smallest possible projection error of any r-dimensional basis.

    Parameters
    ----------
    states : (n, k) ndarray
        Snapshot matrix.
    r : int
        Rank of the approximation.

    Returns
    -------
    absolute_error : float
    relative_error : float
    """
    svdvals2 = la.svdvals(states) ** 2
    total = np.sum(svdvals2)
    absolute_error = np.sqrt(np.sum(svdvals2[r:]))
    if total == 0:
        return absolute_error, 0.0
    return absolute_error, absolute_error / np.sqrt(total)


def frobenius_error(Qtrue, Qapprox):
    """Compute the absolute and relative Frobenius-norm errors between the
    snapshot sets Qtrue and Qapprox, where Qapprox approximates Qtrue:

        absolute_error = ||Qtrue - Qapprox||_F,
        relative_error = ||Qtrue - Qapprox||_F / ||Qtrue||_F.

    Parameters
    ----------
    Qtrue : (n, k)
        "True" data. Each column is one snapshot.
    Qapprox : (n, k)
        An approximation to Qtrue.

    Returns
    -------
    abs_err : float
        Absolute error ||Qtrue - Qapprox||_F.
    rel_err : float
        Relative error ||Qtrue - Qapprox||_F / ||Qtrue||_F.
    """
    if Qtrue.ndim != 2 or Qapprox.ndim != 2:
        raise ValueError("Qtrue and Qapprox must be two-dimensional")
    if Qtrue.shape != Qapprox.shape:
        raise errors.DimensionalityError(
            "truth Qtrue and approximation Qapprox not aligned"
        )
    return _absolute_and_relative_error(Qtrue, Qapprox, la.norm)
