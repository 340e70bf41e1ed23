# rom/_linear.py
"""Galerkin and minimal-residual reduced solves for linear systems."""

__all__ = [
    "reduced_operator",
    "initial_guess",
]

import numpy as np
import scipy.linalg as la
import scipy.sparse as sparse

from .. import errors


def _entries(basis):
    """Extract the basis matrix from a strategy or an array."""
    if hasattr(basis, "order_reduction"):
        return basis.basis
    return np.asarray(basis)


def _check_shapes(V, A, b=None):
    n = V.shape[0]
    if A.shape != (n, n):
        raise errors.DimensionalityError(
            f"operator must have shape ({n:d}, {n:d}), got {A.shape}"
        )
    if b is not None and np.shape(b) != (n,):
        raise errors.DimensionalityError(
            f"right-hand side must have shape ({n:d},), got {np.shape(b)}"
        )


def reduced_operator(basis, A):
    r"""Galerkin projection :math:`\V\trp\A\V` of a full-order operator.

    Parameters
    ----------
    basis : (n, r) ndarray or strategy
        Basis matrix :math:`\V`, or a strategy whose basis to use.
    A : (n, n) ndarray or scipy.sparse matrix
        Full-order operator.

    Returns
    -------
    Ahat : (r, r) ndarray
        Reduced operator.
    """
    V = _entries(basis)
    _check_shapes(V, A)
    AV = A @ V
    if sparse.issparse(AV):
        AV = AV.toarray()
    return V.T @ np.asarray(AV)


def initial_guess(basis, A, b, method: str = "galerkin"):
    r"""Solve the reduced linear system and lift the solution.

    Parameters
    ----------
    basis : (n, r) ndarray or strategy
        Basis matrix :math:`\V`, or a strategy whose basis to use.
    A : (n, n) ndarray or scipy.sparse matrix
        Full-order operator.
    b : (n,) ndarray
        Full-order right-hand side.
    method : str
        * ``"galerkin"`` (default): solve
          :math:`(\V\trp\A\V)\hat{\x} = \V\trp\b`. Requires an orthonormal
          basis for the Galerkin interpretation.
        * ``"minres"``: solve
          :math:`\min_{\hat{\x}}\|\A\V\hat{\x} - \b\|_2`.
          Valid for any basis, including oblique Nystrom bases.

    Returns
    -------
    x0 : (n,) ndarray
        Full-order approximation :math:`\V\hat{\x}` of the solution.
    """
    V = _entries(basis)
    _check_shapes(V, A, b)
    AV = A @ V
    if sparse.issparse(AV):
        AV = AV.toarray()
    AV = np.asarray(AV)

    if method == "galerkin":
        xhat = la.lstsq(V.T @ AV, V.T @ b)[0]
    elif method == "minres":
        xhat = la.lstsq(AV, b)[0]
    else:
        raise ValueError(
            f"invalid method '{method}', options: galerkin, minres"
        )
    return V @ xhat
