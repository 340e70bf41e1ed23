# strategies/_base.py
"""Base class for order reduction strategies."""

__all__ = [
    "StrategyTemplate",
    "order_reduction",
]

import abc
import numpy as np
import scipy.linalg as la

from .. import errors, utils


def _positive_int(value, label: str) -> int:
    """Cast ``value`` to an integer and check that it is positive."""
    if int(value) != value or value <= 0:
        raise ValueError(f"{label} must be a positive integer")
    return int(value)


class StrategyTemplate(abc.ABC):
    r"""Template class for order reduction strategies.

    A strategy owns a rolling history of the :math:`M` most recent
    :math:`n`-dimensional snapshots, stored as the columns of
    :attr:`solutions`, and a basis matrix :attr:`basis` that is overwritten
    in place each time :meth:`order_reduction` is called.

    The host solver is responsible for advancing the history, either by
    calling :meth:`push` or by writing to :attr:`solutions` directly,
    exactly once before every call to :meth:`order_reduction`.

    Classes that inherit from this template must implement
    :meth:`_compute_basis`, which returns the new basis entries without
    modifying :attr:`basis`.

    Parameters
    ----------
    dim : int
        Dimension :math:`n` of each snapshot.
    M : int
        Number :math:`M` of snapshots kept in the history.
    num_columns : int
        Number of columns of the basis.
    rng : None, int, or numpy.random.Generator
        Source of randomness for the strategy.
    """

    # Whether the basis is guaranteed to have orthonormal columns.
    _orthonormal = True

    def __init__(self, dim: int, M: int, num_columns: int, rng=None):
        """Validate dimensions and allocate the history and basis buffers."""
        self.__n = _positive_int(dim, "dim")
        self.__M = _positive_int(M, "M")
        num_columns = _positive_int(num_columns, "basis size")
        self.__solutions = np.zeros((self.__n, self.__M))
        self.__basis = np.zeros((self.__n, num_columns))
        self.__rng = np.random.default_rng(rng)
        self._pushes = 0
        self._push_driven = False

    # Properties --------------------------------------------------------------
    @property
    def full_state_dimension(self) -> int:
        r"""Dimension :math:`n` of the snapshots."""
        return self.__n

    @property
    def history_width(self) -> int:
        r"""Number :math:`M` of snapshots in the history."""
        return self.__M

    @property
    def reduced_state_dimension(self) -> int:
        r"""Number of columns of the basis."""
        return self.__basis.shape[1]

    @property
    def shape(self) -> tuple[int, int]:
        """Dimensions of the basis."""
        return self.__basis.shape

    @property
    def rng(self) -> np.random.Generator:
        """Random number generator owned by the strategy."""
        return self.__rng

    @property
    def solutions(self) -> np.ndarray:
        r""":math:`n \times M` history of snapshots, oldest first.

        Setting this attribute copies the new history into the owned buffer.
        """
        return self.__solutions

    @solutions.setter
    def solutions(self, states):
        """Overwrite the whole history."""
        states = np.asarray(states)
        if states.shape != self.__solutions.shape:
            raise errors.DimensionalityError(
                f"solutions must have shape {self.__solutions.shape}, "
                f"got {states.shape}"
            )
        self.__solutions[:] = states

    @property
    def basis(self) -> np.ndarray:
        """Current reduced basis (read-only view)."""
        view = self.__basis.view()
        view.flags.writeable = False
        return view

    @property
    def orthonormal(self) -> bool:
        """Whether the basis is guaranteed to have orthonormal columns."""
        return self._orthonormal

    def __str__(self):
        """String representation: class and dimensions."""
        n, r = self.shape
        out = [self.__class__.__name__]
        out.append(f"Full state dimension    n = {n:d}")
        out.append(f"History width           M = {self.history_width:d}")
        out.append(f"Basis columns             = {r:d}")
        return "\n  ".join(out)

    def __repr__(self):
        """Unique ID + string representation."""
        return utils.str2repr(self)

    # History management ------------------------------------------------------
    def push(self, snapshot):
        """Append a snapshot to the history, evicting the oldest snapshot.

        Parameters
        ----------
        snapshot : (n,) ndarray
            Newest state vector.
        """
        snapshot = np.asarray(snapshot)
        if snapshot.shape != (self.__n,):
            raise errors.DimensionalityError(
                f"snapshot must have shape ({self.__n},), "
                f"got {snapshot.shape}"
            )
        self.__solutions[:, :-1] = self.__solutions[:, 1:]
        self.__solutions[:, -1] = snapshot
        self._pushes += 1
        self._push_driven = True

    # Order reduction ---------------------------------------------------------
    @abc.abstractmethod
    def _compute_basis(self) -> np.ndarray:
        """Compute the new basis entries from the current history.

        Must not modify :attr:`basis`.

        Returns
        -------
        entries : (n, r) ndarray
            New basis entries.
        """
        raise NotImplementedError  # pragma: no cover

    def order_reduction(self):
        """Recompute the basis from the current history of snapshots.

        The basis is only overwritten once every factorization has completed,
        so a failure leaves the previous basis untouched.
        """
        entries = self._compute_basis()
        self.__basis[:] = entries
        self._pushes = 0

    # Projection --------------------------------------------------------------
    def compress(self, states):
        """Map high-dimensional states to basis coordinates.

        Parameters
        ----------
        states : (n, ...) ndarray
            Matrix of `n`-dimensional state vectors, or a single state vector.

        Returns
        -------
        states_compressed : (r, ...) ndarray
            Coordinates of the states with respect to the basis.
        """
        if self._orthonormal:
            return self.__basis.T @ states
        return la.lstsq(self.__basis, states)[0]

    def decompress(self, states_compressed):
        """Map basis coordinates to high-dimensional states.

        Parameters
        ----------
        states_compressed : (r, ...) ndarray
            Coordinates with respect to the basis.

        Returns
        -------
        states_decompressed : (n, ...) ndarray
            Corresponding high-dimensional states.
        """
        return self.__basis @ states_compressed

    def project(self, states):
        """Project states onto the range of the basis, i.e.,
        ``decompress(compress(states))``.
        """
        return self.decompress(self.compress(states))

    def projection_error(self, states=None, relative=True) -> float:
        r"""Compute the error of the basis representation of states.

        This computes :math:`\|\Q - \mathcal{P}(\Q)\|` where :math:`\Q` is
        the ``states`` and :math:`\mathcal{P}` is :meth:`project`. The norm is
        the vector 2-norm for a single state and the Frobenius norm otherwise.

        Parameters
        ----------
        states : (n,) or (n, k) ndarray or None
            States to project. Defaults to the current history.
        relative : bool
            If ``True`` (default), divide by the norm of the states.

        Returns
        -------
        float
        """
        if states is None:
            states = self.__solutions
        diff = la.norm(states - self.project(states))
        if relative:
            diff /= la.norm(states)
        return diff

    # Verification ------------------------------------------------------------
    def verify(self, tol: float = 1e-10):
        """Check that the current basis has the expected structure.

        Raises
        ------
        romsketch.errors.VerificationError
            If the basis has the wrong shape, non-finite entries, or
            (for orthonormal strategies) columns that are not orthonormal
            to within ``tol``.
        """
        entries = self.__basis
        if not np.all(np.isfinite(entries)):
            raise errors.VerificationError("basis has non-finite entries")
        if self._orthonormal:
            gram = entries.T @ entries
            if not np.allclose(gram, np.eye(gram.shape[0]), atol=tol):
                raise errors.VerificationError(
                    "basis columns are not orthonormal"
                )
        states = np.random.default_rng().standard_normal((self.__n, 5))
        projected = self.project(states)
        if projected.shape != states.shape:
            raise errors.VerificationError(
                "project(states).shape != states.shape"
            )
        if self._orthonormal and not np.allclose(
            self.project(projected), projected
        ):
            raise errors.VerificationError(
                "project(project(states)) != project(states)"
            )


# Functional API ==============================================================
def order_reduction(strategy: StrategyTemplate) -> np.ndarray:
    """Refresh the basis of ``strategy`` from its current history.

    Parameters
    ----------
    strategy : StrategyTemplate
        Any order reduction strategy.

    Returns
    -------
    basis : (n, r) ndarray
        The updated (read-only) basis of the strategy.
    """
    strategy.order_reduction()
    return strategy.basis
