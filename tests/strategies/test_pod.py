# strategies/test_pod.py
"""Tests for strategies._pod."""

import pytest
import numpy as np
import scipy.linalg as la
import matplotlib.pyplot as plt

import romsketch


class TestPOD:
    """Test strategies._pod.POD."""

    Strategy = romsketch.strategies.POD

    def test_init(self, n=30, M=10, m=4):
        """Test __init__() and properties."""
        strategy = self.Strategy(n, M, m)
        assert strategy.shape == (n, m)
        assert strategy.svdsolver == "dense"
        assert strategy.svdvals is None
        assert strategy.cumulative_energy is None
        assert strategy.residual_energy is None

        with pytest.raises(romsketch.errors.DimensionalityError) as ex:
            self.Strategy(n, M, M + 1)
        assert ex.value.args[0] == (
            f"m = {M + 1} exceeds history width M = {M}"
        )

        with pytest.raises(romsketch.errors.DimensionalityError) as ex:
            self.Strategy(5, 8, 6)
        assert ex.value.args[0] == "m = 6 exceeds state dimension dim = 5"

        with pytest.raises(ValueError) as ex:
            self.Strategy(n, M, 0)
        assert ex.value.args[0] == "m must be a positive integer"

    def test_svdsolver(self, n=30, M=10, m=4):
        """Test the svdsolver setter."""
        strategy = self.Strategy(n, M, m)
        with pytest.raises(AttributeError) as ex:
            strategy.svdsolver = "smartly"
        assert ex.value.args[0].startswith(
            "invalid svdsolver 'smartly', options: "
        )

        strategy.svdsolver = "randomized"
        assert strategy.svdsolver == "randomized"

        def mysvd(states):
            return la.svd(states, full_matrices=False)

        strategy.svdsolver = mysvd
        assert strategy.svdsolver == "custom"
        strategy.solutions = np.random.random((n, M))
        strategy.order_reduction()
        strategy.verify()

    def test_order_reduction(self, make_history, n=40, M=12, m=5):
        """The basis is the leading left singular vectors of the history."""
        X = make_history(n, M)
        strategy = self.Strategy(n, M, m)
        strategy.solutions = X
        strategy.order_reduction()

        V = strategy.basis
        assert V.shape == (n, m)
        assert np.allclose(V.T @ V, np.eye(m), atol=1e-10)

        # Same subspace as a reference SVD.
        U = la.svd(X)[0][:, :m]
        assert np.allclose(V @ V.T, U @ U.T)

        # Optimal reconstruction error.
        besterr = np.sqrt(np.sum(la.svdvals(X)[m:] ** 2))
        abserr = la.norm(X - V @ (V.T @ X))
        assert np.isclose(abserr, besterr)
        assert np.isclose(
            strategy.projection_error(relative=False),
            romsketch.post.best_rank_error(X, m)[0],
        )

        # Deterministic: a second call reproduces the basis.
        strategy.order_reduction()
        assert np.allclose(strategy.basis, V)

    def test_energy(self, make_history, n=40, M=12, m=3):
        """Test svdvals, cumulative_energy, and residual_energy."""
        X = make_history(n, M)
        strategy = self.Strategy(n, M, m)
        strategy.solutions = X
        strategy.order_reduction()

        svdvals = la.svdvals(X)
        assert np.allclose(strategy.svdvals, svdvals)
        expected = np.sum(svdvals[:m] ** 2) / np.sum(svdvals**2)
        assert np.isclose(strategy.cumulative_energy, expected)
        assert np.isclose(strategy.residual_energy, 1 - expected)
        assert "Cumulative energy: " in str(strategy)

        # Zero history: no energy to miss.
        strategy.solutions = np.zeros((n, M))
        strategy.order_reduction()
        assert strategy.residual_energy == 0

    def test_randomized(self, n=60, M=15, m=4):
        """Test svdsolver="randomized" on a history with decaying spectrum."""
        rng = np.random.default_rng(8)
        U = la.qr(rng.standard_normal((n, M)), mode="economic")[0]
        V = la.qr(rng.standard_normal((M, M)))[0]
        X = U @ np.diag(2.0 ** -np.arange(M)) @ V.T

        strategy = self.Strategy(n, M, m, svdsolver="randomized", rng=7)
        strategy.solutions = X
        strategy.order_reduction()
        strategy.verify()
        assert strategy.svdvals.shape == (m,)
        besterr = romsketch.post.best_rank_error(X, m)[0]
        assert strategy.projection_error(relative=False) <= 1.1 * besterr
        assert "Approximate cumulative energy" in str(strategy)

        # Energies agree with the dense solver.
        dense = self.Strategy(n, M, m)
        dense.solutions = X
        dense.order_reduction()
        assert np.isclose(
            strategy.residual_energy, dense.residual_energy, rtol=1e-3
        )
        assert np.isclose(
            strategy.cumulative_energy, dense.cumulative_energy, rtol=1e-6
        )

    def test_randomized_energy_flat_spectrum(
        self, make_history, n=40, M=12, m=3
    ):
        """Energies from only m singular values still see the whole history."""
        X = make_history(n, M)
        dense = self.Strategy(n, M, m)
        randomized = self.Strategy(n, M, m, svdsolver="randomized", rng=3)
        for strategy in (dense, randomized):
            strategy.solutions = X
            strategy.order_reduction()

        assert dense.residual_energy > 0.1
        assert randomized.residual_energy >= dense.residual_energy - 1e-12
        assert randomized.cumulative_energy < 1

    def test_plot_svdval_decay(self, make_history, n=30, M=10, m=4):
        """Test plot_svdval_decay()."""
        strategy = self.Strategy(n, M, m)
        with pytest.raises(AttributeError) as ex:
            strategy.plot_svdval_decay()
        assert ex.value.args[0] == (
            "no singular value data, call order_reduction()"
        )

        strategy.solutions = make_history(n, M)
        strategy.order_reduction()
        ax = strategy.plot_svdval_decay(threshold=1e-2)
        assert isinstance(ax, plt.Axes)
        plt.close("all")
