# strategies/test_scenario.py
"""End-to-end tests of the host cadence: push, reduce, read the basis."""

import numpy as np
import scipy.linalg as la

import romsketch


def test_rsvd_repeated_calls(unit_history, m=4, p=2, freq=5):
    """Six reductions of a fixed history of 12 unit vectors in R^50."""
    n, M = unit_history.shape
    strategy = romsketch.strategies.RandomizedSVD(
        n, M, m, p=p, freq=freq, rng=2024
    )
    strategy.solutions = unit_history

    for call in range(6):
        assert strategy.sketch.resync_due == (call % freq == 0)
        strategy.order_reduction()
    assert strategy.counter == 6

    # The last call was a resync, so the sketch is exact.
    assert np.allclose(
        strategy.sketch.sketch,
        unit_history @ strategy.sketch.test_matrix,
    )

    V = strategy.basis
    assert V.shape == (n, m)
    assert np.allclose(V.T @ V, np.eye(m), atol=1e-10)

    pod = romsketch.strategies.POD(n, M, m)
    pod.solutions = unit_history
    pod.order_reduction()
    poderr = la.norm(unit_history - pod.basis @ (pod.basis.T @ unit_history))
    rsvderr = la.norm(unit_history - V @ (V.T @ unit_history))
    assert poderr <= rsvderr + 1e-12
    assert rsvderr <= 3 * poderr


def test_streaming_all_strategies(n=60, M=10, m=4, steps=25):
    """Drive every strategy through a stream of snapshots that lie in a
    fixed four-dimensional subspace.
    """
    rng = np.random.default_rng(5)
    modes = la.qr(rng.standard_normal((n, m)), mode="economic")[0]

    def snapshot(t):
        return modes @ np.array([np.sin(t), np.cos(2 * t), t, 1.0])

    strategies = [
        romsketch.strategies.POD(n, M, m),
        romsketch.strategies.RandomizedQR(n, M, m, freq=7, rng=rng),
        romsketch.strategies.RandomizedQR(n, M, m, p=2, freq=7, rng=rng),
        romsketch.strategies.RandomizedSVD(n, M, m, p=2, freq=7, rng=rng),
        romsketch.strategies.Nystrom(n, M, m, rng=rng),
        romsketch.strategies.Nystrom(n, M, m, 2, rng=rng),
    ]
    for strategy in strategies:
        strategy.solutions = np.column_stack(
            [snapshot(0.1 * j) for j in range(M)]
        )

    for step in range(M, M + steps):
        for strategy in strategies:
            strategy.push(snapshot(0.1 * step))
            romsketch.strategies.order_reduction(strategy)
            strategy.verify()
            assert strategy.projection_error() < 1e-6

    for strategy in strategies[1:4]:
        assert strategy.counter == steps
        assert np.allclose(
            strategy.sketch.sketch,
            strategy.solutions @ strategy.sketch.test_matrix,
        )
