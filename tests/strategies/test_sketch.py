# strategies/test_sketch.py
"""Tests for strategies._sketch."""

import pytest
import numpy as np

import romsketch


SketchState = romsketch.strategies.SketchState
sketch_update = romsketch.strategies.sketch_update


def _advance(X, rng):
    """Evict the oldest column of X and append a new one, in place."""
    X[:, :-1] = X[:, 1:].copy()
    X[:, -1] = rng.standard_normal(X.shape[0])


class TestSketchState:
    """Test strategies._sketch.SketchState."""

    def test_init(self, n=20, M=8, ell=3):
        """Test __init__() and properties."""
        sketch = SketchState(n, M, ell, 5)
        assert sketch.test_matrix.shape == (M, ell)
        assert sketch.sketch.shape == (n, ell)
        assert sketch.evicted.shape == (n, ell)
        assert sketch.sketch_width == ell
        assert sketch.frequency == 5
        assert sketch.counter == 0
        assert sketch.resync_due

        for freq in (0, -2, 1.5):
            with pytest.raises(ValueError) as ex:
                SketchState(n, M, ell, freq)
            assert ex.value.args[0] == "freq must be a positive integer"

    def test_str(self):
        """Test __str__()."""
        sketch = SketchState(10, 4, 2, 7)
        assert str(sketch) == "SketchState(width=2, frequency=7, counter=0)"


def test_sketch_update_resync(n=30, M=8, ell=3):
    """Test sketch_update() on the first (full) update."""
    rng = np.random.default_rng(0)
    X = rng.standard_normal((n, M))
    sketch = SketchState(n, M, ell, 5)

    sketch_update(sketch, X, rng)
    assert sketch.counter == 1
    assert not sketch.resync_due
    assert np.allclose(sketch.sketch, X @ sketch.test_matrix)
    assert np.allclose(
        sketch.evicted,
        np.outer(X[:, 0], sketch.test_matrix[0]),
    )


def test_sketch_update_one_step(n=30, M=8, ell=3):
    """Test one incremental sketch_update() against the rank-one formula."""
    rng = np.random.default_rng(1)
    X = rng.standard_normal((n, M))
    sketch = SketchState(n, M, ell, 10)
    sketch_update(sketch, X, rng)

    Omega0 = sketch.sketch.copy()
    Z0 = sketch.test_matrix.copy()
    oldest = X[:, 0].copy()

    _advance(X, rng)
    sketch_update(sketch, X, rng)
    assert sketch.counter == 2

    z = sketch.test_matrix[-1]
    expected = Omega0 + np.outer(X[:, -1], z) - np.outer(oldest, Z0[0])
    assert np.allclose(sketch.sketch, expected)
    assert np.all(sketch.test_matrix[:-1] == Z0[1:])
    assert np.allclose(sketch.sketch, X @ sketch.test_matrix)
    assert np.allclose(
        sketch.evicted,
        np.outer(X[:, 0], sketch.test_matrix[0]),
    )


def test_sketch_update_tracks_product(n=25, M=6, ell=4, freq=7):
    """Incremental updates reproduce the direct product when the history
    advances by exactly one snapshot per update.
    """
    rng = np.random.default_rng(2)
    X = rng.standard_normal((n, M))
    sketch = SketchState(n, M, ell, freq)
    sketch_update(sketch, X, rng)

    for _ in range(3 * freq):
        _advance(X, rng)
        sketch_update(sketch, X, rng)
        assert np.allclose(sketch.sketch, X @ sketch.test_matrix)


def test_sketch_update_resync_schedule(n=20, M=6, ell=2, freq=3):
    """Full resyncs happen exactly when counter % freq == 0 and erase any
    drift accumulated by the incremental updates.
    """
    rng = np.random.default_rng(3)
    X = rng.standard_normal((n, M))
    sketch = SketchState(n, M, ell, freq)

    for step in range(3 * freq + 1):
        assert sketch.resync_due == (step % freq == 0)
        if step > 0:
            _advance(X, rng)
        # Corrupt the sketch; only a resync repairs it.
        sketch.sketch += 100.0
        Z_before = sketch.test_matrix.copy()
        sketch_update(sketch, X, rng)
        assert sketch.counter == step + 1

        direct = X @ sketch.test_matrix
        if step % freq == 0:
            assert np.allclose(sketch.sketch, direct)
            assert not np.allclose(sketch.test_matrix[:-1], Z_before[1:])
        else:
            assert not np.allclose(sketch.sketch, direct)
            assert np.all(sketch.test_matrix[:-1] == Z_before[1:])


def test_sketch_update_reproducible(n=15, M=5, ell=2):
    """Equal generators give equal sketches."""
    X = np.random.default_rng(4).standard_normal((n, M))
    sketches = [SketchState(n, M, ell, 4) for _ in range(2)]
    for sketch in sketches:
        sketch_update(sketch, X, np.random.default_rng(99))
    assert np.all(sketches[0].sketch == sketches[1].sketch)
