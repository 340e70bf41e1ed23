# strategies/conftest.py
"""Fixtures for testing the strategies submodule."""

import pytest
import numpy as np


@pytest.fixture
def make_history():
    """Factory for (n, M) snapshot histories of a given rank."""

    def _make(n, M, rank=None, seed=0):
        rng = np.random.default_rng(seed)
        if rank is None:
            return rng.standard_normal((n, M))
        return rng.standard_normal((n, rank)) @ rng.standard_normal((rank, M))

    return _make


@pytest.fixture
def unit_history():
    """History of 12 random unit vectors of length 50."""
    rng = np.random.default_rng(1234)
    X = rng.standard_normal((50, 12))
    return X / np.linalg.norm(X, axis=0)
