from __future__ import annotations

from collections import deque

import numpy as np
import pandas as pd
import pytest


class ScriptedGenerator:
    """Stand-in for ``numpy.random.Generator`` replaying fixed integer draws.

    ``integers`` pops the next scripted value (checked against its bounds);
    ``normal`` returns the mean, i.e. no noise.
    """

    def __init__(self, draws):
        self._draws = deque(draws)
        self.calls: list[tuple[int, int]] = []

    def integers(self, low, high=None):
        value = self._draws.popleft()
        self.calls.append((low, high))
        assert low <= value < high, f"scripted draw {value} outside [{low}, {high})"
        return value

    def normal(self, loc=0.0, scale=1.0, size=None):
        return np.full(size, loc, dtype=float)


@pytest.fixture
def scripted_rng():
    return ScriptedGenerator


@pytest.fixture
def returns_frame() -> pd.DataFrame:
    rng = np.random.default_rng(2024)
    index = pd.bdate_range("2020-01-01", periods=250)
    data = {
        "SPY": rng.normal(0.0004, 0.010, size=len(index)),
        "TLT": rng.normal(0.0001, 0.007, size=len(index)),
        "GLD": rng.normal(0.0002, 0.009, size=len(index)),
    }
    return pd.DataFrame(data, index=index)
