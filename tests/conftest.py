"""Shared test helpers."""

from __future__ import annotations

import numpy as np
import pytest


class ScriptedRandom:
    """Random source that replays queued values, then falls back to NumPy."""

    def __init__(self, floats=(), ints=(), seed: int = 0) -> None:
        self.floats = list(floats)
        self.ints = list(ints)
        self._fallback = np.random.default_rng(seed)

    def random(self) -> float:
        if self.floats:
            return self.floats.pop(0)
        return float(self._fallback.random())

    def integers(self, low: int, high: int) -> int:
        if self.ints:
            return self.ints.pop(0)
        return int(self._fallback.integers(low, high))


@pytest.fixture()
def scripted():
    """Factory for :class:`ScriptedRandom` instances."""
    return ScriptedRandom
