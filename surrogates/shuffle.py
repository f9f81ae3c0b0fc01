from __future__ import annotations

from typing import Sequence

import numpy as np


class RandomShuffle:
    """Random permutations of the original values."""

    def __init__(self, x: Sequence[float], seed: int | None = None) -> None:
        self.x = np.asarray(x, dtype=float)
        self.rng = np.random.default_rng(seed)

    def __call__(self) -> np.ndarray:
        return self.rng.permutation(self.x)
