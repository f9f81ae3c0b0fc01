from __future__ import annotations

import math

import numpy as np


class PermutationEntropy:
    """Normalized Shannon entropy of the ordinal patterns of a window."""

    name = "permutation_entropy"

    def __init__(self, m: int = 3, tau: int = 1) -> None:
        if m < 2 or tau < 1:
            raise ValueError(f"Need m >= 2 and tau >= 1, got m={m} tau={tau}")
        self.m = m
        self.tau = tau

    def __call__(self, window: np.ndarray) -> float:
        values = np.asarray(window, dtype=float)
        span = (self.m - 1) * self.tau
        n = len(values) - span
        if n < 1:
            raise ValueError(f"Window of length {len(values)} too short for m={self.m} tau={self.tau}")
        embedded = np.stack([values[k * self.tau : k * self.tau + n] for k in range(self.m)], axis=1)
        patterns = np.argsort(embedded, axis=1, kind="stable")
        _, counts = np.unique(patterns, axis=0, return_counts=True)
        probs = counts / n
        return float(-np.sum(probs * np.log(probs)) / math.log(math.factorial(self.m)))
