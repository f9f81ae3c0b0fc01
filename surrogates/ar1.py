from __future__ import annotations

from typing import Sequence

import numpy as np
from scipy import signal


class AR1Surrogate:
    """Realizations of the AR(1) process fitted to the original series.

    Keeps the mean, lag-1 autocorrelation and variance of the input while
    discarding any trend or higher-order structure.
    """

    def __init__(self, x: Sequence[float], seed: int | None = None) -> None:
        self.x = np.asarray(x, dtype=float)
        if len(self.x) < 3:
            raise ValueError("AR(1) surrogates need at least three samples")
        self.rng = np.random.default_rng(seed)
        self.mu = float(np.mean(self.x))
        centered = self.x - self.mu
        head, tail = centered[:-1], centered[1:]
        self.phi = float(np.dot(tail, head) / np.dot(head, head))
        residuals = tail - self.phi * head
        self.sigma = float(np.std(residuals))

    def __call__(self) -> np.ndarray:
        n = len(self.x)
        noise = self.rng.normal(0.0, self.sigma, size=n)
        start = self.x[0] - self.mu
        # out[i] = phi * out[i - 1] + noise[i], seeded with the first centered sample
        recursion, _ = signal.lfilter([1.0], [1.0, -self.phi], noise[1:], zi=[self.phi * start])
        return np.concatenate(([start], recursion)) + self.mu
