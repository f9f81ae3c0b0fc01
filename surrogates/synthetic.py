from __future__ import annotations

from typing import Tuple

import numpy as np


class SyntheticTipping:
    """Deterministic demo series approaching a tipping point.

    An AR(1) process whose coefficient ramps from ``phi_start`` to
    ``phi_end``: the memory of the system grows over time, which is what
    critical slowing down looks like in the data.
    """

    def __init__(
        self,
        seed: int | None = None,
        n: int = 2000,
        phi_start: float = 0.1,
        phi_end: float = 0.98,
        noise: float = 1.0,
    ) -> None:
        self.random = np.random.default_rng(seed)
        self.n = n
        self.phi_start = phi_start
        self.phi_end = phi_end
        self.noise = noise

    def generate(self) -> Tuple[np.ndarray, np.ndarray]:
        t = np.arange(self.n, dtype=float)
        phi = np.linspace(self.phi_start, self.phi_end, self.n)
        eps = self.random.normal(0.0, self.noise, size=self.n)
        x = np.empty(self.n, dtype=float)
        x[0] = eps[0]
        for idx in range(1, self.n):
            x[idx] = phi[idx] * x[idx - 1] + eps[idx]
        return t, x


def white_noise(n: int, seed: int | None = None) -> np.ndarray:
    return np.random.default_rng(seed).normal(size=n)
