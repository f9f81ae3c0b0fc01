from __future__ import annotations

from typing import Sequence

import numpy as np


class RandomFourier:
    """Phase-randomized surrogates: same amplitude spectrum and mean, random phases."""

    def __init__(self, x: Sequence[float], seed: int | None = None) -> None:
        self.x = np.asarray(x, dtype=float)
        self.rng = np.random.default_rng(seed)
        self._mean = float(np.mean(self.x))
        self._amplitudes = np.abs(np.fft.rfft(self.x - self._mean))

    def __call__(self) -> np.ndarray:
        n = len(self.x)
        phases = self.rng.uniform(0.0, 2 * np.pi, size=len(self._amplitudes))
        phases[0] = 0.0
        if n % 2 == 0:
            # Nyquist bin must stay real for a real-valued inverse.
            phases[-1] = 0.0
        spectrum = self._amplitudes * np.exp(1j * phases)
        return np.fft.irfft(spectrum, n=n) + self._mean
