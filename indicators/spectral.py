from __future__ import annotations

import numpy as np

from .base import PrecomputableFunction, WindowFunction


class LowfreqPowerSpectrum(PrecomputableFunction):
    """Fraction of spectral power carried by the lowest ``q_lowfreq`` of the frequencies.

    The mean is removed before the transform, so the zero frequency is not
    counted. A reddening spectrum (power moving to low frequencies) is one of
    the classic signatures of critical slowing down.
    """

    name = "lowfreq_power"

    def __init__(self, q_lowfreq: float = 0.1) -> None:
        if not 0 < q_lowfreq <= 1:
            raise ValueError(f"q_lowfreq must lie in (0, 1], got {q_lowfreq}")
        self.q_lowfreq = q_lowfreq

    def precompute(self, width: int) -> WindowFunction:
        n_freq = width // 2
        cutoff = max(1, int(round(self.q_lowfreq * n_freq)))

        def lowfreq_power(window: np.ndarray) -> float:
            centered = np.asarray(window, dtype=float) - np.mean(window)
            power = np.abs(np.fft.rfft(centered)[1:]) ** 2
            return float(np.sum(power[:cutoff]) / np.sum(power))

        return WindowFunction(self.name, lowfreq_power)
