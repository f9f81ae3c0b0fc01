from __future__ import annotations

import numpy as np
from scipy import stats


def mean(window: np.ndarray) -> float:
    return float(np.mean(window))


def var(window: np.ndarray) -> float:
    return float(np.var(window, ddof=1))


def std(window: np.ndarray) -> float:
    return float(np.std(window, ddof=1))


def skewness(window: np.ndarray) -> float:
    return float(stats.skew(window))


def kurtosis(window: np.ndarray) -> float:
    # Excess kurtosis, zero for a normal distribution.
    return float(stats.kurtosis(window))


def ar1_whitenoise(window: np.ndarray) -> float:
    """Lag-1 autoregression coefficient, assuming white-noise residuals."""
    centered = np.asarray(window, dtype=float) - np.mean(window)
    head = centered[:-1]
    return float(np.dot(centered[1:], head) / np.dot(head, head))
