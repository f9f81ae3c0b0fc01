from __future__ import annotations

import numpy as np
from scipy import stats

from .base import PrecomputableFunction, WindowFunction


class RidgeRegressionSlope(PrecomputableFunction):
    """Slope of a ridge regression of the window against its sample index.

    The regression operator only depends on the width, so it is solved once
    and each window costs a single dot product.
    """

    name = "ridge_slope"

    def __init__(self, lambda_: float = 0.0) -> None:
        if lambda_ < 0:
            raise ValueError(f"lambda_ must be non-negative, got {lambda_}")
        self.lambda_ = lambda_

    def precompute(self, width: int) -> WindowFunction:
        if width < 2:
            raise ValueError("Ridge regression slope needs a window of at least two points")
        design = np.column_stack([np.arange(width, dtype=float), np.ones(width)])
        gram = design.T @ design + self.lambda_ * np.eye(2)
        row = np.linalg.solve(gram, design.T)[0]
        row.setflags(write=False)

        def ridge_slope(window: np.ndarray) -> float:
            return float(np.dot(row, window))

        return WindowFunction(self.name, ridge_slope)


def kendalltau(window: np.ndarray) -> float:
    return float(stats.kendalltau(np.arange(len(window)), window)[0])


def spearman(window: np.ndarray) -> float:
    return float(stats.spearmanr(np.arange(len(window)), window)[0])


def difference_of_means(window: np.ndarray) -> float:
    half = len(window) // 2
    return float(np.mean(window[half:]) - np.mean(window[:half]))
