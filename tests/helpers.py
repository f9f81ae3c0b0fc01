from __future__ import annotations

import numpy as np

from ews.model import Tail, TransitionsResult


def make_result(pvalues: np.ndarray, x_change: np.ndarray | None = None) -> TransitionsResult:
    pvalues = np.asarray(pvalues, dtype=float)
    n, c = pvalues.shape
    if x_change is None:
        x_change = np.zeros((n, c))
    return TransitionsResult(
        t=np.arange(n + 4, dtype=float),
        x=np.zeros(n + 4),
        indicator_names=tuple(f"ind{i}" for i in range(c)),
        t_indicator=np.arange(n + 2, dtype=float),
        x_indicator=np.zeros((n + 2, c)),
        change_metric_names=tuple("ridge_slope" for _ in range(c)),
        t_change=np.arange(n, dtype=float) + 2,
        x_change=np.asarray(x_change, dtype=float),
        pvalues=pvalues,
        surrogate_method="random_fourier",
        n_surrogates=100,
        tail=Tail.RIGHT,
    )
