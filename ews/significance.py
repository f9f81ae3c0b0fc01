from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from .errors import ConfigurationError
from .model import Tail, WindowedIndicatorResult


@dataclass(frozen=True, slots=True)
class QuantileSignificance:
    """Flag change-metric values beyond their own empirical quantiles.

    Values above the ``p``-quantile (``right``) or below the ``1 - p``-quantile
    (``left``) are significant; ``both`` checks either side. By construction
    some values are always flagged when ``p < 1``. See ``SigmaSignificance``
    for a test without that guarantee.
    """

    p: float = 0.95
    tail: Tail | str = Tail.RIGHT

    def __post_init__(self) -> None:
        if not 0 < self.p <= 1:
            raise ConfigurationError(f"Quantile p must lie in (0, 1], got {self.p}")
        object.__setattr__(self, "tail", Tail.parse(self.tail))

    def flags(self, x_change: np.ndarray) -> np.ndarray:
        tail = Tail.parse(self.tail)
        flags = np.zeros(x_change.shape, dtype=bool)
        for i in range(x_change.shape[1]):
            x = x_change[:, i]
            qmin, qmax = np.quantile(x, (1 - self.p, self.p))
            flags[:, i] = _beyond(x, qmin, qmax, tail)
        return flags


@dataclass(frozen=True, slots=True)
class SigmaSignificance:
    """Flag change-metric values more than ``m`` standard deviations from their mean.

    ``m`` is either one value for all change metrics or one value per metric.
    """

    m: float | Sequence[float] = 3.0
    tail: Tail | str = Tail.RIGHT

    def __post_init__(self) -> None:
        object.__setattr__(self, "tail", Tail.parse(self.tail))

    def flags(self, x_change: np.ndarray) -> np.ndarray:
        tail = Tail.parse(self.tail)
        n_metrics = x_change.shape[1]
        if np.ndim(self.m) == 0:
            multipliers = np.full(n_metrics, float(self.m))
        else:
            multipliers = np.asarray(self.m, dtype=float)
            if len(multipliers) != n_metrics:
                raise ConfigurationError(
                    f"Got {len(multipliers)} sigma multipliers for {n_metrics} change metrics"
                )
        flags = np.zeros(x_change.shape, dtype=bool)
        for i in range(n_metrics):
            x = x_change[:, i]
            mu = np.mean(x)
            sigma = np.std(x, ddof=1)
            spread = multipliers[i] * sigma
            flags[:, i] = _beyond(x, mu - spread, mu + spread, tail)
        return flags


def significant_transitions(
    result: WindowedIndicatorResult,
    signif: QuantileSignificance | SigmaSignificance,
) -> np.ndarray:
    return signif.flags(np.asarray(result.x_change))


def _beyond(x: np.ndarray, lower: float, upper: float, tail: Tail) -> np.ndarray:
    if tail == Tail.RIGHT:
        return x > upper
    if tail == Tail.LEFT:
        return x < lower
    return (x < lower) | (x > upper)
