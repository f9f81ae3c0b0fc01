from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

import numpy as np

from indicators.base import WindowFunction

from .errors import ConfigurationError


class Tail(str, Enum):
    LEFT = "left"
    RIGHT = "right"
    BOTH = "both"

    @classmethod
    def parse(cls, value: "Tail | str") -> "Tail":
        try:
            return cls(value)
        except ValueError:
            raise ConfigurationError(
                f"`tail` can only be 'left', 'right' or 'both', got {value!r}"
            ) from None


@dataclass(frozen=True, slots=True)
class MetricPair:
    indicator: WindowFunction
    change_metric: WindowFunction

    @property
    def label(self) -> str:
        return f"{self.change_metric.name}({self.indicator.name})"


@dataclass(frozen=True, slots=True)
class TransitionsConfig:
    """Everything ``estimate_transitions`` needs, validated and resolved.

    Build instances with ``ews.config.build_config``; ``pairs`` holds one
    indicator/change-metric pair per indicator, with a single shared
    change metric already broadcast.
    """

    indicators: Tuple[WindowFunction, ...]
    change_metrics: Tuple[WindowFunction, ...]
    pairs: Tuple[MetricPair, ...]
    width_ind: int
    stride_ind: int
    width_cha: int
    stride_cha: int
    whichtime: str
    surrogate_method: str
    n_surrogates: int
    tail: Tail
    rng_seed: int | None
    n_lanes: int


@dataclass(frozen=True, slots=True)
class WindowedIndicatorResult:
    t: np.ndarray
    x: np.ndarray
    indicator_names: Tuple[str, ...]
    t_indicator: np.ndarray
    x_indicator: np.ndarray
    change_metric_names: Tuple[str, ...]
    t_change: np.ndarray
    x_change: np.ndarray

    def __post_init__(self) -> None:
        for name in ("t", "x", "t_indicator", "x_indicator", "t_change", "x_change"):
            _freeze(getattr(self, name))

    @property
    def n_metrics(self) -> int:
        return self.x_change.shape[1]


@dataclass(frozen=True, slots=True)
class TransitionsResult(WindowedIndicatorResult):
    pvalues: np.ndarray
    surrogate_method: str
    n_surrogates: int
    tail: Tail

    def __post_init__(self) -> None:
        WindowedIndicatorResult.__post_init__(self)
        _freeze(self.pvalues)


def _freeze(array: np.ndarray) -> None:
    array.setflags(write=False)
