from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np

from .model import TransitionsConfig
from .windows import WindowReducer, midpoint, window_count, windowmap, windowmap_into


@dataclass(frozen=True, slots=True)
class WindowGeometry:
    width_ind: int
    stride_ind: int
    width_cha: int
    stride_cha: int

    @classmethod
    def from_config(cls, config: TransitionsConfig) -> "WindowGeometry":
        return cls(config.width_ind, config.stride_ind, config.width_cha, config.stride_cha)

    def lengths(self, n: int) -> Tuple[int, int]:
        """Lengths of the indicator and change-metric series for an input of length ``n``."""
        len_ind = window_count(n, self.width_ind, self.stride_ind)
        len_cha = window_count(len_ind, self.width_cha, self.stride_cha)
        return len_ind, len_cha


def evolve_values(
    x: Sequence[float],
    indicator: WindowReducer,
    change: WindowReducer,
    geometry: WindowGeometry,
) -> Tuple[np.ndarray, np.ndarray]:
    x_ind = windowmap(indicator, x, geometry.width_ind, geometry.stride_ind)
    x_cha = windowmap(change, x_ind, geometry.width_cha, geometry.stride_cha)
    return x_ind, x_cha


def evolve_time(
    t: Sequence[float],
    geometry: WindowGeometry,
    whichtime: WindowReducer = midpoint,
) -> Tuple[np.ndarray, np.ndarray]:
    t_ind = windowmap(whichtime, t, geometry.width_ind, geometry.stride_ind)
    t_cha = windowmap(whichtime, t_ind, geometry.width_cha, geometry.stride_cha)
    return t_ind, t_cha


def evolve(
    t: Sequence[float],
    x: Sequence[float],
    indicator: WindowReducer,
    change: WindowReducer,
    geometry: WindowGeometry,
    whichtime: WindowReducer = midpoint,
) -> Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """Indicator series of ``x`` and change-metric series of that indicator, with time axes."""
    t_ind, t_cha = evolve_time(t, geometry, whichtime)
    x_ind, x_cha = evolve_values(x, indicator, change, geometry)
    return t_ind, x_ind, t_cha, x_cha


def evolve_into(
    x: Sequence[float],
    indicator: WindowReducer,
    change: WindowReducer,
    geometry: WindowGeometry,
    out_ind: np.ndarray,
    out_cha: np.ndarray,
) -> np.ndarray:
    windowmap_into(indicator, out_ind, x, geometry.width_ind, geometry.stride_ind)
    return windowmap_into(change, out_cha, out_ind, geometry.width_cha, geometry.stride_cha)
