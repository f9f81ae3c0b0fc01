from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

import numpy as np


@dataclass(frozen=True, slots=True)
class WindowFunction:
    """A pure reducer from one window to a scalar, tagged with a name."""

    name: str
    func: Callable[[np.ndarray], float]

    def __call__(self, window: np.ndarray) -> float:
        return self.func(window)


class PrecomputableFunction:
    """Window function whose coefficients depend only on the window width."""

    name = "precomputable"

    def precompute(self, width: int) -> WindowFunction:
        raise NotImplementedError
