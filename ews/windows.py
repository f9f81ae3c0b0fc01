from __future__ import annotations

from typing import Callable, Dict, Iterator, Sequence, Tuple

import numpy as np

from .errors import ConfigurationError, WindowSizeError

WindowReducer = Callable[[np.ndarray], float]


def window_count(n: int, width: int, stride: int = 1) -> int:
    if width < 1 or stride < 1:
        raise ConfigurationError(f"Window width and stride must be >= 1, got width={width} stride={stride}")
    if width > n:
        raise ConfigurationError(f"Window width {width} exceeds sequence length {n}")
    return (n - width) // stride + 1


class WindowViewer:
    """Lazy view over the sliding windows of a fixed sequence."""

    def __init__(self, x: Sequence[float], width: int, stride: int = 1) -> None:
        self.x = self._to_array(x)
        self.width = width
        self.stride = stride
        self._count = window_count(len(self.x), width, stride)

    def __len__(self) -> int:
        return self._count

    def __iter__(self) -> Iterator[np.ndarray]:
        for start, stop in self.spans():
            yield self.x[start:stop]

    def spans(self) -> Iterator[Tuple[int, int]]:
        for i in range(self._count):
            start = i * self.stride
            yield start, start + self.width

    @staticmethod
    def _to_array(x: Sequence[float]) -> np.ndarray:
        if isinstance(x, np.ndarray):
            return x
        return np.asarray(x)


def iter_windowmap(func: WindowReducer, x: Sequence[float], width: int, stride: int = 1) -> Iterator[float]:
    for window in WindowViewer(x, width, stride):
        yield func(window)


def windowmap(func: WindowReducer, x: Sequence[float], width: int, stride: int = 1) -> np.ndarray:
    viewer = WindowViewer(x, width, stride)
    out = np.empty(len(viewer), dtype=float)
    for idx, window in enumerate(viewer):
        out[idx] = func(window)
    return out


def windowmap_into(
    func: WindowReducer,
    out: np.ndarray,
    x: Sequence[float],
    width: int,
    stride: int = 1,
) -> np.ndarray:
    """Write ``func`` of every window of ``x`` into ``out``.

    The buffer length is checked against the window count before the first
    call to ``func``.
    """
    viewer = WindowViewer(x, width, stride)
    if len(out) != len(viewer):
        raise WindowSizeError(f"Output buffer has length {len(out)}, expected {len(viewer)} windows")
    for idx, window in enumerate(viewer):
        out[idx] = func(window)
    return out


def midpoint(window: np.ndarray) -> float:
    return window[(len(window) - 1) // 2]


def midvalue(window: np.ndarray) -> float:
    n = len(window)
    lower = window[(n - 1) // 2]
    upper = window[n // 2]
    return (lower + upper) / 2


def lastpoint(window: np.ndarray) -> float:
    return window[-1]


TIME_REDUCERS: Dict[str, WindowReducer] = {
    "midpoint": midpoint,
    "midvalue": midvalue,
    "lastpoint": lastpoint,
}


def resolve_time_reducer(name: str | WindowReducer) -> WindowReducer:
    if callable(name):
        return name
    try:
        return TIME_REDUCERS[name]
    except KeyError:
        raise ConfigurationError(
            f"Unknown time reducer {name!r}; expected one of {sorted(TIME_REDUCERS)}"
        ) from None
