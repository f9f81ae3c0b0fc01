from __future__ import annotations

from typing import Optional, Sequence, Tuple

import numpy as np

from .errors import ConfigurationError


def isequispaced(t: Sequence[float], rtol: float = 1e-6) -> bool:
    values = np.asarray(t, dtype=float)
    if len(values) < 3:
        return True
    steps = np.diff(values)
    return bool(np.allclose(steps, steps[0], rtol=rtol, atol=0.0))


def equispaced_step(t: Sequence[float]) -> float:
    values = np.asarray(t, dtype=float)
    if len(values) < 2:
        raise ConfigurationError("Need at least two time points to derive a step")
    if not isequispaced(values):
        raise ConfigurationError("Time vector is not equispaced")
    return float(np.mean(np.diff(values)))


def as_series(t: Optional[Sequence[float]], x: Sequence[float]) -> Tuple[np.ndarray, np.ndarray]:
    values = np.asarray(x, dtype=float)
    if values.ndim != 1:
        raise ConfigurationError(f"Expected a 1-D value vector, got shape {values.shape}")
    if t is None:
        return np.arange(len(values), dtype=float), values
    times = np.asarray(t, dtype=float)
    if times.ndim != 1 or len(times) != len(values):
        raise ConfigurationError(
            f"Time vector of shape {times.shape} does not match {len(values)} values"
        )
    return times, values
