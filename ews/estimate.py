from __future__ import annotations

import logging
import time
from typing import Optional, Sequence

import numpy as np

from .ensemble import SurrogateEnsemble
from .errors import ConfigurationError
from .evolution import WindowGeometry, evolve_time, evolve_values
from .model import TransitionsConfig, TransitionsResult, WindowedIndicatorResult
from .timeseries import as_series, isequispaced
from .windows import resolve_time_reducer

LOGGER = logging.getLogger(__name__)


def analyze_indicators(
    t: Optional[Sequence[float]],
    x: Sequence[float],
    config: TransitionsConfig,
) -> WindowedIndicatorResult:
    """Indicator and change-metric series of ``x`` without any surrogate testing."""
    times, values = as_series(t, x)
    geometry = WindowGeometry.from_config(config)
    geometry.lengths(len(values))
    t_indicator, t_change = evolve_time(times, geometry, resolve_time_reducer(config.whichtime))
    x_indicator, x_change = _observed(values, config, geometry)
    return WindowedIndicatorResult(
        t=times.copy(),
        x=values.copy(),
        indicator_names=tuple(pair.indicator.name for pair in config.pairs),
        t_indicator=t_indicator,
        x_indicator=x_indicator,
        change_metric_names=tuple(pair.change_metric.name for pair in config.pairs),
        t_change=t_change,
        x_change=x_change,
    )


def estimate_transitions(
    t: Optional[Sequence[float]],
    x: Sequence[float],
    config: TransitionsConfig,
) -> TransitionsResult:
    """Estimate possible transitions in ``x`` by testing its change metrics against surrogates.

    If ``t`` is None the sample indices are used as time. Every configuration
    problem is raised before the first surrogate is drawn; an error inside a
    worker lane aborts the whole run.
    """
    times, values = as_series(t, x)
    geometry = WindowGeometry.from_config(config)
    geometry.lengths(len(values))
    if not isequispaced(times):
        LOGGER.warning("Time vector is not equispaced; change metrics are computed per sample")

    t_indicator, t_change = evolve_time(times, geometry, resolve_time_reducer(config.whichtime))
    x_indicator, x_change = _observed(values, config, geometry)

    started = time.monotonic()
    LOGGER.info(
        "Estimating transitions: %d pairs, %d %s surrogates on %d lanes",
        len(config.pairs),
        config.n_surrogates,
        config.surrogate_method,
        config.n_lanes,
    )
    ensemble = SurrogateEnsemble(values, config)
    pvalues = np.zeros_like(x_change)
    for idx, pair in enumerate(config.pairs):
        pvalues[:, idx] = ensemble.pvalues(pair, x_change[:, idx])
        LOGGER.debug("Pair %s done, min p=%.4f", pair.label, float(np.min(pvalues[:, idx])))
    LOGGER.info("Surrogate ensemble finished in %.2fs", time.monotonic() - started)

    return TransitionsResult(
        t=times.copy(),
        x=values.copy(),
        indicator_names=tuple(pair.indicator.name for pair in config.pairs),
        t_indicator=t_indicator,
        x_indicator=x_indicator,
        change_metric_names=tuple(pair.change_metric.name for pair in config.pairs),
        t_change=t_change,
        x_change=x_change,
        pvalues=pvalues,
        surrogate_method=config.surrogate_method,
        n_surrogates=config.n_surrogates,
        tail=config.tail,
    )


def transition_flags(result: TransitionsResult, p_threshold: float) -> np.ndarray:
    """Boolean matrix of p-values below ``p_threshold``, one column per change metric.

    The extra last column is True where every change metric is significant.
    """
    if not 0 < p_threshold < 1:
        raise ConfigurationError(f"Threshold must be a value between 0 and 1, got {p_threshold}")
    thresholded = result.pvalues < p_threshold
    all_significant = np.all(thresholded, axis=1, keepdims=True)
    return np.hstack([thresholded, all_significant])


def flagged_times(result: WindowedIndicatorResult, flags: np.ndarray, column: int = -1) -> np.ndarray:
    return result.t_change[flags[:, column]]


def _observed(values: np.ndarray, config: TransitionsConfig, geometry: WindowGeometry):
    len_ind, len_cha = geometry.lengths(len(values))
    x_indicator = np.empty((len_ind, len(config.pairs)), dtype=float)
    x_change = np.empty((len_cha, len(config.pairs)), dtype=float)
    for idx, pair in enumerate(config.pairs):
        x_indicator[:, idx], x_change[:, idx] = evolve_values(
            values, pair.indicator, pair.change_metric, geometry
        )
    return x_indicator, x_change
