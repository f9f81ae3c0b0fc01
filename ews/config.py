from __future__ import annotations

import os
from numbers import Integral
from pathlib import Path
from typing import Any, Dict, Sequence, Tuple

import yaml

from indicators.base import WindowFunction
from indicators.registry import CHANGE_METRICS, INDICATORS, resolve
from surrogates.registry import check_method

from .errors import ConfigurationError
from .model import MetricPair, Tail, TransitionsConfig
from .windows import resolve_time_reducer


def pair_metrics(
    indicators: Sequence[WindowFunction],
    change_metrics: Sequence[WindowFunction],
) -> Tuple[MetricPair, ...]:
    if not indicators:
        raise ConfigurationError("At least one indicator is required")
    if len(change_metrics) == len(indicators):
        metrics = list(change_metrics)
    elif len(change_metrics) == 1:
        metrics = [change_metrics[0]] * len(indicators)
    else:
        raise ConfigurationError(
            f"Got {len(indicators)} indicators and {len(change_metrics)} change metrics; "
            "provide one change metric per indicator or a single shared one"
        )
    return tuple(MetricPair(ind, cha) for ind, cha in zip(indicators, metrics))


def build_config(
    indicators: Sequence[Any],
    change_metrics: Sequence[Any] | Any,
    *,
    width_ind: int,
    stride_ind: int = 1,
    width_cha: int,
    stride_cha: int = 1,
    whichtime: str = "midpoint",
    surrogate_method: str = "random_fourier",
    n_surrogates: int = 10_000,
    tail: Tail | str = Tail.BOTH,
    rng_seed: int | None = None,
    n_lanes: int | None = None,
) -> TransitionsConfig:
    """Validate the analysis settings and resolve every window function once."""
    if not isinstance(indicators, (list, tuple)):
        indicators = [indicators]
    if not isinstance(change_metrics, (list, tuple)):
        change_metrics = [change_metrics]
    lanes = n_lanes if n_lanes is not None else (os.cpu_count() or 1)
    for label, value in (
        ("width_ind", width_ind),
        ("stride_ind", stride_ind),
        ("width_cha", width_cha),
        ("stride_cha", stride_cha),
        ("n_surrogates", n_surrogates),
        ("n_lanes", lanes),
    ):
        if isinstance(value, bool) or not isinstance(value, Integral) or value < 1:
            raise ConfigurationError(f"{label} must be a positive integer, got {value!r}")
    resolve_time_reducer(whichtime)

    resolved_ind = tuple(resolve(item, width_ind, INDICATORS, "indicator") for item in indicators)
    resolved_cha = tuple(resolve(item, width_cha, CHANGE_METRICS, "change metric") for item in change_metrics)
    pairs = pair_metrics(resolved_ind, resolved_cha)

    return TransitionsConfig(
        indicators=resolved_ind,
        change_metrics=resolved_cha,
        pairs=pairs,
        width_ind=int(width_ind),
        stride_ind=int(stride_ind),
        width_cha=int(width_cha),
        stride_cha=int(stride_cha),
        whichtime=whichtime,
        surrogate_method=check_method(surrogate_method),
        n_surrogates=int(n_surrogates),
        tail=Tail.parse(tail),
        rng_seed=rng_seed,
        n_lanes=int(lanes),
    )


def load_config(path: Path) -> Dict:
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle)
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} does not contain a mapping")
    return data


def config_from_mapping(data: Dict, n_lanes: int | None = None) -> TransitionsConfig:
    windows = data.get("windows") or {}
    indicator_window = windows.get("indicator") or {}
    change_window = windows.get("change") or {}
    surrogates = data.get("surrogates") or {}
    try:
        indicators = data["indicators"]
        change_metrics = data["change_metrics"]
        width_ind = indicator_window["width"]
        width_cha = change_window["width"]
    except KeyError as exc:
        raise ConfigurationError(f"Missing required config key {exc.args[0]!r}") from None
    return build_config(
        indicators,
        change_metrics,
        width_ind=width_ind,
        stride_ind=indicator_window.get("stride", 1),
        width_cha=width_cha,
        stride_cha=change_window.get("stride", 1),
        whichtime=windows.get("whichtime", "midpoint"),
        surrogate_method=surrogates.get("method", "random_fourier"),
        n_surrogates=surrogates.get("count", 10_000),
        tail=data.get("tail", Tail.BOTH.value),
        rng_seed=data.get("seed"),
        n_lanes=n_lanes if n_lanes is not None else surrogates.get("lanes"),
    )
