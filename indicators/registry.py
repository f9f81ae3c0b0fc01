from __future__ import annotations

from typing import Any, Callable, Dict, Mapping

from ews.errors import ConfigurationError

from .base import PrecomputableFunction, WindowFunction
from .change_metrics import RidgeRegressionSlope, difference_of_means, kendalltau, spearman
from .entropy import PermutationEntropy
from .spectral import LowfreqPowerSpectrum
from .statistics import ar1_whitenoise, kurtosis, mean, skewness, std, var

# Classes are instantiated with the parameters given in the config, plain
# functions are used as they are.
INDICATORS: Dict[str, Any] = {
    "mean": mean,
    "var": var,
    "std": std,
    "skewness": skewness,
    "kurtosis": kurtosis,
    "ar1_whitenoise": ar1_whitenoise,
    "lowfreq_power": LowfreqPowerSpectrum,
    "permutation_entropy": PermutationEntropy,
}

CHANGE_METRICS: Dict[str, Any] = {
    "ridge_slope": RidgeRegressionSlope,
    "kendalltau": kendalltau,
    "spearman": spearman,
    "difference_of_means": difference_of_means,
}


def resolve(item: Any, width: int, table: Mapping[str, Any], kind: str = "indicator") -> WindowFunction:
    """Turn a name, mapping, callable or precomputable into a ``WindowFunction`` for ``width``."""
    if isinstance(item, WindowFunction):
        return item
    if isinstance(item, PrecomputableFunction):
        try:
            return item.precompute(width)
        except ValueError as exc:
            raise ConfigurationError(f"Cannot prepare {kind} {item.name!r}: {exc}") from exc
    if isinstance(item, str):
        return resolve(_lookup(item, {}, table, kind), width, table, kind)
    if isinstance(item, Mapping):
        params = dict(item)
        name = params.pop("name", None)
        if not isinstance(name, str):
            raise ConfigurationError(f"{kind.capitalize()} mapping needs a 'name' entry: {item!r}")
        return resolve(_lookup(name, params, table, kind), width, table, kind)
    if callable(item):
        return WindowFunction(_callable_name(item), item)
    raise ConfigurationError(f"Cannot use {item!r} as {kind}")


def _lookup(name: str, params: Dict[str, Any], table: Mapping[str, Any], kind: str) -> Any:
    try:
        entry = table[name]
    except KeyError:
        raise ConfigurationError(f"Unknown {kind} {name!r}; expected one of {sorted(table)}") from None
    if isinstance(entry, type):
        try:
            return entry(**params)
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(f"Invalid parameters for {kind} {name!r}: {exc}") from exc
    if params:
        raise ConfigurationError(f"{kind.capitalize()} {name!r} takes no parameters")
    return entry


def _callable_name(func: Callable[..., Any]) -> str:
    return getattr(func, "name", None) or getattr(func, "__name__", None) or type(func).__name__
