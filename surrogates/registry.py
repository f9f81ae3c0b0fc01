from __future__ import annotations

from typing import Callable, Dict, Sequence

import numpy as np

from ews.errors import ConfigurationError

from .ar1 import AR1Surrogate
from .fourier import RandomFourier
from .shuffle import RandomShuffle

SurrogateGenerator = Callable[[], np.ndarray]

SURROGATES: Dict[str, Callable[..., SurrogateGenerator]] = {
    "random_fourier": RandomFourier,
    "ar1": AR1Surrogate,
    "shuffle": RandomShuffle,
}


def check_method(name: str) -> str:
    if name not in SURROGATES:
        raise ConfigurationError(f"Unknown surrogate method {name!r}; expected one of {sorted(SURROGATES)}")
    return name


def make_generator(name: str, x: Sequence[float], seed: int | None) -> SurrogateGenerator:
    return SURROGATES[check_method(name)](x, seed)
