from __future__ import annotations

import threading

import numpy as np
import pytest

from ews.config import build_config
from ews.ensemble import SurrogateEnsemble, lane_seeds
from ews.estimate import estimate_transitions
from surrogates.synthetic import SyntheticTipping, white_noise


def _config(**overrides):
    settings = dict(
        width_ind=40,
        stride_ind=5,
        width_cha=10,
        stride_cha=1,
        surrogate_method="random_fourier",
        n_surrogates=30,
        tail="right",
        rng_seed=7,
        n_lanes=3,
    )
    settings.update(overrides)
    return build_config(["var", "ar1_whitenoise"], "ridge_slope", **settings)


def test_lane_seeds_are_reproducible():
    assert lane_seeds(42, 4) == lane_seeds(42, 4)
    assert len(set(lane_seeds(42, 4))) == 4


@pytest.mark.parametrize("tail", ["left", "right"])
def test_one_sided_pvalues_lie_in_unit_interval(tail):
    x = white_noise(300, seed=1)
    result = estimate_transitions(None, x, _config(tail=tail))
    assert result.pvalues.shape == result.x_change.shape
    assert np.all(result.pvalues >= 0)
    assert np.all(result.pvalues <= 1)
    # counts over n_surrogates
    assert np.allclose(result.pvalues * 30, np.round(result.pvalues * 30))


def test_two_sided_pvalues_lie_within_doubled_interval():
    x = white_noise(300, seed=2)
    result = estimate_transitions(None, x, _config(tail="both", n_surrogates=25))
    assert np.all(result.pvalues >= 0)
    assert np.all(result.pvalues <= 2)
    # 2 * min(right, left) is always an even count
    counts = np.round(result.pvalues * 25).astype(int)
    assert np.all(counts % 2 == 0)


def test_same_seed_and_lanes_give_identical_pvalues():
    t, x = SyntheticTipping(seed=5, n=400).generate()
    first = estimate_transitions(t, x, _config(tail="both"))
    second = estimate_transitions(t, x, _config(tail="both"))
    assert np.array_equal(first.pvalues, second.pvalues)


def test_left_and_right_counts_are_complementary_for_continuous_metrics():
    x = white_noise(300, seed=3)
    right = estimate_transitions(None, x, _config(tail="right"))
    left = estimate_transitions(None, x, _config(tail="left"))
    # same seeds, same surrogates: ties have probability zero
    assert np.allclose(right.pvalues + left.pvalues, 1.0)


def test_tipping_series_has_small_pvalues_against_shuffles():
    t, x = SyntheticTipping(seed=11, n=600).generate()
    config = build_config(
        ["ar1_whitenoise"],
        ["ridge_slope"],
        width_ind=100,
        stride_ind=10,
        width_cha=40,
        surrogate_method="shuffle",
        n_surrogates=40,
        tail="right",
        rng_seed=3,
        n_lanes=2,
    )
    result = estimate_transitions(t, x, config)
    # shuffled surrogates have no memory trend at all
    assert np.mean(result.pvalues[:, 0]) < 0.2


def test_error_in_a_lane_aborts_the_analysis():
    lock = threading.Lock()
    calls = {"n": 0}
    x = white_noise(200, seed=4)
    n_observed = (200 - 40) // 5 + 1

    def fragile_var(window):
        with lock:
            calls["n"] += 1
            if calls["n"] > n_observed:
                raise RuntimeError("indicator failed")
        return float(np.var(window))

    config = build_config(
        [fragile_var],
        "ridge_slope",
        width_ind=40,
        stride_ind=5,
        width_cha=10,
        n_surrogates=50,
        rng_seed=1,
        n_lanes=4,
    )
    with pytest.raises(RuntimeError, match="indicator failed"):
        estimate_transitions(None, x, config)


def test_generators_are_bound_to_original_series():
    x = white_noise(120, seed=9)
    ensemble = SurrogateEnsemble(x, _config(surrogate_method="shuffle"))
    assert ensemble.n_lanes == 3
    for generator in ensemble.generators:
        assert np.array_equal(np.sort(generator()), np.sort(x))
    with pytest.raises(ValueError):
        ensemble.pvalues(ensemble.config.pairs[0], np.zeros(3))
