from __future__ import annotations

import numpy as np
import pytest

from ews.errors import ConfigurationError
from ews.estimate import flagged_times, transition_flags
from helpers import make_result


def test_threshold_must_lie_in_open_unit_interval():
    result = make_result(np.full((5, 2), 0.5))
    for threshold in (0, 1, -0.1, 1.5):
        with pytest.raises(ConfigurationError):
            transition_flags(result, threshold)


def test_flag_matrix_shape_and_and_column():
    pvalues = np.array(
        [
            [0.01, 0.02, 0.50],
            [0.01, 0.90, 0.01],
            [0.20, 0.01, 0.01],
            [0.00, 0.04, 0.03],
        ]
    )
    flags = transition_flags(make_result(pvalues), 0.05)
    assert flags.shape == (4, 4)
    assert flags.dtype == bool
    assert np.array_equal(flags[:, -1], np.all(flags[:, :-1], axis=1))
    assert flags[:, -1].tolist() == [False, False, False, True]


def test_and_column_for_random_results():
    rng = np.random.default_rng(0)
    for n_metrics in (1, 2, 5):
        result = make_result(rng.uniform(0, 1.2, size=(50, n_metrics)))
        flags = transition_flags(result, 0.3)
        assert np.array_equal(flags[:, -1], np.logical_and.reduce(flags[:, :-1], axis=1))


def test_flags_are_monotone_in_threshold():
    rng = np.random.default_rng(1)
    result = make_result(rng.uniform(0, 1, size=(200, 3)))
    thresholds = [0.01, 0.05, 0.1, 0.5, 0.9]
    for low, high in zip(thresholds, thresholds[1:]):
        loose = transition_flags(result, high)
        strict = transition_flags(result, low)
        assert np.all(loose >= strict)


def test_flagged_times_picks_change_time_axis():
    pvalues = np.array([[0.01], [0.5], [0.02]])
    result = make_result(pvalues)
    flags = transition_flags(result, 0.05)
    assert flagged_times(result, flags).tolist() == [2.0, 4.0]


def test_result_arrays_are_read_only():
    result = make_result(np.full((3, 1), 0.5))
    with pytest.raises(ValueError):
        result.pvalues[0, 0] = 0.0
