from __future__ import annotations

import numpy as np
import pytest

from ews.errors import ConfigurationError, WindowSizeError
from ews.windows import (
    WindowViewer,
    iter_windowmap,
    lastpoint,
    midpoint,
    midvalue,
    window_count,
    windowmap,
    windowmap_into,
)


@pytest.mark.parametrize(
    "n, width, stride",
    [(10, 1, 1), (10, 10, 1), (10, 3, 2), (101, 20, 7), (57, 5, 60)],
)
def test_window_count_law(n, width, stride):
    x = np.arange(n, dtype=float)
    expected = (n - width) // stride + 1
    assert window_count(n, width, stride) == expected
    assert len(WindowViewer(x, width, stride)) == expected
    assert len(windowmap(np.sum, x, width, stride)) == expected
    assert len(list(iter_windowmap(np.sum, x, width, stride))) == expected


def test_windows_are_offset_by_stride():
    x = np.arange(12, dtype=float)
    windows = list(WindowViewer(x, width=4, stride=3))
    assert [list(w) for w in windows] == [
        [0, 1, 2, 3],
        [3, 4, 5, 6],
        [6, 7, 8, 9],
    ]
    assert list(WindowViewer(x, 4, 3).spans()) == [(0, 4), (3, 7), (6, 10)]


def test_windowmap_into_rejects_wrong_buffer_before_calling_reducer():
    calls = []

    def reducer(window):
        calls.append(len(window))
        return 0.0

    x = np.arange(20, dtype=float)
    expected = window_count(20, 5, 2)
    for length in (expected - 1, expected + 1, 0):
        with pytest.raises(WindowSizeError):
            windowmap_into(reducer, np.empty(length), x, 5, 2)
    assert calls == []

    out = np.empty(expected)
    assert windowmap_into(np.mean, out, x, 5, 2) is out
    assert np.allclose(out, windowmap(np.mean, x, 5, 2))


def test_width_larger_than_sequence_is_a_configuration_error():
    with pytest.raises(ConfigurationError):
        windowmap(np.mean, np.arange(5.0), width=6)
    with pytest.raises(ConfigurationError):
        WindowViewer(np.arange(5.0), width=2, stride=0)


def test_time_reducers_use_floor_midpoint():
    assert midpoint(np.array([1.0, 2.0, 3.0, 4.0])) == 2.0
    assert midpoint(np.array([1.0, 2.0, 3.0])) == 2.0
    assert midvalue(np.array([1.0, 2.0, 3.0, 4.0])) == 2.5
    assert midvalue(np.array([1.0, 2.0, 3.0])) == 2.0
    assert lastpoint(np.array([1.0, 2.0, 3.0])) == 3.0


def test_time_windows_align_with_value_windows():
    t = np.arange(100, dtype=float) * 0.5 + 10
    x = np.arange(100, dtype=float)
    t_win = windowmap(midpoint, t, 9, 4)
    x_start = windowmap(lambda w: w[0], x, 9, 4)
    # window i starts at sample i * stride, its midpoint is 4 samples later
    assert np.allclose(t_win, 10 + 0.5 * (x_start + 4))
