from __future__ import annotations

import numpy as np
import pytest

from ews.errors import ConfigurationError
from ews.timeseries import as_series, equispaced_step, isequispaced


def test_equispacing():
    assert isequispaced(np.arange(0.0, 10.0, 0.1))
    assert isequispaced([1.0, 5.0])
    assert not isequispaced([0.0, 1.0, 3.0])
    assert equispaced_step(np.arange(0.0, 5.0, 0.5)) == pytest.approx(0.5)
    with pytest.raises(ConfigurationError):
        equispaced_step([0.0, 1.0, 3.0])


def test_as_series_defaults_to_sample_index():
    t, x = as_series(None, [3, 4, 5])
    assert t.tolist() == [0.0, 1.0, 2.0]
    assert x.dtype == float
    with pytest.raises(ConfigurationError):
        as_series([0.0, 1.0], [1.0, 2.0, 3.0])
    with pytest.raises(ConfigurationError):
        as_series(None, np.zeros((3, 2)))
