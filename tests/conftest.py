import datetime as dt
import os
import sys

import numpy as np
import pytest

# ensure workspace root is on sys.path so config and trendcast can be imported
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from trendcast.schemas import TimeSeriesPoint


@pytest.fixture
def rng():
    """Seeded generator so bootstrap and Monte Carlo results are repeatable."""
    return np.random.default_rng(1234)


@pytest.fixture
def dated():
    def _build(values, start=dt.date(2024, 1, 1)):
        return [
            TimeSeriesPoint(date=start + dt.timedelta(days=i), value=float(v))
            for i, v in enumerate(values)
        ]
    return _build
