"""
Test cases for trend-index forecasting, covering the naive fallback for short series, Holt/Theta/naive selection by rolling-origin error, bootstrap interval containment and clamping to index or gap bounds.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import math

import numpy as np
import pytest

from config import settings
from trendcast.enums import ModelKind
from trendcast.trend_index import forecast_trend_index


def test_short_series_uses_naive_bands():
    out = forecast_trend_index(list(range(10)), horizon=3)
    assert out.model_used == ModelKind.naive
    assert out.forecast == (9.0, 9.0, 9.0)
    assert out.lower == (0.0, 0.0, 0.0)
    assert out.upper == (19.0, 19.0, 19.0)
    assert math.isinf(out.diagnostics.backtest_error)
    assert out.diagnostics.residual_std == pytest.approx(1.0)


def test_empty_series_centers_on_bounds():
    out = forecast_trend_index([], horizon=2)
    assert out.forecast == (50.0, 50.0)
    assert out.diagnostics.residual_std == 5.0


def test_flat_series(rng):
    out = forecast_trend_index([50.0] * 30, horizon=7, rng=rng)
    assert out.model_used == ModelKind.holt_damped
    assert all(v == pytest.approx(50.0) for v in out.forecast)
    assert out.lower == out.forecast
    assert out.upper == out.forecast
    assert out.diagnostics.backtest_error == 0.0


def test_linear_series_prefers_theta(rng):
    out = forecast_trend_index(np.arange(50.0, 80.0), horizon=7, rng=rng)
    assert out.model_used == ModelKind.theta
    assert out.forecast == pytest.approx([80, 81, 82, 83, 84, 85, 86], abs=1e-6)


def test_increasing_series_clamps_at_100(rng):
    out = forecast_trend_index(np.arange(70.0, 100.0), horizon=7, rng=rng)
    assert out.model_used != ModelKind.naive
    assert all(b >= a - 1e-9 for a, b in zip(out.forecast, out.forecast[1:]))
    assert max(out.forecast) == 100.0
    assert max(out.upper) <= 100.0


def test_gap_bounds_allow_negative_values(rng):
    out = forecast_trend_index([-40.0] * 30, clamp_bounds=(-100.0, 100.0), horizon=4, rng=rng)
    assert all(v == pytest.approx(-40.0) for v in out.forecast)


def test_intervals_contain_forecast(rng):
    series = np.clip(50 + np.cumsum(rng.normal(0, 3, 60)), 0, 100)
    out = forecast_trend_index(series, horizon=10, rng=rng)
    assert len(out.forecast) == len(out.lower) == len(out.upper) == 10
    for lo, f, hi in zip(out.lower, out.forecast, out.upper):
        assert 0.0 <= lo <= f <= hi <= 100.0
    assert out.diagnostics.residual_std > 0


def test_seeded_generators_reproduce():
    series = np.clip(50 + np.random.default_rng(5).normal(0, 6, 40), 0, 100)
    first = forecast_trend_index(series, rng=np.random.default_rng(11))
    second = forecast_trend_index(series, rng=np.random.default_rng(11))
    assert first == second


def test_no_backtest_origin_falls_back_to_naive(monkeypatch):
    monkeypatch.setattr(settings, "rolling_min_train_size", 100)
    out = forecast_trend_index([50.0 + i % 5 for i in range(30)], horizon=3)
    assert out.model_used == ModelKind.naive
    assert math.isinf(out.diagnostics.backtest_error)
