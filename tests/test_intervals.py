"""
Test cases for prediction intervals, covering horizon-widening analytic bands and the residual bootstrap with its small-sample fallback, reproducibility and bound handling.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import numpy as np
import pytest

from trendcast.exceptions import InvalidParameter
from trendcast.intervals import analytic_intervals, bootstrap_intervals

BOUNDS = (0.0, 100.0)


def test_analytic_bands_widen_with_horizon():
    bands = analytic_intervals(np.full(3, 50.0), np.array([1.0, -1.0]), BOUNDS)
    assert bands.lower80[0] == pytest.approx(50 - 1.28)
    assert bands.upper95[1] == pytest.approx(50 + 1.96 * np.sqrt(2))
    widths = bands.upper80 - bands.lower80
    assert np.all(np.diff(widths) > 0)
    assert np.all(bands.lower95 <= bands.lower80)
    assert np.all(bands.upper80 <= bands.upper95)


def test_analytic_bands_clamp():
    bands = analytic_intervals(np.array([1.0]), np.array([10.0, -10.0]), BOUNDS)
    assert bands.lower80[0] == 0.0
    assert bands.lower95[0] == 0.0


def test_analytic_bands_zero_residuals_collapse():
    bands = analytic_intervals(np.full(4, 20.0), np.zeros(5), BOUNDS)
    assert np.all(bands.lower95 == 20.0)
    assert np.all(bands.upper95 == 20.0)


def test_bootstrap_fallback_without_residuals():
    lower, upper = bootstrap_intervals(np.array([50.0, 50.0]), np.array([]), BOUNDS)
    assert lower == pytest.approx([50 - 6.4, 50 - 6.4])
    assert upper == pytest.approx([50 + 6.4, 50 + 6.4])

    lower, upper = bootstrap_intervals(np.array([50.0]), np.array([3.0]), BOUNDS)
    assert lower[0] == pytest.approx(50 - 3.84)
    assert upper[0] == pytest.approx(50 + 3.84)


def test_bootstrap_is_reproducible_with_seed():
    residuals = np.random.default_rng(3).normal(0, 4, 30)
    forecast = np.linspace(40, 45, 6)
    first = bootstrap_intervals(forecast, residuals, BOUNDS, rng=np.random.default_rng(9))
    second = bootstrap_intervals(forecast, residuals, BOUNDS, rng=np.random.default_rng(9))
    assert np.array_equal(first[0], second[0])
    assert np.array_equal(first[1], second[1])


def test_bootstrap_contains_forecast_and_stays_in_bounds(rng):
    residuals = rng.normal(0, 8, 40)
    forecast = np.full(5, 95.0)
    lower, upper = bootstrap_intervals(forecast, residuals, BOUNDS, rng=rng)
    assert np.all(lower <= forecast)
    assert np.all(forecast <= upper)
    assert np.all(upper <= 100.0)
    assert np.all(lower >= 0.0)


def test_bootstrap_zero_residuals_collapse(rng):
    lower, upper = bootstrap_intervals(np.full(3, 10.0), np.zeros(10), BOUNDS, rng=rng)
    assert np.all(lower == 10.0)
    assert np.all(upper == 10.0)


def test_bootstrap_rejects_zero_simulations(rng):
    with pytest.raises(InvalidParameter):
        bootstrap_intervals(np.full(3, 10.0), np.ones(10), BOUNDS, rng=rng, num_simulations=0)
