"""
Test cases for head-to-head analytics between two term forecasts, covering Monte Carlo winner probability, expected margin and the categorical lead-change risk.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import datetime as dt

import pytest

from trendcast.enums import ModelKind, RiskLevel
from trendcast.exceptions import InvalidParameter
from trendcast.head_to_head import compute_head_to_head_forecast
from trendcast.schemas import BacktestResult, ForecastPoint, ForecastResult, QualityFlags


def _result(values, half_width=1.0, confidence=0):
    start = dt.date(2024, 6, 1)
    points = tuple(
        ForecastPoint(
            date=start + dt.timedelta(days=i),
            value=v,
            lower80=v - half_width,
            upper80=v + half_width,
            lower95=v - 2 * half_width,
            upper95=v + 2 * half_width,
        )
        for i, v in enumerate(values)
    )
    return ForecastResult(
        points=points,
        model=ModelKind.ets,
        metrics=BacktestResult.empty(),
        confidence_score=confidence,
        quality_flags=QualityFlags(series_too_short=False, too_spiky=False, event_shock_likely=False),
    )


def test_clear_winner(rng):
    h2h = compute_head_to_head_forecast(_result([40.0] * 7), _result([50.0] * 7), 40.0, 50.0, rng=rng)
    assert h2h.winner_probability > 90
    assert h2h.expected_margin_points == pytest.approx(10.0, abs=0.5)
    assert h2h.current_margin == 10.0
    assert h2h.forecast_horizon == 7


def test_clear_loser(rng):
    h2h = compute_head_to_head_forecast(_result([60.0] * 7), _result([20.0] * 7), 60.0, 20.0, rng=rng)
    assert h2h.winner_probability < 10
    assert h2h.expected_margin_points == pytest.approx(-40.0, abs=0.5)


def test_empty_horizon():
    h2h = compute_head_to_head_forecast(_result([]), _result([10.0]), 3.0, 5.0)
    assert h2h.winner_probability == 50.0
    assert h2h.expected_margin_points == 0.0
    assert h2h.lead_change_risk == RiskLevel.medium
    assert h2h.forecast_horizon == 0
    assert h2h.current_margin == 2.0


def test_horizon_is_shorter_forecast(rng):
    h2h = compute_head_to_head_forecast(_result([40.0] * 3), _result([50.0] * 9), 40.0, 50.0, rng=rng)
    assert h2h.forecast_horizon == 3


def test_close_race_is_high_risk(rng):
    h2h = compute_head_to_head_forecast(
        _result([50.0] * 7, confidence=90), _result([52.0] * 7, confidence=90), 50.0, 52.0, rng=rng,
    )
    assert h2h.lead_change_risk == RiskLevel.high


def test_crossovers_are_high_risk(rng):
    h2h = compute_head_to_head_forecast(
        _result([40.0] * 7, half_width=30.0, confidence=90),
        _result([60.0] * 7, half_width=30.0, confidence=90),
        40.0, 60.0, rng=rng,
    )
    assert h2h.lead_change_risk == RiskLevel.high


def test_comfortable_lead_is_low_risk(rng):
    h2h = compute_head_to_head_forecast(
        _result([30.0] * 7, confidence=80), _result([60.0] * 7, confidence=80), 30.0, 60.0, rng=rng,
    )
    assert h2h.lead_change_risk == RiskLevel.low


def test_middling_confidence_is_medium_risk(rng):
    h2h = compute_head_to_head_forecast(
        _result([30.0] * 7, confidence=60), _result([60.0] * 7, confidence=60), 30.0, 60.0, rng=rng,
    )
    assert h2h.lead_change_risk == RiskLevel.medium


def test_sample_count_must_be_positive():
    with pytest.raises(InvalidParameter):
        compute_head_to_head_forecast(_result([40.0]), _result([50.0]), 40.0, 50.0, samples=0)
