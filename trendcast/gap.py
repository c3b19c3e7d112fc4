"""
Gap-based comparison forecasting. The difference series A - B is forecast directly with the trend-index forecaster, because two independently forecast indices both drift toward central tendency and manufacture convergence that is not in the data. Lead-change risk comes from Monte Carlo paths sampled inside the gap forecast interval, and a reliability gate decides whether the forecast is fit to show.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
import math
from typing import Iterable, Optional

import numpy as np

from trendcast.confidence import insights_confidence
from trendcast.enums import ConfidenceLabel, ModelKind
from trendcast.schemas import (
    ForecastDiagnostics,
    ForecastOutput,
    GapForecastInsights,
    GapForecastResult,
    Reliability,
)
from trendcast.stats import (
    Bounds,
    as_values,
    check_bounds,
    check_count,
    check_horizon,
    clamp,
    coefficient_of_variation,
    make_rng,
)
from trendcast.trend_index import forecast_trend_index
from config import settings

log = logging.getLogger(__name__)

# risk reported when there is no current leader
UNDECIDED_RISK = 50.0


def lead_change_risk(
    output: ForecastOutput,
    current_gap: float,
    bounds: Bounds,
    rng: Optional[np.random.Generator] = None,
    simulations: Optional[int] = None,
) -> float:
    """Percentage of simulated paths whose sign ever differs from the sign of
    ``current_gap``. Each step is drawn uniformly from an interval as wide as
    ``upper - lower`` centered on the point forecast."""
    if simulations is None:
        simulations = settings.lead_change_simulations
    simulations = check_count(simulations, "simulations")
    if current_gap == 0 or not output.forecast:
        return UNDECIDED_RISK

    forecast = np.asarray(output.forecast, dtype=float)
    width = np.asarray(output.upper, dtype=float) - np.asarray(output.lower, dtype=float)
    rng = make_rng(rng)
    paths = clamp(forecast + (rng.random((simulations, len(forecast))) - 0.5) * width, bounds)

    if current_gap > 0:
        crossed = np.any(paths < 0, axis=1)
    else:
        crossed = np.any(paths >= 0, axis=1)
    return 100.0 * float(np.count_nonzero(crossed)) / simulations


def _reliability(gap: np.ndarray, backtest_error: float) -> Reliability:
    window = gap[-settings.gap_volatility_window:]
    volatility = coefficient_of_variation(window, absolute_mean=True)

    if volatility > settings.gap_volatility_threshold:
        return Reliability(should_show=False, reason="High volatility detected")
    if backtest_error > settings.gap_error_threshold:
        return Reliability(should_show=False, reason="High forecast error (low reliability)")
    if math.isnan(backtest_error):
        return Reliability(should_show=False, reason="Forecast calculation error")
    return Reliability(should_show=True)


def _degraded(a: np.ndarray, b: np.ndarray, horizon: int) -> GapForecastResult:
    current_gap = float(a[-1] - b[-1]) if len(a) and len(b) else 0.0
    band = settings.gap_degraded_band
    low, high = settings.gap_bounds
    if len(a) != len(b):
        reason = "Series length mismatch"
    else:
        reason = f"Insufficient data (need at least {settings.gap_min_length} points)"
    log.warning("gap forecast degraded: %s (len a=%d, len b=%d)", reason, len(a), len(b))

    return GapForecastResult(
        gap_forecast=ForecastOutput(
            forecast=(current_gap,) * horizon,
            lower=(max(low, current_gap - band),) * horizon,
            upper=(min(high, current_gap + band),) * horizon,
            model_used=ModelKind.naive,
            diagnostics=ForecastDiagnostics(
                backtest_error=math.inf,
                residual_std=settings.gap_degraded_residual_std,
            ),
        ),
        expected_gap=current_gap,
        lead_change_risk=UNDECIDED_RISK,
        expected_margin_change=0.0,
        current_gap=current_gap,
        reliability=Reliability(should_show=False, reason=reason),
    )


def forecast_gap(
    series_a: Iterable[float],
    series_b: Iterable[float],
    horizon: Optional[int] = None,
    rng: Optional[np.random.Generator] = None,
) -> GapForecastResult:
    if horizon is None:
        horizon = settings.trend_default_horizon
    horizon = check_horizon(horizon)
    a = as_values(series_a, name="series_a")
    b = as_values(series_b, name="series_b")

    if len(a) != len(b) or len(a) < settings.gap_min_length:
        return _degraded(a, b, horizon)

    bounds = check_bounds(settings.gap_bounds)
    rng = make_rng(rng)
    gap = a - b
    output = forecast_trend_index(gap, clamp_bounds=bounds, horizon=horizon, rng=rng)

    current_gap = float(gap[-1])
    expected_gap = float(output.forecast[-1])
    reliability = _reliability(gap, output.diagnostics.backtest_error)
    if not reliability.should_show:
        log.info("gap forecast hidden: %s", reliability.reason)

    return GapForecastResult(
        gap_forecast=output,
        expected_gap=expected_gap,
        lead_change_risk=lead_change_risk(output, current_gap, bounds, rng=rng),
        expected_margin_change=expected_gap - current_gap,
        current_gap=current_gap,
        reliability=reliability,
    )


def get_gap_forecast_insights(result: GapForecastResult, horizon_days: int) -> GapForecastInsights:
    forecast = result.gap_forecast.forecast
    if forecast and horizon_days >= 1:
        expected = float(forecast[min(horizon_days, len(forecast)) - 1])
    else:
        expected = result.expected_gap

    diagnostics = result.gap_forecast.diagnostics
    score = insights_confidence(diagnostics.backtest_error, diagnostics.residual_std)
    return GapForecastInsights(
        expected_margin_in_horizon=expected,
        lead_change_risk=result.lead_change_risk,
        confidence_label=ConfidenceLabel.from_score(score),
        confidence_score=score,
    )
