"""
Head-to-head analytics over two independently forecast terms: Monte Carlo winner probability and expected margin (B - A), plus a categorical lead-change risk built from the current margin, simulated crossover frequency and the forecasts' confidence.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import Optional, Tuple

import numpy as np

from trendcast.enums import RiskLevel
from trendcast.schemas import ForecastResult, HeadToHeadForecast
from trendcast.stats import check_count, make_rng
from config import settings


def _arrays(result: ForecastResult, horizon: int) -> Tuple[np.ndarray, np.ndarray]:
    points = result.points[:horizon]
    values = np.array([p.value for p in points], dtype=float)
    widths = np.array([p.upper80 - p.lower80 for p in points], dtype=float)
    return values, widths


def _sample_margins(
    values_a: np.ndarray,
    widths_a: np.ndarray,
    values_b: np.ndarray,
    widths_b: np.ndarray,
    samples: int,
    rng: np.random.Generator,
) -> np.ndarray:
    shape = (samples, len(values_a))
    sample_a = values_a + (rng.random(shape) - 0.5) * widths_a
    sample_b = values_b + (rng.random(shape) - 0.5) * widths_b
    return sample_b - sample_a


def _crossover_probability(margins: np.ndarray, current_margin: float) -> float:
    previous = np.hstack([np.full((margins.shape[0], 1), current_margin), margins[:, :-1]])
    flips = ((previous > 0) & (margins < 0)) | ((previous < 0) & (margins > 0))
    return float(np.count_nonzero(np.any(flips, axis=1))) / margins.shape[0]


def _risk_level(margin_pct: float, crossover: float, avg_confidence: float) -> RiskLevel:
    if (
        margin_pct < settings.h2h_high_margin_pct
        or crossover > settings.h2h_high_crossover
        or avg_confidence < settings.h2h_high_confidence
    ):
        return RiskLevel.high
    if (
        margin_pct < settings.h2h_medium_margin_pct
        or crossover > settings.h2h_medium_crossover
        or avg_confidence < settings.h2h_medium_confidence
    ):
        return RiskLevel.medium
    return RiskLevel.low


def compute_head_to_head_forecast(
    forecast_a: ForecastResult,
    forecast_b: ForecastResult,
    current_value_a: float,
    current_value_b: float,
    rng: Optional[np.random.Generator] = None,
    samples: Optional[int] = None,
) -> HeadToHeadForecast:
    if samples is None:
        samples = settings.head_to_head_samples
    samples = check_count(samples, "samples")
    horizon = min(len(forecast_a.points), len(forecast_b.points))
    current_margin = float(current_value_b - current_value_a)

    if horizon == 0:
        return HeadToHeadForecast(
            winner_probability=50.0,
            expected_margin_points=0.0,
            lead_change_risk=RiskLevel.medium,
            current_margin=current_margin,
            forecast_horizon=0,
        )

    rng = make_rng(rng)
    values_a, widths_a = _arrays(forecast_a, horizon)
    values_b, widths_b = _arrays(forecast_b, horizon)

    margins = _sample_margins(values_a, widths_a, values_b, widths_b, samples, rng)
    avg_margins = margins.mean(axis=1)
    winner_probability = 100.0 * float(np.count_nonzero(avg_margins > 0)) / samples
    expected_margin = float(avg_margins.mean())

    # fresh trials for crossover
    crossover = _crossover_probability(
        _sample_margins(values_a, widths_a, values_b, widths_b, samples, rng),
        current_margin,
    )

    leader = max(current_value_a, current_value_b)
    margin_pct = abs(current_margin) / leader if leader > 0 else 0.0
    avg_confidence = (forecast_a.confidence_score + forecast_b.confidence_score) / 2

    return HeadToHeadForecast(
        winner_probability=winner_probability,
        expected_margin_points=expected_margin,
        lead_change_risk=_risk_level(margin_pct, crossover, avg_confidence),
        current_margin=current_margin,
        forecast_horizon=horizon,
    )
