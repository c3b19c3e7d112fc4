"""
Confidence scoring that turns backtest accuracy, interval calibration, sample size and data quality flags into a single 0-100 score, plus the lighter score used for gap forecast insights.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import math

from trendcast.schemas import BacktestResult, QualityFlags
from config import settings


def _floor_score(value: float) -> float:
    if math.isnan(value):
        return 0.0
    return max(0.0, 100.0 - value)


def confidence_score(metrics: BacktestResult, flags: QualityFlags) -> int:
    if metrics.sample_size == 0:
        return 0

    error_score = (_floor_score(2 * metrics.mae) + _floor_score(metrics.mape)) / 2
    # distance from nominal coverage
    coverage_score = (
        _floor_score(2 * abs(metrics.interval_coverage80 - 80))
        + _floor_score(2 * abs(metrics.interval_coverage95 - 95))
    ) / 2
    sample_score = min(100.0, 100.0 * metrics.sample_size / settings.confidence_full_sample_size)

    confidence = (
        settings.confidence_error_weight * error_score
        + settings.confidence_coverage_weight * coverage_score
        + settings.confidence_sample_weight * sample_score
    )
    if flags.series_too_short:
        confidence *= settings.confidence_short_penalty
    if flags.too_spiky:
        confidence *= settings.confidence_spiky_penalty
    if flags.event_shock_likely:
        confidence *= settings.confidence_shock_penalty

    return int(round(max(0.0, min(100.0, confidence))))


def insights_confidence(backtest_error: float, residual_std: float) -> float:
    error_score = _floor_score(2 * backtest_error)
    std_score = _floor_score(2 * residual_std)
    return min(
        100.0,
        settings.insights_error_weight * error_score + settings.insights_std_weight * std_score,
    )
