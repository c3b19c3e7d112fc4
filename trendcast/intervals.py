"""
Prediction interval estimation. The dual-series path widens analytic normal bands with the square root of the horizon; the trend-index path resamples centered residuals to simulate forecast paths and reads empirical quantiles off them.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from trendcast.stats import Bounds, check_count, clamp, make_rng, mean, rms
from config import settings


@dataclass(frozen=True)
class AnalyticBands:
    lower80: np.ndarray
    upper80: np.ndarray
    lower95: np.ndarray
    upper95: np.ndarray


def analytic_intervals(forecast: np.ndarray, residuals: np.ndarray, bounds: Bounds) -> AnalyticBands:
    residual_std = rms(residuals)
    spread = residual_std * np.sqrt(np.arange(1, len(forecast) + 1))
    return AnalyticBands(
        lower80=clamp(forecast - settings.z80 * spread, bounds),
        upper80=clamp(forecast + settings.z80 * spread, bounds),
        lower95=clamp(forecast - settings.z95 * spread, bounds),
        upper95=clamp(forecast + settings.z95 * spread, bounds),
    )


def bootstrap_intervals(
    forecast: np.ndarray,
    residuals: np.ndarray,
    bounds: Bounds,
    rng: Optional[np.random.Generator] = None,
    num_simulations: Optional[int] = None,
) -> Tuple[np.ndarray, np.ndarray]:
    """Residual bootstrap around a point forecast.

    Each simulated path adds an independently resampled centered residual to
    the point forecast at every step. Returns the lower/upper percentile bands
    (10th/90th by default), widened where needed so they always contain the
    point forecast.
    """
    if num_simulations is None:
        num_simulations = settings.bootstrap_simulations
    num_simulations = check_count(num_simulations, "num_simulations")
    forecast = np.asarray(forecast, dtype=float)

    if len(residuals) < 2:
        residual_std = rms(residuals) if len(residuals) else settings.trend_default_residual_std
        half_width = settings.z80 * residual_std
        return clamp(forecast - half_width, bounds), clamp(forecast + half_width, bounds)

    centered = np.asarray(residuals, dtype=float) - mean(residuals)
    rng = make_rng(rng)
    picks = rng.integers(0, len(centered), size=(num_simulations, len(forecast)))
    paths = clamp(forecast + centered[picks], bounds)

    lower, upper = np.percentile(
        paths, [settings.bootstrap_lower_pct, settings.bootstrap_upper_pct], axis=0
    )
    return np.minimum(lower, forecast), np.maximum(upper, forecast)
