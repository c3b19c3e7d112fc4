"""
Theta method: an ordinary least-squares trend line over t = 1..n plus a simple exponential smoothing forecast of what the line leaves behind.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import numpy as np
from scipy.stats import linregress

from trendcast.enums import ModelKind
from trendcast.models.base import ForecastModel, ModelFit, flat_fit
from trendcast.stats import Bounds, clamp
from config import settings


class ThetaModel(ForecastModel):
    kind = ModelKind.theta

    def __init__(self, ses_alpha: float, min_points: int = 3) -> None:
        self.ses_alpha = ses_alpha
        self.min_points = max(3, min_points)

    def fit_and_forecast(self, series: np.ndarray, horizon: int, bounds: Bounds) -> ModelFit:
        n = len(series)
        if n < self.min_points:
            return flat_fit(series, horizon, bounds)

        t = np.arange(1, n + 1, dtype=float)
        slope, intercept, *_ = linregress(t, series)
        theta_line = intercept + slope * t
        local = series - theta_line

        alpha = self.ses_alpha
        level = float(local[0])
        errors = np.zeros(n - 1)
        for i in range(1, n):
            errors[i - 1] = series[i] - (theta_line[i] + level)
            level = alpha * local[i] + (1 - alpha) * level

        future_t = np.arange(n + 1, n + horizon + 1, dtype=float)
        forecast = intercept + slope * future_t + level
        return ModelFit(forecast=clamp(forecast, bounds), residuals=errors)


def theta_model() -> ThetaModel:
    return ThetaModel(ses_alpha=settings.theta_ses_alpha, min_points=settings.trend_min_points)
