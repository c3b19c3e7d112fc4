"""
Damped Holt linear trend model (ETS with a damped additive trend). The trend contribution is a damped geometric sum, so long-horizon forecasts flatten out instead of running past the index bounds on short noisy series.

    l[t] = alpha * y[t] + (1 - alpha) * (l[t-1] + phi * b[t-1])
    b[t] = beta * (l[t] - l[t-1]) + (1 - beta) * phi * b[t-1]
    y[t+h] = l[t] + (phi + phi^2 + ... + phi^h) * b[t]

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

import numpy as np

from trendcast.enums import ModelKind
from trendcast.models.base import ForecastModel, ModelFit, flat_fit
from trendcast.stats import Bounds, clamp
from config import settings


def _smooth(
    series: np.ndarray, alpha: float, beta: float, phi: float
) -> Tuple[float, float, np.ndarray]:
    level = float(series[0])
    trend = float(series[1] - series[0])
    errors = np.zeros(len(series) - 1)
    for i in range(1, len(series)):
        prev_level, prev_trend = level, trend
        fitted = prev_level + phi * prev_trend
        errors[i - 1] = series[i] - fitted
        level = alpha * series[i] + (1 - alpha) * fitted
        trend = beta * (level - prev_level) + (1 - beta) * phi * prev_trend
    return level, trend, errors


def damped_trend_sum(phi: float, horizon: int) -> np.ndarray:
    steps = np.arange(1, horizon + 1)
    if phi == 1.0:
        return steps.astype(float)
    return phi * (1 - phi ** steps) / (1 - phi)


class HoltDampedModel(ForecastModel):

    def __init__(
        self,
        kind: ModelKind,
        alpha: float,
        beta: float,
        phi: float,
        min_points: int,
        alpha_grid: Optional[Sequence[float]] = None,
        beta_grid: Optional[Sequence[float]] = None,
    ) -> None:
        self.kind = kind
        self.alpha = alpha
        self.beta = beta
        self.phi = phi
        self.min_points = max(2, min_points)
        self.alpha_grid = alpha_grid
        self.beta_grid = beta_grid

    def _params(self, series: np.ndarray) -> Tuple[float, float]:
        if not self.alpha_grid or not self.beta_grid:
            return self.alpha, self.beta
        best = (self.alpha, self.beta)
        best_mse = np.inf
        for a in self.alpha_grid:
            for b in self.beta_grid:
                _, _, errors = _smooth(series, a, b, self.phi)
                mse = float(np.mean(np.square(errors)))
                if mse < best_mse:
                    best_mse, best = mse, (a, b)
        return best

    def fit_and_forecast(self, series: np.ndarray, horizon: int, bounds: Bounds) -> ModelFit:
        if len(series) < self.min_points:
            return flat_fit(series, horizon, bounds)
        alpha, beta = self._params(series)
        level, trend, errors = _smooth(series, alpha, beta, self.phi)
        forecast = level + damped_trend_sum(self.phi, horizon) * trend
        return ModelFit(forecast=clamp(forecast, bounds), residuals=errors)


def ets_model() -> HoltDampedModel:
    """Damped ETS for the dual-series path."""
    grid = settings.ets_optimize
    return HoltDampedModel(
        ModelKind.ets,
        alpha=settings.ets_alpha,
        beta=settings.ets_beta,
        phi=settings.ets_phi,
        min_points=settings.ets_min_points,
        alpha_grid=settings.ets_alpha_grid if grid else None,
        beta_grid=settings.ets_beta_grid if grid else None,
    )


def holt_damped_model() -> HoltDampedModel:
    """Damped Holt tuned for bounded trend-index and gap series."""
    return HoltDampedModel(
        ModelKind.holt_damped,
        alpha=settings.trend_alpha,
        beta=settings.trend_beta,
        phi=settings.trend_phi,
        min_points=settings.trend_min_points,
    )
