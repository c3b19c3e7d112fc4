"""
ARIMA(p, 1, 0) model: the series is differenced once, an AR(1) or AR(2) model with drift is fitted to the differences by solving the Yule-Walker equations, the differences are forecast recursively and then re-integrated from the last observation.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import numpy as np
from scipy.linalg import solve_toeplitz

from trendcast.enums import ModelKind
from trendcast.models.base import ForecastModel, ModelFit, flat_fit
from trendcast.stats import Bounds, clamp
from config import settings


def _autocorrelations(centered: np.ndarray, max_lag: int) -> np.ndarray:
    m = len(centered)
    c0 = float(np.dot(centered, centered)) / m
    if c0 == 0:
        return np.zeros(max_lag)
    return np.array([
        float(np.dot(centered[k:], centered[:-k])) / m / c0
        for k in range(1, max_lag + 1)
    ])


def yule_walker(centered: np.ndarray, order: int, limit: float) -> np.ndarray:
    r = _autocorrelations(centered, order)
    if order == 1 or not np.any(r):
        coefs = r[:order]
    else:
        try:
            coefs = solve_toeplitz(np.concatenate(([1.0], r[:-1])), r)
        except np.linalg.LinAlgError:
            coefs = np.array([r[0], 0.0])
    # keep the process stationary
    return np.clip(coefs, -limit, limit)


class ArimaModel(ForecastModel):
    kind = ModelKind.arima

    def __init__(self, ar2_min_diffs: int, coef_limit: float, min_points: int = 4) -> None:
        self.ar2_min_diffs = ar2_min_diffs
        self.coef_limit = coef_limit
        self.min_points = max(3, min_points)

    def fit_and_forecast(self, series: np.ndarray, horizon: int, bounds: Bounds) -> ModelFit:
        if len(series) < self.min_points:
            return flat_fit(series, horizon, bounds)

        diffs = np.diff(series)
        drift = float(np.mean(diffs))
        centered = diffs - drift
        order = 2 if len(diffs) >= self.ar2_min_diffs else 1
        phi = yule_walker(centered, order, self.coef_limit)

        errors = np.array([
            centered[i] - float(np.dot(phi, centered[i - order:i][::-1]))
            for i in range(order, len(centered))
        ])

        history = list(centered[-order:])
        steps = np.zeros(horizon)
        for h in range(horizon):
            nxt = float(np.dot(phi, history[::-1][:order]))
            history.append(nxt)
            steps[h] = drift + nxt

        forecast = series[-1] + np.cumsum(steps)
        return ModelFit(forecast=clamp(forecast, bounds), residuals=errors)


def arima_model() -> ArimaModel:
    return ArimaModel(
        ar2_min_diffs=settings.arima_ar2_min_diffs,
        coef_limit=settings.arima_coef_limit,
        min_points=settings.arima_min_points,
    )
