"""
Forecasting for bounded trend indices (0-100 interest scores, or -100..100 gap series). Damped Holt, Theta and naive models compete in a rolling-origin backtest; the winner's forecast gets residual-bootstrap intervals.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
import math
from typing import Iterable, List, Optional

import numpy as np

from trendcast.backtest import rolling_origin_backtest, select_model
from trendcast.intervals import bootstrap_intervals
from trendcast.models import ForecastModel, NaiveModel, holt_damped_model, theta_model
from trendcast.schemas import ForecastDiagnostics, ForecastOutput
from trendcast.stats import Bounds, as_values, check_bounds, check_horizon, clamp, rms
from config import settings

log = logging.getLogger(__name__)


def candidate_models() -> List[ForecastModel]:
    # evaluation order doubles as the tie-break order
    return [holt_damped_model(), theta_model(), NaiveModel()]


def _residual_std(residuals: np.ndarray) -> float:
    return rms(residuals) if len(residuals) else settings.trend_default_residual_std


def _naive_output(values: np.ndarray, horizon: int, bounds: Bounds) -> ForecastOutput:
    fit = NaiveModel().fit_and_forecast(values, horizon, bounds)
    band = settings.trend_naive_band
    return ForecastOutput(
        forecast=tuple(fit.forecast.tolist()),
        lower=tuple(clamp(fit.forecast - band, bounds).tolist()),
        upper=tuple(clamp(fit.forecast + band, bounds).tolist()),
        model_used=NaiveModel.kind,
        diagnostics=ForecastDiagnostics(
            backtest_error=math.inf,
            residual_std=_residual_std(fit.residuals),
        ),
    )


def forecast_trend_index(
    series: Iterable[float],
    clamp_bounds: Optional[Bounds] = None,
    horizon: Optional[int] = None,
    rng: Optional[np.random.Generator] = None,
) -> ForecastOutput:
    if horizon is None:
        horizon = settings.trend_default_horizon
    horizon = check_horizon(horizon)
    bounds = check_bounds(clamp_bounds if clamp_bounds is not None else settings.index_bounds)
    values = as_values(series)

    if len(values) < settings.trend_min_length:
        log.debug("trend index of %d points is below %d, using naive bands", len(values), settings.trend_min_length)
        return _naive_output(values, horizon, bounds)

    scores = [
        (model, rolling_origin_backtest(values, model, bounds=bounds))
        for model in candidate_models()
    ]
    model, backtest_error = select_model(scores)
    if math.isinf(backtest_error):
        return _naive_output(values, horizon, bounds)

    fit = model.fit_and_forecast(values, horizon, bounds)
    lower, upper = bootstrap_intervals(fit.forecast, fit.residuals, bounds, rng=rng)
    log.debug("trend index model %s selected (mae=%.3f)", model.kind.value, backtest_error)

    return ForecastOutput(
        forecast=tuple(fit.forecast.tolist()),
        lower=tuple(lower.tolist()),
        upper=tuple(upper.tolist()),
        model_used=model.kind,
        diagnostics=ForecastDiagnostics(
            backtest_error=backtest_error,
            residual_std=_residual_std(fit.residuals),
        ),
    )
