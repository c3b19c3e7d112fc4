"""
Per-term forecasting on the dual-series path: assesses data quality, backtests damped ETS and ARIMA with walk-forward evaluation, forecasts with the lower-error model, attaches analytic prediction intervals and scores confidence.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import datetime as dt
import logging
from typing import Any, List, Optional, Sequence

import numpy as np
from pydantic import ValidationError

from trendcast import quality
from trendcast.backtest import select_model, walk_forward_backtest
from trendcast.confidence import confidence_score
from trendcast.enums import ModelKind
from trendcast.exceptions import InvalidSeries
from trendcast.intervals import analytic_intervals
from trendcast.models import NaiveModel, arima_model, ets_model
from trendcast.schemas import BacktestResult, ForecastPoint, ForecastResult, QualityFlags, TimeSeriesPoint
from trendcast.stats import Bounds, as_values, check_bounds, check_horizon, clamp
from config import settings

log = logging.getLogger(__name__)


def to_points(series: Sequence[Any]) -> List[TimeSeriesPoint]:
    points: List[TimeSeriesPoint] = []
    for item in series:
        if isinstance(item, TimeSeriesPoint):
            points.append(item)
            continue
        try:
            points.append(TimeSeriesPoint.model_validate(item))
        except ValidationError as exc:
            raise InvalidSeries(f"invalid time series point {item!r}: {exc}") from exc

    for prev, cur in zip(points, points[1:]):
        if cur.date < prev.date:
            raise InvalidSeries(f"series must be sorted by date: {cur.date} follows {prev.date}")
    return points


def forecast_dates(points: Sequence[TimeSeriesPoint], horizon: int) -> List[dt.date]:
    start = points[-1].date if points else dt.date.today()
    step = max(1, settings.forecast_step_days)
    return [start + dt.timedelta(days=step * (i + 1)) for i in range(horizon)]


def _short_series_forecast(
    values: np.ndarray, dates: List[dt.date], bounds: Bounds
) -> List[ForecastPoint]:
    value = clamp(float(values[-1]) if len(values) else bounds[0], bounds)
    band80 = settings.naive_band80_ratio * abs(value)
    band95 = settings.naive_band95_ratio * abs(value)
    return [
        ForecastPoint(
            date=d,
            value=value,
            lower80=clamp(value - band80, bounds),
            upper80=clamp(value + band80, bounds),
            lower95=clamp(value - band95, bounds),
            upper95=clamp(value + band95, bounds),
        )
        for d in dates
    ]


def forecast(
    series: Sequence[Any],
    horizon: Optional[int] = None,
    bounds: Optional[Bounds] = None,
) -> ForecastResult:
    if horizon is None:
        horizon = settings.forecast_default_horizon
    horizon = check_horizon(horizon)
    bounds = check_bounds(bounds if bounds is not None else settings.index_bounds)

    points = to_points(series)
    values = as_values(p.value for p in points)
    dates = forecast_dates(points, horizon)

    if len(values) < settings.forecast_min_length:
        log.debug("series of %d points is too short, using naive forecast", len(values))
        return ForecastResult(
            points=tuple(_short_series_forecast(values, dates, bounds)),
            model=ModelKind.naive,
            metrics=BacktestResult.empty(),
            confidence_score=0,
            quality_flags=QualityFlags(series_too_short=True, too_spiky=False, event_shock_likely=False),
        )

    flags = quality.assess(values)
    backtests = {}
    scores = []
    for candidate in (ets_model(), arima_model()):
        result = walk_forward_backtest(values, candidate, bounds=bounds)
        backtests[candidate.kind] = result
        scores.append((candidate, result.mae))
    model, best_mae = select_model(scores)

    if np.isinf(best_mae):
        model, metrics, score = NaiveModel(), BacktestResult.empty(), 0
    else:
        metrics = backtests[model.kind]
        score = confidence_score(metrics, flags)

    fit = model.fit_and_forecast(values, horizon, bounds)
    bands = analytic_intervals(fit.forecast, fit.residuals, bounds)
    forecast_points = tuple(
        ForecastPoint(
            date=dates[i],
            value=float(fit.forecast[i]),
            lower80=float(bands.lower80[i]),
            upper80=float(bands.upper80[i]),
            lower95=float(bands.lower95[i]),
            upper95=float(bands.upper95[i]),
        )
        for i in range(horizon)
    )

    if float(np.max(fit.forecast)) == 0.0 and float(values[-1]) > 0.0:
        log.warning("forecast with %s is all zero although the last observation is %.2f", model.kind.value, values[-1])
    log.info(
        "forecast %d points with %s (mae=%.3f, confidence=%d, first=%.2f, last observed=%.2f)",
        horizon, model.kind.value, metrics.mae, score, fit.forecast[0], values[-1],
    )

    return ForecastResult(
        points=forecast_points,
        model=model.kind,
        metrics=metrics,
        confidence_score=score,
        quality_flags=flags,
    )
