"""
Backtesting harnesses for model evaluation and selection: walk-forward evaluation with full diagnostics (error, percentage error, interval coverage) for the dual-series path, and rolling-origin MAE over the tail of the series for the trend-index path.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
import math
from typing import Iterable, List, Optional, Sequence, Tuple, Union

import numpy as np
from sklearn.metrics import mean_absolute_error

from trendcast.enums import ModelKind
from trendcast.exceptions import InvalidModel
from trendcast.intervals import analytic_intervals
from trendcast.models import ForecastModel, arima_model, ets_model
from trendcast.schemas import BacktestResult, TimeSeriesPoint
from trendcast.stats import Bounds, as_values, check_bounds
from config import settings

log = logging.getLogger(__name__)


def _values(series: Iterable[Union[TimeSeriesPoint, float]]) -> np.ndarray:
    items = list(series)
    if items and isinstance(items[0], TimeSeriesPoint):
        return as_values(p.value for p in items)
    return as_values(items)


def _dual_path_model(model: Union[str, ModelKind, ForecastModel]) -> ForecastModel:
    if isinstance(model, ForecastModel):
        return model
    try:
        kind = ModelKind(model)
    except ValueError as exc:
        raise InvalidModel(f"unknown model {model!r}") from exc
    if kind == ModelKind.ets:
        return ets_model()
    if kind == ModelKind.arima:
        return arima_model()
    raise InvalidModel(f"walk-forward backtest supports ets or arima, got {kind.value!r}")


def walk_forward_backtest(
    series: Sequence[Union[TimeSeriesPoint, float]],
    model: Union[str, ModelKind, ForecastModel] = ModelKind.ets,
    min_train_size: Optional[int] = None,
    validation_size: Optional[int] = None,
    step_size: Optional[int] = None,
    bounds: Optional[Bounds] = None,
) -> BacktestResult:
    if min_train_size is None:
        min_train_size = settings.backtest_min_train_size
    if validation_size is None:
        validation_size = settings.backtest_validation_size
    if step_size is None:
        step_size = settings.backtest_step_size
    bounds = check_bounds(bounds if bounds is not None else settings.index_bounds)

    values = _values(series)
    forecaster = _dual_path_model(model)
    n = len(values)
    if n < min_train_size + validation_size:
        return BacktestResult.empty()

    abs_errors: List[float] = []
    pct_errors: List[float] = []
    hits80: List[bool] = []
    hits95: List[bool] = []

    for train_end in range(min_train_size, n - validation_size, max(1, step_size)):
        train = values[:train_end]
        actual = values[train_end:train_end + validation_size]
        fit = forecaster.fit_and_forecast(train, validation_size, bounds)
        bands = analytic_intervals(fit.forecast, fit.residuals, bounds)

        err = np.abs(actual - fit.forecast)
        abs_errors.extend(err.tolist())
        safe = np.where(actual > 0, actual, 1.0)
        pct_errors.extend(np.where(actual > 0, err / safe * 100.0, 0.0).tolist())
        hits80.extend(((actual >= bands.lower80) & (actual <= bands.upper80)).tolist())
        hits95.extend(((actual >= bands.lower95) & (actual <= bands.upper95)).tolist())

    if not abs_errors:
        return BacktestResult.empty()

    result = BacktestResult(
        mae=float(np.mean(abs_errors)),
        mape=float(np.mean(pct_errors)),
        interval_coverage80=100.0 * sum(hits80) / len(hits80),
        interval_coverage95=100.0 * sum(hits95) / len(hits95),
        sample_size=len(abs_errors),
    )
    log.debug("walk-forward %s: mae=%.3f mape=%.2f n=%d", forecaster.kind.value, result.mae, result.mape, result.sample_size)
    return result


def rolling_origin_backtest(
    series: Sequence[float],
    model: ForecastModel,
    test_window_size: Optional[int] = None,
    horizon: Optional[int] = None,
    min_train_size: Optional[int] = None,
    bounds: Optional[Bounds] = None,
) -> float:
    """Mean absolute error of ``model`` over origins sliding one step at a
    time across the last ``test_window_size`` points. ``inf`` when there is
    not enough history for a single origin."""
    if test_window_size is None:
        test_window_size = settings.rolling_test_window
    if horizon is None:
        horizon = settings.rolling_horizon
    if min_train_size is None:
        min_train_size = settings.rolling_min_train_size
    bounds = check_bounds(bounds if bounds is not None else settings.index_bounds)

    values = as_values(series)
    n = len(values)
    if n < min_train_size + horizon:
        return math.inf

    actuals: List[np.ndarray] = []
    predicted: List[np.ndarray] = []
    for origin in range(max(min_train_size, n - test_window_size), n - horizon + 1):
        fit = model.fit_and_forecast(values[:origin], horizon, bounds)
        actuals.append(values[origin:origin + horizon])
        predicted.append(fit.forecast)

    if not actuals:
        return math.inf
    return float(mean_absolute_error(np.concatenate(actuals), np.concatenate(predicted)))


def select_model(scores: Sequence[Tuple[ForecastModel, float]]) -> Tuple[ForecastModel, float]:
    """Lowest error wins; ties keep evaluation order."""
    best = min(scores, key=lambda pair: pair[1])
    for model, score in scores:
        log.debug("candidate %s scored %.4f", model.kind.value, score)
    return best
