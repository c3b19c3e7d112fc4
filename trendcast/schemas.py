"""
Value objects returned by the forecasting engine: dated input points, forecast points with prediction intervals, backtest metrics, gap forecasts, head-to-head analytics and forecast packs.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import math
import datetime as dt
from typing import Any, Optional, Tuple

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, model_serializer, model_validator

from trendcast.enums import ConfidenceLabel, ModelKind, RiskLevel


def _coerce(obj: Any) -> Any:
    if isinstance(obj, dict):
        return {k: _coerce(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_coerce(v) for v in obj]
    if isinstance(obj, np.integer):
        return int(obj)
    if isinstance(obj, np.floating):
        return float(obj)
    if isinstance(obj, np.ndarray):
        return obj.tolist()
    return obj


class NpModel(BaseModel):

    model_config = ConfigDict(frozen=True, protected_namespaces=())

    @model_serializer(mode="wrap")
    def _serialize(self, handler: Any) -> Any:
        return _coerce(handler(self))


class TimeSeriesPoint(NpModel):

    date: dt.date
    value: float


class ForecastPoint(NpModel):

    date: dt.date
    value: float
    lower80: float
    upper80: float
    lower95: float
    upper95: float

    @model_validator(mode="after")
    def _ordered(self) -> ForecastPoint:
        if not (self.lower95 <= self.lower80 <= self.value <= self.upper80 <= self.upper95):
            raise ValueError(
                f"interval bounds out of order at {self.date}: "
                f"{self.lower95} <= {self.lower80} <= {self.value} <= {self.upper80} <= {self.upper95}"
            )
        return self


class BacktestResult(NpModel):

    mae: float
    mape: float
    interval_coverage80: float
    interval_coverage95: float
    sample_size: int = Field(ge=0)

    @classmethod
    def empty(cls) -> BacktestResult:
        """Terminal state for series too short to backtest."""
        return cls(
            mae=math.inf,
            mape=math.inf,
            interval_coverage80=0.0,
            interval_coverage95=0.0,
            sample_size=0,
        )


class QualityFlags(NpModel):

    series_too_short: bool
    too_spiky: bool
    event_shock_likely: bool


class ForecastResult(NpModel):

    points: Tuple[ForecastPoint, ...]
    model: ModelKind
    metrics: BacktestResult
    confidence_score: int = Field(ge=0, le=100)
    quality_flags: QualityFlags


class ForecastDiagnostics(NpModel):

    backtest_error: float
    residual_std: float


class ForecastOutput(NpModel):

    forecast: Tuple[float, ...]
    lower: Tuple[float, ...]
    upper: Tuple[float, ...]
    model_used: ModelKind
    diagnostics: ForecastDiagnostics


class Reliability(NpModel):

    should_show: bool
    reason: Optional[str] = None


class GapForecastResult(NpModel):

    gap_forecast: ForecastOutput
    expected_gap: float
    lead_change_risk: float = Field(ge=0.0, le=100.0)
    expected_margin_change: float
    current_gap: float
    reliability: Reliability


class GapForecastInsights(NpModel):

    expected_margin_in_horizon: float
    lead_change_risk: float
    confidence_label: ConfidenceLabel
    confidence_score: float


class HeadToHeadForecast(NpModel):

    winner_probability: float = Field(ge=0.0, le=100.0)
    expected_margin_points: float
    lead_change_risk: RiskLevel
    current_margin: float
    forecast_horizon: int


class ForecastPack(NpModel):

    term_a: ForecastResult
    term_b: ForecastResult
    head_to_head: HeadToHeadForecast
    gap: GapForecastResult
    computed_at: dt.datetime
    data_hash: str
    horizon: int


class ForecastEvaluation(NpModel):

    mae: Optional[float] = None
    mape: Optional[float] = None
    interval_hit_rate80: Optional[float] = None
    interval_hit_rate95: Optional[float] = None
    direction_accuracy: Optional[float] = None
    evaluated_points: int = 0


class PackEvaluation(NpModel):

    term_a: ForecastEvaluation
    term_b: ForecastEvaluation
    mae: Optional[float] = None
    mape: Optional[float] = None
    interval_hit_rate80: Optional[float] = None
    interval_hit_rate95: Optional[float] = None
    winner_correct: Optional[bool] = None
