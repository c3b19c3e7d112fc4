"""
Trend forecasting engine for bounded interest indices and head-to-head comparisons

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from trendcast.enums import ConfidenceLabel, ModelKind, RiskLevel
from trendcast.backtest import rolling_origin_backtest, walk_forward_backtest
from trendcast.core import forecast
from trendcast.trend_index import forecast_trend_index
from trendcast.gap import forecast_gap, get_gap_forecast_insights
from trendcast.head_to_head import compute_head_to_head_forecast
from trendcast.pack import build_forecast_pack
from trendcast.evaluation import evaluate_forecast, evaluate_pack

__all__ = [
    "ConfidenceLabel",
    "ModelKind",
    "RiskLevel",
    "forecast",
    "walk_forward_backtest",
    "rolling_origin_backtest",
    "forecast_trend_index",
    "forecast_gap",
    "get_gap_forecast_insights",
    "compute_head_to_head_forecast",
    "build_forecast_pack",
    "evaluate_forecast",
    "evaluate_pack",
]
