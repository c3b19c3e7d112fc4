"""
Forecast pack assembly for a two-term comparison: per-term forecasts, head-to-head analytics and the gap forecast, stamped with a content hash the caller can key its cache on.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import datetime as dt
import hashlib
import json
import logging
from typing import Any, Optional, Sequence

import numpy as np

from trendcast.core import forecast, to_points
from trendcast.gap import forecast_gap
from trendcast.head_to_head import compute_head_to_head_forecast
from trendcast.schemas import ForecastPack, TimeSeriesPoint
from trendcast.stats import check_horizon, make_rng
from config import settings

log = logging.getLogger(__name__)


def hash_series(series_a: Sequence[TimeSeriesPoint], series_b: Sequence[TimeSeriesPoint]) -> str:
    rows = [
        {"date": p.date.isoformat(), "term": term, "value": p.value}
        for term, points in (("A", series_a), ("B", series_b))
        for p in points
    ]
    payload = json.dumps(rows, separators=(",", ":"))
    return hashlib.sha256(payload.encode()).hexdigest()[: settings.pack_hash_length]


def build_forecast_pack(
    series_a: Sequence[Any],
    series_b: Sequence[Any],
    horizon: Optional[int] = None,
    rng: Optional[np.random.Generator] = None,
) -> Optional[ForecastPack]:
    if horizon is None:
        horizon = settings.forecast_default_horizon
    horizon = check_horizon(horizon)

    points_a = to_points(series_a)
    points_b = to_points(series_b)
    if min(len(points_a), len(points_b)) < settings.forecast_min_length:
        log.info(
            "insufficient data for a forecast pack (a=%d, b=%d points)",
            len(points_a), len(points_b),
        )
        return None

    rng = make_rng(rng)
    data_hash = hash_series(points_a, points_b)
    term_a = forecast(points_a, horizon)
    term_b = forecast(points_b, horizon)
    head_to_head = compute_head_to_head_forecast(
        term_a, term_b, points_a[-1].value, points_b[-1].value, rng=rng,
    )
    gap = forecast_gap(
        [p.value for p in points_a], [p.value for p in points_b], horizon=horizon, rng=rng,
    )
    log.info("forecast pack %s: %s vs %s over %d steps", data_hash, term_a.model.value, term_b.model.value, horizon)

    return ForecastPack(
        term_a=term_a,
        term_b=term_b,
        head_to_head=head_to_head,
        gap=gap,
        computed_at=dt.datetime.now(dt.timezone.utc),
        data_hash=data_hash,
        horizon=horizon,
    )
