"""
Scoring of issued forecasts against the actuals that arrived afterwards: absolute and percentage error, interval hit rates, direction accuracy and, for packs, whether the predicted winner held.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import Any, List, Optional, Sequence

import numpy as np

from trendcast.core import to_points
from trendcast.schemas import ForecastEvaluation, ForecastPack, ForecastResult, PackEvaluation


def _pct(hits: List[bool]) -> Optional[float]:
    return 100.0 * sum(hits) / len(hits) if hits else None


def evaluate_forecast(result: ForecastResult, actuals: Sequence[Any]) -> ForecastEvaluation:
    observed = {p.date: p.value for p in to_points(actuals)}

    errors: List[float] = []
    pct_errors: List[float] = []
    hits80: List[bool] = []
    hits95: List[bool] = []
    direction: List[bool] = []

    for i, point in enumerate(result.points):
        actual = observed.get(point.date)
        if actual is None:
            continue
        error = abs(actual - point.value)
        errors.append(error)
        pct_errors.append(error / actual * 100.0 if actual > 0 else 0.0)
        hits80.append(point.lower80 <= actual <= point.upper80)
        hits95.append(point.lower95 <= actual <= point.upper95)

        if i == 0:
            continue
        prev = result.points[i - 1]
        prev_actual = observed.get(prev.date)
        if prev_actual is not None:
            direction.append((point.value > prev.value) == (actual > prev_actual))

    return ForecastEvaluation(
        mae=float(np.mean(errors)) if errors else None,
        mape=float(np.mean(pct_errors)) if pct_errors else None,
        interval_hit_rate80=_pct(hits80),
        interval_hit_rate95=_pct(hits95),
        direction_accuracy=_pct(direction),
        evaluated_points=len(errors),
    )


def _combine(a: Optional[float], b: Optional[float]) -> Optional[float]:
    """Average of both terms, or whichever one has a value."""
    values = [v for v in (a, b) if v is not None]
    return float(np.mean(values)) if values else None


def evaluate_pack(
    pack: ForecastPack,
    actuals_a: Sequence[Any],
    actuals_b: Sequence[Any],
) -> PackEvaluation:
    points_a = to_points(actuals_a)
    points_b = to_points(actuals_b)
    eval_a = evaluate_forecast(pack.term_a, points_a)
    eval_b = evaluate_forecast(pack.term_b, points_b)

    winner_correct: Optional[bool] = None
    if points_a and points_b:
        predicted_b = pack.head_to_head.winner_probability > 50
        actual_b = points_b[-1].value > points_a[-1].value
        winner_correct = predicted_b == actual_b

    return PackEvaluation(
        term_a=eval_a,
        term_b=eval_b,
        mae=_combine(eval_a.mae, eval_b.mae),
        mape=_combine(eval_a.mape, eval_b.mape),
        interval_hit_rate80=_combine(eval_a.interval_hit_rate80, eval_b.interval_hit_rate80),
        interval_hit_rate95=_combine(eval_a.interval_hit_rate95, eval_b.interval_hit_rate95),
        winner_correct=winner_correct,
    )
