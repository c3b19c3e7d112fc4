"""
Shared statistics primitives for the forecasting engine, including population moments, coefficient of variation with neutral handling of a zero mean, bound clamping, input validation and random generator resolution.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import Iterable, Optional, Sequence, Tuple

import numpy as np

from trendcast.exceptions import InvalidHorizon, InvalidParameter, InvalidSeries
from config import settings

Bounds = Tuple[float, float]


def as_values(series: Iterable[float], name: str = "series") -> np.ndarray:
    try:
        arr = np.asarray(list(series), dtype=float)
    except (TypeError, ValueError) as exc:
        raise InvalidSeries(f"{name} must contain only numbers: {exc}") from exc
    if arr.ndim != 1:
        raise InvalidSeries(f"{name} must be one-dimensional, got shape {arr.shape}")
    if not np.all(np.isfinite(arr)):
        raise InvalidSeries(f"{name} contains non-finite values")
    return arr


def check_horizon(horizon: int) -> int:
    if isinstance(horizon, bool) or not isinstance(horizon, (int, np.integer)) or horizon < 1:
        raise InvalidHorizon(f"horizon must be a positive integer, got {horizon!r}")
    return int(horizon)


def check_count(value: int, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)) or value < 1:
        raise InvalidParameter(f"{name} must be a positive integer, got {value!r}")
    return int(value)


def check_bounds(bounds: Sequence[float]) -> Bounds:
    if len(bounds) != 2:
        raise InvalidSeries(f"bounds must be a (low, high) pair, got {bounds!r}")
    low, high = float(bounds[0]), float(bounds[1])
    if not low < high:
        raise InvalidSeries(f"bounds must satisfy low < high, got {bounds!r}")
    return low, high


def mean(vals: np.ndarray) -> float:
    return float(np.mean(vals)) if len(vals) else 0.0


def std(vals: np.ndarray) -> float:
    return float(np.std(vals)) if len(vals) else 0.0


def rms(vals: np.ndarray) -> float:
    return float(np.sqrt(np.mean(np.square(vals)))) if len(vals) else 0.0


def coefficient_of_variation(vals: np.ndarray, absolute_mean: bool = False) -> float:
    # zero mean is treated as 1
    if not len(vals):
        return 0.0
    m = abs(mean(vals)) if absolute_mean else mean(vals)
    return std(vals) / (m or 1.0)


def clamp(vals, bounds: Bounds):
    low, high = bounds
    if np.isscalar(vals):
        return float(min(high, max(low, vals)))
    return np.clip(np.asarray(vals, dtype=float), low, high)


def midpoint(bounds: Bounds) -> float:
    return (bounds[0] + bounds[1]) / 2.0


def make_rng(rng: Optional[np.random.Generator] = None) -> np.random.Generator:
    if rng is not None:
        return rng
    return np.random.default_rng(settings.random_seed)
