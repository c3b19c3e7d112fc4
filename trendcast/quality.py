"""
Data quality assessment for forecast inputs, flagging series that are too short, too spiky (high coefficient of variation) or likely shaped by event shocks (frequent large relative jumps).

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import Iterable

import numpy as np

from trendcast.schemas import QualityFlags
from trendcast.stats import as_values, coefficient_of_variation
from config import settings


def _jump_fraction(arr: np.ndarray) -> float:
    if len(arr) < 2:
        return 0.0
    prev = np.abs(arr[:-1])
    prev[prev == 0] = 1.0
    ratios = np.abs(np.diff(arr)) / prev
    return float(np.count_nonzero(ratios > settings.quality_jump_ratio) / len(ratios))


def assess(values: Iterable[float]) -> QualityFlags:
    arr = as_values(values)
    if len(arr) < settings.quality_min_length:
        return QualityFlags(series_too_short=True, too_spiky=False, event_shock_likely=False)

    cv = coefficient_of_variation(arr)
    return QualityFlags(
        series_too_short=False,
        too_spiky=cv > settings.quality_cv_threshold,
        event_shock_likely=_jump_fraction(arr) > settings.quality_jump_fraction,
    )
