"""
Shared contract for forecast model variants: every model fits a numeric series and returns a bounded point forecast together with its one-step in-sample residuals.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

import numpy as np

from trendcast.enums import ModelKind
from trendcast.stats import Bounds, clamp, midpoint


@dataclass(frozen=True)
class ModelFit:
    forecast: np.ndarray
    residuals: np.ndarray


class ForecastModel(ABC):
    kind: ModelKind

    @abstractmethod
    def fit_and_forecast(self, series: np.ndarray, horizon: int, bounds: Bounds) -> ModelFit:
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self.kind.value})"


def flat_fit(series: np.ndarray, horizon: int, bounds: Bounds) -> ModelFit:
    """Repeat the last observation; used when a model has too little history."""
    last = float(series[-1]) if len(series) else midpoint(bounds)
    return ModelFit(
        forecast=np.full(horizon, clamp(last, bounds)),
        residuals=np.array([], dtype=float),
    )
