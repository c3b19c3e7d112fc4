"""
Naive baseline model that carries the last observation forward.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import numpy as np

from trendcast.enums import ModelKind
from trendcast.models.base import ForecastModel, ModelFit, flat_fit
from trendcast.stats import Bounds


class NaiveModel(ForecastModel):
    kind = ModelKind.naive

    def fit_and_forecast(self, series: np.ndarray, horizon: int, bounds: Bounds) -> ModelFit:
        fit = flat_fit(series, horizon, bounds)
        # random-walk one-step errors
        return ModelFit(forecast=fit.forecast, residuals=np.diff(series).astype(float))
