"""
Forecast model variants: naive, damped Holt (ETS), Theta and ARIMA(p, 1, 0), each implementing one fit-and-forecast contract so model selection is a plain pick-the-lowest-error loop.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from trendcast.models.base import ForecastModel, ModelFit
from trendcast.models.naive import NaiveModel
from trendcast.models.holt import HoltDampedModel, ets_model, holt_damped_model
from trendcast.models.theta import ThetaModel, theta_model
from trendcast.models.arima import ArimaModel, arima_model

__all__ = [
    "ForecastModel",
    "ModelFit",
    "NaiveModel",
    "HoltDampedModel",
    "ThetaModel",
    "ArimaModel",
    "ets_model",
    "holt_damped_model",
    "theta_model",
    "arima_model",
]
