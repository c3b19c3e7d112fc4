"""
Enumerations for model identifiers, lead-change risk levels and confidence labels

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from enum import Enum

from config import settings


class ModelKind(str, Enum):
    ets = "ets"
    arima = "arima"
    naive = "naive"
    holt_damped = "holt_damped"
    theta = "theta"


class RiskLevel(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"


class ConfidenceLabel(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"

    @classmethod
    def from_score(cls, score: float) -> ConfidenceLabel:
        if score >= settings.insights_high_cutoff:
            return cls.high
        if score >= settings.insights_medium_cutoff:
            return cls.medium
        return cls.low
