"""
Constants and configuration for the trend forecasting engine.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from typing import List, Optional, Tuple

from pydantic_settings import BaseSettings


INDEX_BOUNDS: Tuple[float, float] = (0.0, 100.0)
GAP_BOUNDS: Tuple[float, float] = (-100.0, 100.0)


class Settings(BaseSettings):
    # quality assessment
    quality_min_length: int = 14
    quality_cv_threshold: float = 1.5
    quality_jump_ratio: float = 0.5
    quality_jump_fraction: float = 0.10

    # dual-series path
    forecast_min_length: int = 7
    forecast_default_horizon: int = 28
    forecast_step_days: int = 1
    index_bounds: Tuple[float, float] = INDEX_BOUNDS

    # damped ETS used by the dual-series path
    ets_alpha: float = 0.3
    ets_beta: float = 0.1
    ets_phi: float = 0.9
    ets_min_points: int = 4
    ets_optimize: bool = False
    ets_alpha_grid: List[float] = [0.1, 0.2, 0.3, 0.4, 0.5]
    ets_beta_grid: List[float] = [0.05, 0.1, 0.15, 0.2]

    # AR(p) on the once-differenced series
    arima_min_points: int = 4
    arima_ar2_min_diffs: int = 10
    arima_coef_limit: float = 0.99

    # analytic interval z-scores
    z80: float = 1.28
    z95: float = 1.96

    # proportional bands used when there is too little history for residuals
    naive_band80_ratio: float = 0.2
    naive_band95_ratio: float = 0.3

    # walk-forward backtest
    backtest_min_train_size: int = 14
    backtest_validation_size: int = 7
    backtest_step_size: int = 7

    # trend-index forecaster
    trend_min_length: int = 24
    trend_default_horizon: int = 10
    trend_alpha: float = 0.3
    trend_beta: float = 0.1
    trend_phi: float = 0.9
    trend_min_points: int = 3
    theta_ses_alpha: float = 0.3
    trend_naive_band: float = 10.0
    trend_default_residual_std: float = 5.0

    # rolling-origin backtest
    rolling_test_window: int = 12
    rolling_horizon: int = 4
    rolling_min_train_size: int = 12

    # residual bootstrap
    bootstrap_simulations: int = 200
    bootstrap_lower_pct: float = 10.0
    bootstrap_upper_pct: float = 90.0

    # confidence scoring
    confidence_error_weight: float = 0.4
    confidence_coverage_weight: float = 0.3
    confidence_sample_weight: float = 0.3
    confidence_full_sample_size: int = 20
    confidence_short_penalty: float = 0.5
    confidence_spiky_penalty: float = 0.7
    confidence_shock_penalty: float = 0.8

    # gap forecaster
    gap_min_length: int = 24
    gap_bounds: Tuple[float, float] = GAP_BOUNDS
    gap_volatility_window: int = 24
    gap_volatility_threshold: float = 1.5
    gap_error_threshold: float = 20.0
    gap_degraded_band: float = 10.0
    gap_degraded_residual_std: float = 10.0
    lead_change_simulations: int = 1000

    # gap insights
    insights_error_weight: float = 0.6
    insights_std_weight: float = 0.4
    insights_high_cutoff: float = 70.0
    insights_medium_cutoff: float = 50.0

    # head-to-head analytics
    head_to_head_samples: int = 1000
    h2h_high_margin_pct: float = 0.1
    h2h_high_crossover: float = 0.3
    h2h_high_confidence: float = 50.0
    h2h_medium_margin_pct: float = 0.2
    h2h_medium_crossover: float = 0.15
    h2h_medium_confidence: float = 70.0

    # forecast pack
    pack_hash_length: int = 16

    # seeds numpy.random.default_rng when no generator is passed in
    random_seed: Optional[int] = None

    model_config = {
        "env_prefix": "TRENDCAST_",
        "extra": "ignore",
    }


settings = Settings()
