import datetime as dt

import pytest

from trendcast.enums import ModelKind
from trendcast.evaluation import evaluate_forecast, evaluate_pack
from trendcast.pack import build_forecast_pack
from trendcast.schemas import BacktestResult, ForecastPoint, ForecastResult, QualityFlags

START = dt.date(2024, 2, 1)


def _issued():
    values = [10.0, 12.0, 14.0]
    points = tuple(
        ForecastPoint(
            date=START + dt.timedelta(days=i),
            value=v, lower80=v - 2, upper80=v + 2, lower95=v - 4, upper95=v + 4,
        )
        for i, v in enumerate(values)
    )
    return ForecastResult(
        points=points,
        model=ModelKind.arima,
        metrics=BacktestResult.empty(),
        confidence_score=0,
        quality_flags=QualityFlags(series_too_short=False, too_spiky=False, event_shock_likely=False),
    )


def test_evaluate_forecast(dated):
    ev = evaluate_forecast(_issued(), dated([11.0, 15.0, 13.0], start=START))
    assert ev.evaluated_points == 3
    assert ev.mae == pytest.approx(5 / 3)
    assert ev.mape == pytest.approx((100 / 11 + 20 + 100 / 13) / 3)
    assert ev.interval_hit_rate80 == pytest.approx(200 / 3)
    assert ev.interval_hit_rate95 == 100.0
    assert ev.direction_accuracy == 50.0


def test_evaluate_forecast_partial_and_missing(dated):
    ev = evaluate_forecast(_issued(), dated([10.0], start=START + dt.timedelta(days=2)))
    assert ev.evaluated_points == 1
    assert ev.direction_accuracy is None

    ev = evaluate_forecast(_issued(), [])
    assert ev.evaluated_points == 0
    assert ev.mae is None
    assert ev.interval_hit_rate80 is None


def test_evaluate_pack_winner(dated):
    history_a = dated([30.0 + (i % 3) for i in range(30)])
    history_b = dated([70.0 + (i % 3) for i in range(30)])
    pack = build_forecast_pack(history_a, history_b, horizon=5)
    after = history_a[-1].date + dt.timedelta(days=1)

    ev = evaluate_pack(pack, dated([31.0] * 5, start=after), dated([71.0] * 5, start=after))
    assert ev.winner_correct is True
    assert ev.term_a.evaluated_points == 5
    assert ev.mae is not None
    assert ev.mape == pytest.approx((ev.term_a.mape + ev.term_b.mape) / 2)
    assert ev.interval_hit_rate80 == pytest.approx(
        (ev.term_a.interval_hit_rate80 + ev.term_b.interval_hit_rate80) / 2
    )
    assert ev.interval_hit_rate95 == pytest.approx(
        (ev.term_a.interval_hit_rate95 + ev.term_b.interval_hit_rate95) / 2
    )

    one_sided = evaluate_pack(pack, dated([31.0] * 5, start=after), [])
    assert one_sided.term_b.evaluated_points == 0
    assert one_sided.mae == pytest.approx(one_sided.term_a.mae)
    assert one_sided.mape == pytest.approx(one_sided.term_a.mape)
    assert one_sided.interval_hit_rate80 == pytest.approx(one_sided.term_a.interval_hit_rate80)
    assert one_sided.interval_hit_rate95 == pytest.approx(one_sided.term_a.interval_hit_rate95)
    assert one_sided.winner_correct is None

    ev = evaluate_pack(pack, dated([80.0] * 5, start=after), dated([20.0] * 5, start=after))
    assert ev.winner_correct is False


def test_evaluate_pack_without_actuals(dated):
    pack = build_forecast_pack(dated([30.0] * 10), dated([60.0] * 10), horizon=3)
    ev = evaluate_pack(pack, [], [])
    assert ev.winner_correct is None
    assert ev.mae is None
    assert ev.mape is None
    assert ev.interval_hit_rate80 is None
