"""Unit tests for the forecaster registry and result models."""

import math

import attrs
import pytest

from crop_forecast.forecast import (
    ExponentialSmoothingForecaster,
    Forecaster,
    ForecastResult,
    ForecastResultSchema,
    ModelEvaluation,
    PredictionPoint,
    PredictionPointSchema,
    TrendLineForecaster,
    available_methods,
    get_forecaster,
)


def test_available_methods():
    """Both strategies are registered."""
    assert available_methods() == ["exponential", "linear"]


def test_get_forecaster_returns_strategies():
    """Strategies are looked up by name and honour the protocol."""
    linear = get_forecaster("Linear")
    exponential = get_forecaster("exponential", alpha=0.5)
    assert isinstance(linear, TrendLineForecaster)
    assert isinstance(exponential, ExponentialSmoothingForecaster)
    assert exponential.alpha == 0.5
    assert isinstance(linear, Forecaster)
    assert isinstance(exponential, Forecaster)


def test_get_forecaster_drops_undeclared_parameters(mocker):
    """Settings for another strategy are dropped and logged."""
    mock_logger = mocker.patch("crop_forecast.forecast.base.logger")
    linear = get_forecaster("linear", alpha=0.3)
    assert isinstance(linear, TrendLineForecaster)
    mock_logger.debug.assert_called_once_with("forecast.params_ignored", method="linear", params=["alpha"])
    assert get_forecaster("exponential", alpha=0.3).alpha == 0.3


def test_get_forecaster_unknown():
    """Unknown names list the valid choices."""
    with pytest.raises(ValueError, match="exponential, linear"):
        get_forecaster("arima")


def test_strategies_are_interchangeable(linear_series):
    """Both strategies return the same result shape for the same input."""
    for name in available_methods():
        result = get_forecaster(name).forecast(linear_series, 4)
        assert result.method == name
        assert len(result.predictions) == 4
        assert [p.year for p in result.predictions] == [2015, 2016, 2017, 2018]


def _result():
    return ForecastResult(
        method="linear",
        predictions=[
            PredictionPoint(year=2023, predicted_value=110.0, lower_bound=100.0, upper_bound=120.0),
            PredictionPoint(year=2024, predicted_value=120.0, lower_bound=105.0, upper_bound=135.0),
        ],
        evaluation=ModelEvaluation(mae=1.0, rmse=1.5, r2=0.9),
    )


def test_growth_percent():
    """Growth compares the final prediction with the latest observation."""
    result = _result()
    assert result.growth_percent(100.0) == pytest.approx(20.0)
    assert result.growth_percent(0.0) is None


def test_result_schema_round_trip():
    """Dumped results load back into equal values."""
    result = _result()
    loaded = ForecastResultSchema().load(result.to_dict())
    assert loaded == result


def test_result_to_dict_without_r2():
    """Missing r2 serializes as null."""
    result = ForecastResult(
        method="exponential",
        predictions=[],
        evaluation=ModelEvaluation(mae=1.0, rmse=2.0),
    )
    assert result.to_dict()["evaluation"] == {"mae": 1.0, "rmse": 2.0, "r2": None}
    assert ForecastResultSchema().load(result.to_dict()) == result


def test_prediction_point_around_floors_at_zero():
    """Centre and bounds never go negative and stay ordered."""
    point = PredictionPoint.around(2030, -10.0, 4.0)
    assert (point.predicted_value, point.lower_bound, point.upper_bound) == (0.0, 0.0, 0.0)
    straddling = PredictionPoint.around(2030, -1.0, 5.0)
    assert (straddling.predicted_value, straddling.lower_bound, straddling.upper_bound) == (0.0, 0.0, 4.0)


def test_unbounded_point_round_trips_through_schema():
    """An infinite upper bound survives dump and load."""
    point = PredictionPoint.around(2030, 50.0, math.inf)
    assert point.lower_bound == 0.0
    loaded = PredictionPointSchema().load(attrs.asdict(point))
    assert math.isinf(loaded.upper_bound)
