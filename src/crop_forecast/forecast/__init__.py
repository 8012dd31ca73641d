"""Forecasting strategies for single-item production series."""

from .base import (  # noqa: F401
    Forecaster,
    available_methods,
    get_forecaster,
    prepare_series,
)
from .models import (  # noqa: F401
    ForecastResult,
    ForecastResultSchema,
    ModelEvaluation,
    ModelEvaluationSchema,
    PredictionPoint,
    PredictionPointSchema,
)
from .smoothing import ExponentialSmoothingForecaster  # noqa: F401
from .trend import TrendLineForecaster  # noqa: F401

__all__ = [
    "Forecaster",
    "available_methods",
    "get_forecaster",
    "prepare_series",
    "ForecastResult",
    "ForecastResultSchema",
    "ModelEvaluation",
    "ModelEvaluationSchema",
    "PredictionPoint",
    "PredictionPointSchema",
    "ExponentialSmoothingForecaster",
    "TrendLineForecaster",
]
