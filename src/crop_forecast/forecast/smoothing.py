"""Single exponential smoothing carried forward with a linear trend."""

import math
from collections.abc import Sequence

import numpy as np
import structlog
from attrs import define, field

from ..data.models import Record
from .base import prepare_series, register_forecaster
from .metrics import Z_95, FloatArray, evaluate_fit
from .models import ForecastResult, PredictionPoint

logger = structlog.get_logger(__name__)

DEFAULT_ALPHA = 0.3


def _validate_alpha(instance: object, attribute: object, value: float) -> None:
    if not 0 < value <= 1:
        raise ValueError(f"alpha must lie in the interval (0, 1], got {value}.")


def smooth(values: FloatArray, alpha: float) -> FloatArray:
    """Return the exponentially smoothed series, seeded with the first observation."""
    smoothed = np.empty_like(values)
    smoothed[0] = values[0]
    for index in range(1, values.size):
        smoothed[index] = alpha * values[index] + (1 - alpha) * smoothed[index - 1]
    return smoothed


@register_forecaster("exponential")
@define(slots=True, frozen=True)
class ExponentialSmoothingForecaster:
    """Smooth the level, then extend it by the last smoothed step each year."""

    alpha: float = field(default=DEFAULT_ALPHA, converter=float, validator=_validate_alpha)
    z: float = Z_95

    name = "exponential"

    def forecast(self, series: Sequence[Record], horizon: int) -> ForecastResult:
        """Predict ``horizon`` years past the last observation."""
        years, values = prepare_series(series, horizon)
        smoothed = smooth(values, self.alpha)
        # Retrospective fit: residuals compare each value with its own smoothed level.
        evaluation = evaluate_fit(values, smoothed, with_r2=False)

        trend = float(smoothed[-1] - smoothed[-2])
        last_year = int(years[-1])
        current = float(smoothed[-1])
        predictions = []
        for step in range(1, horizon + 1):
            current += trend
            margin = self.z * evaluation.rmse * math.sqrt(step)
            predictions.append(PredictionPoint.around(last_year + step, current, margin))
        logger.debug(
            "forecast.smoothed",
            method=self.name,
            alpha=self.alpha,
            points=int(values.size),
            trend=trend,
        )
        return ForecastResult(method=self.name, predictions=predictions, evaluation=evaluation)


__all__ = ["DEFAULT_ALPHA", "ExponentialSmoothingForecaster", "smooth"]
