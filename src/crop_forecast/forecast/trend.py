"""Ordinary least-squares trend-line extrapolation."""

import math
from collections.abc import Sequence

import numpy as np
import structlog
from attrs import define

from ..data.models import Record
from ..errors import InsufficientDataError
from .base import prepare_series, register_forecaster
from .metrics import Z_95, FloatArray, evaluate_fit
from .models import ForecastResult, PredictionPoint

logger = structlog.get_logger(__name__)


@define(slots=True, frozen=True)
class LineFit:
    """Closed-form OLS fit of value on year."""

    slope: float
    intercept: float
    mean_year: float
    sxx: float
    residual_ss: float
    n: int

    @property
    def standard_error(self) -> float:
        """Residual standard error; infinite when no degrees of freedom are left."""
        if self.n <= 2:
            return math.inf
        return math.sqrt(self.residual_ss / (self.n - 2))

    def predict(self, years: FloatArray | float) -> FloatArray | float:
        return self.intercept + self.slope * years

    def margin(self, year: float, z: float = Z_95) -> float:
        """Half-width of the prediction interval at ``year``."""
        if math.isinf(self.standard_error):
            return math.inf
        leverage = 1.0 + 1.0 / self.n + (year - self.mean_year) ** 2 / self.sxx
        return z * self.standard_error * math.sqrt(leverage)


def fit_line(years: FloatArray, values: FloatArray) -> LineFit:
    """Fit ``value = intercept + slope * year`` by ordinary least squares."""
    mean_year = float(years.mean())
    mean_value = float(values.mean())
    year_dev = years - mean_year
    sxx = float(np.dot(year_dev, year_dev))
    if sxx == 0:
        raise InsufficientDataError("Trend-line fitting needs at least two distinct years.")
    slope = float(np.dot(year_dev, values - mean_value)) / sxx
    intercept = mean_value - slope * mean_year
    residuals = values - (intercept + slope * years)
    return LineFit(
        slope=slope,
        intercept=intercept,
        mean_year=mean_year,
        sxx=sxx,
        residual_ss=float(np.dot(residuals, residuals)),
        n=int(years.size),
    )


@register_forecaster("linear")
@define(slots=True, frozen=True)
class TrendLineForecaster:
    """Extrapolate the least-squares line through the observed years."""

    z: float = Z_95

    name = "linear"

    def forecast(self, series: Sequence[Record], horizon: int) -> ForecastResult:
        """Fit the trend line and project it ``horizon`` years past the last observation."""
        years, values = prepare_series(series, horizon)
        fit = fit_line(years, values)
        log = logger.bind(method=self.name, points=fit.n, horizon=horizon)
        if fit.n <= 2:
            log.warning("forecast.interval_unavailable", reason="no residual degrees of freedom")

        evaluation = evaluate_fit(values, fit.predict(years), with_r2=fit.n >= 3)

        last_year = int(years[-1])
        predictions = []
        for step in range(1, horizon + 1):
            future_year = last_year + step
            predicted = float(fit.predict(float(future_year)))
            margin = fit.margin(float(future_year), self.z)
            predictions.append(PredictionPoint.around(future_year, predicted, margin))
        log.debug("forecast.fitted", slope=fit.slope, intercept=fit.intercept, r2=evaluation.r2)
        return ForecastResult(method=self.name, predictions=predictions, evaluation=evaluation)


__all__ = ["LineFit", "TrendLineForecaster", "fit_line"]
