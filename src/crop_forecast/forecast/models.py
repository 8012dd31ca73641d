"""Value types returned by the forecasting strategies."""

from typing import Any

import marshmallow as ma
from attrs import asdict as attrs_asdict, define, field


@define(slots=True, frozen=True)
class PredictionPoint:
    """Forecast for one future year with its 95% interval."""

    year: int = field(converter=int)
    predicted_value: float = field(converter=float)
    lower_bound: float = field(converter=float)
    upper_bound: float = field(converter=float)

    @classmethod
    def around(cls, year: int, predicted: float, margin: float) -> "PredictionPoint":
        """Build a point from a centre and half-width, keeping every value at or above zero.

        The estimate and both bounds are floored at zero and
        ``0 <= lower <= predicted <= upper`` holds for any non-negative ``margin``. An infinite ``margin``
        marks an interval that cannot be estimated and yields ``[0, inf)``.
        """
        return cls(
            year=year,
            predicted_value=max(0.0, predicted),
            lower_bound=max(0.0, predicted - margin),
            upper_bound=max(0.0, predicted + margin),
        )

    @property
    def interval_width(self) -> float:
        """Distance between the upper and lower bound."""
        return self.upper_bound - self.lower_bound


class PredictionPointSchema(ma.Schema):
    """Marshmallow schema for :class:`PredictionPoint`."""

    year = ma.fields.Int(required=True)
    predicted_value = ma.fields.Float(required=True)
    lower_bound = ma.fields.Float(required=True)
    upper_bound = ma.fields.Float(required=True, allow_nan=True)

    @ma.post_load
    def make_point(self, data: dict[str, Any], **kwargs: object) -> PredictionPoint:
        """Instantiate :class:`PredictionPoint` from validated payloads."""
        return PredictionPoint(**data)


@define(slots=True, frozen=True)
class ModelEvaluation:
    """In-sample accuracy of a fitted model."""

    mae: float = field(converter=float)
    rmse: float = field(converter=float)
    r2: float | None = None


class ModelEvaluationSchema(ma.Schema):
    """Marshmallow schema for :class:`ModelEvaluation`."""

    mae = ma.fields.Float(required=True)
    rmse = ma.fields.Float(required=True)
    r2 = ma.fields.Float(required=False, allow_none=True, load_default=None)

    @ma.post_load
    def make_evaluation(self, data: dict[str, Any], **kwargs: object) -> ModelEvaluation:
        """Instantiate :class:`ModelEvaluation` from validated payloads."""
        return ModelEvaluation(**data)


@define(slots=True, frozen=True)
class ForecastResult:
    """Predictions and evaluation produced by one forecasting strategy."""

    method: str
    predictions: tuple[PredictionPoint, ...] = field(converter=tuple)
    evaluation: ModelEvaluation

    def growth_percent(self, latest_value: float) -> float | None:
        """Percent change from the latest observed value to the final prediction."""
        if not self.predictions or latest_value == 0:
            return None
        final = self.predictions[-1].predicted_value
        return (final - latest_value) / latest_value * 100.0

    def to_dict(self) -> dict[str, object]:
        """Return a JSON-friendly representation of the result."""
        return {
            "method": self.method,
            "predictions": [attrs_asdict(point) for point in self.predictions],
            "evaluation": attrs_asdict(self.evaluation),
        }


class ForecastResultSchema(ma.Schema):
    """Marshmallow schema for :class:`ForecastResult`."""

    method = ma.fields.Str(required=True)
    predictions = ma.fields.List(ma.fields.Nested(PredictionPointSchema), required=True)
    evaluation = ma.fields.Nested(ModelEvaluationSchema, required=True)

    @ma.post_load
    def make_result(self, data: dict[str, Any], **kwargs: object) -> ForecastResult:
        """Instantiate :class:`ForecastResult` from validated payloads."""
        return ForecastResult(**data)


__all__ = [
    "PredictionPoint",
    "PredictionPointSchema",
    "ModelEvaluation",
    "ModelEvaluationSchema",
    "ForecastResult",
    "ForecastResultSchema",
]
