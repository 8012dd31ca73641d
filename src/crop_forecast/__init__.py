"""Schema-inferring ingestion and short-horizon forecasting of crop production data."""

from .errors import CropForecastError, EmptyDataError, InsufficientDataError, SchemaError

__all__ = ["CropForecastError", "EmptyDataError", "InsufficientDataError", "SchemaError"]
