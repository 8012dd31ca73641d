"""Exception types raised by ingestion and forecasting."""

from collections.abc import Sequence


class CropForecastError(Exception):
    """Base class for every domain error raised by the package."""


class SchemaError(CropForecastError, ValueError):
    """Raised when the header row lacks one or more required columns."""

    def __init__(self, missing: Sequence[str], found: Sequence[str]) -> None:
        self.missing = tuple(missing)
        self.found = tuple(found)
        super().__init__(
            f"CSV must contain columns for {', '.join(self.missing)}. "
            f"Found columns: {', '.join(self.found)}"
        )


class EmptyDataError(CropForecastError, ValueError):
    """Raised when the input held rows but none produced a valid record."""


class InsufficientDataError(CropForecastError, ValueError):
    """Raised when a series is too short to fit a forecasting model."""


__all__ = [
    "CropForecastError",
    "SchemaError",
    "EmptyDataError",
    "InsufficientDataError",
]
