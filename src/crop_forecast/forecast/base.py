"""Forecaster protocol, input validation and the strategy registry."""

from collections.abc import Callable, Sequence
from typing import Protocol, runtime_checkable

import attrs
import structlog

from ..data.models import Record
from ..errors import InsufficientDataError
from .metrics import FloatArray, to_numpy
from .models import ForecastResult

logger = structlog.get_logger(__name__)

MIN_POINTS = 2


@runtime_checkable
class Forecaster(Protocol):
    """Anything that turns a single-item series into a horizon of predictions."""

    name: str

    def forecast(self, series: Sequence[Record], horizon: int) -> ForecastResult:
        """Fit the series and predict ``horizon`` future years."""
        ...


def prepare_series(series: Sequence[Record], horizon: int) -> tuple[FloatArray, FloatArray]:
    """Validate the inputs and return year and value arrays."""
    if horizon < 1:
        raise ValueError(f"horizon must be at least 1, got {horizon}.")
    if len(series) < MIN_POINTS:
        raise InsufficientDataError(
            f"Not enough data points for forecasting: need at least {MIN_POINTS}, "
            f"got {len(series)}."
        )
    years = to_numpy([record.year for record in series])
    values = to_numpy([record.value for record in series])
    return years, values


_REGISTRY: dict[str, type] = {}


def register_forecaster(name: str) -> Callable[[type], type]:
    """Class decorator adding a strategy to the registry under ``name``."""

    def decorator(cls: type) -> type:
        _REGISTRY[name] = cls
        return cls

    return decorator


def available_methods() -> list[str]:
    """Return the registered strategy names."""
    return sorted(_REGISTRY)


def get_forecaster(name: str, **params: object) -> Forecaster:
    """Instantiate the strategy registered under ``name``.

    Parameters the strategy does not declare are dropped, so callers can pass one
    set of settings (for example ``alpha``) whichever method they pick.
    """
    key = name.strip().lower()
    if key not in _REGISTRY:
        valid = ", ".join(available_methods())
        raise ValueError(f"Unknown forecasting method {name!r}. Choose one of: {valid}.")
    cls = _REGISTRY[key]
    accepted = attrs.fields_dict(cls)
    ignored = sorted(set(params) - set(accepted))
    if ignored:
        logger.debug("forecast.params_ignored", method=key, params=ignored)
    return cls(**{param: value for param, value in params.items() if param in accepted})


__all__ = [
    "Forecaster",
    "MIN_POINTS",
    "available_methods",
    "get_forecaster",
    "prepare_series",
    "register_forecaster",
]
