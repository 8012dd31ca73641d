"""In-sample error metrics shared by the forecasting strategies."""

from collections.abc import Iterable
from typing import TypeAlias, cast

import numpy as np
import numpy.typing as npt

from .models import ModelEvaluation

FloatArray: TypeAlias = npt.NDArray[np.float64]

Z_95 = 1.96


def to_numpy(values: npt.ArrayLike | Iterable[float]) -> FloatArray:
    """Coerce the input sequence into a NumPy float array."""
    return cast(FloatArray, np.asarray(values, dtype=float))


def mean_absolute_error(residuals: FloatArray) -> float:
    """Mean of the absolute residuals."""
    return float(np.mean(np.abs(residuals)))


def root_mean_squared_error(residuals: FloatArray) -> float:
    """Square root of the mean squared residual."""
    return float(np.sqrt(np.mean(residuals**2)))


def r_squared(observed: FloatArray, fitted: FloatArray) -> float:
    """Coefficient of determination of ``fitted`` against ``observed``."""
    residual_ss = float(np.sum((observed - fitted) ** 2))
    total_ss = float(np.sum((observed - observed.mean()) ** 2))
    if total_ss == 0:
        # Constant series: only an exact fit explains it.
        return 1.0 if np.isclose(residual_ss, 0.0) else 0.0
    return 1.0 - residual_ss / total_ss


def evaluate_fit(
    observed: FloatArray,
    fitted: FloatArray,
    *,
    with_r2: bool,
) -> ModelEvaluation:
    """Compare fitted values with the observations they were fitted on."""
    residuals = observed - fitted
    return ModelEvaluation(
        mae=mean_absolute_error(residuals),
        rmse=root_mean_squared_error(residuals),
        r2=r_squared(observed, fitted) if with_r2 else None,
    )



def summarize_history(values: FloatArray) -> dict[str, float | None]:
    """Total, average and first-to-last growth of an observed series.

    ``growth_percent`` is ``None`` for a single observation or a zero first value.
    """
    if values.size == 0:
        raise ValueError("Cannot summarize an empty series.")
    first = float(values[0])
    growth = None
    if values.size > 1 and first != 0:
        growth = (float(values[-1]) - first) / first * 100.0
    return {
        "total_value": float(np.sum(values)),
        "average_value": float(np.mean(values)),
        "growth_percent": growth,
    }


__all__ = [
    "FloatArray",
    "Z_95",
    "to_numpy",
    "mean_absolute_error",
    "root_mean_squared_error",
    "r_squared",
    "evaluate_fit",
    "summarize_history",
]
