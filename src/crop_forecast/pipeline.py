"""High level orchestration from raw CSV text to forecasts."""

from collections.abc import Sequence

import structlog

from .data.ingest import CsvIngester
from .data.models import Record
from .errors import InsufficientDataError
from .forecast import ForecastResult, available_methods, get_forecaster

logger = structlog.get_logger(__name__)


def forecast_item(
    text: str,
    item: str,
    horizon: int,
    *,
    method: str = "linear",
    **params: object,
) -> ForecastResult:
    """Ingest CSV text, select one item's series and forecast it."""
    pipe_log = logger.bind(operation="forecast_item", item=item, method=method, horizon=horizon)
    pipe_log.info("pipeline.start")
    record_set = CsvIngester().ingest(text)
    series = record_set.series_for(item)
    if not series:
        raise InsufficientDataError(
            f"No records found for item {item!r}. Available items: {', '.join(record_set.sorted_items())}"
        )
    result = get_forecaster(method, **params).forecast(series, horizon)
    pipe_log.info("pipeline.complete", points=len(series), predictions=len(result.predictions))
    return result


def compare_methods(series: Sequence[Record], horizon: int) -> dict[str, ForecastResult]:
    """Run every registered strategy on the same series."""
    results = {name: get_forecaster(name).forecast(series, horizon) for name in available_methods()}
    logger.info(
        "pipeline.compared",
        methods=list(results),
        rmse={name: result.evaluation.rmse for name, result in results.items()},
    )
    return results


__all__ = ["compare_methods", "forecast_item"]
