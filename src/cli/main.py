"""Command line entry point for the crop-forecast application."""

from __future__ import annotations

import json
import math
from datetime import datetime, timezone
from pathlib import Path

import click
import structlog

from crop_forecast.data import CsvIngester, Record, RecordSet
from crop_forecast.errors import CropForecastError
from crop_forecast.forecast import ForecastResult, available_methods, get_forecaster
from crop_forecast.forecast.metrics import summarize_history, to_numpy
from crop_forecast.forecast.smoothing import DEFAULT_ALPHA
from crop_forecast.logging import bind_run_context, configure_logging
from crop_forecast.pipeline import compare_methods

LOG_FORMAT_CHOICES = ("console", "json")
LOG_LEVEL_CHOICES = ("critical", "error", "warning", "info", "debug")
MAX_HORIZON = 10

ITEM_HELP = "Item to forecast. May be omitted when the file holds a single item."
HORIZON_HELP = f"Number of future years to forecast (1-{MAX_HORIZON})."

logger = structlog.get_logger(__name__)


def _load_record_set(path: Path) -> RecordSet:
    """Ingest a CSV file, converting domain errors into click errors."""
    try:
        return CsvIngester().ingest_path(path)
    except CropForecastError as exc:
        raise click.ClickException(str(exc)) from exc


def _resolve_item(record_set: RecordSet, item: str | None) -> str:
    """Return the requested item, defaulting to the only item when unambiguous."""
    if item is None:
        if len(record_set.items) == 1:
            return next(iter(record_set.items))
        raise click.UsageError(
            "--item is required when the file holds several items: "
            + ", ".join(record_set.sorted_items())
        )
    if item not in record_set.items:
        raise click.BadParameter(
            f"Unknown item {item!r}. Available items: {', '.join(record_set.sorted_items())}",
            param_hint="--item",
        )
    return item


def _emit(payload: dict[str, object], output: Path | None) -> None:
    """Write a JSON payload to ``output`` or stdout."""
    document = json.dumps(payload, indent=2)
    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(document)
        click.echo(f"Wrote results to {output}")
        logger.debug("cli.output_written", output=str(output))
    else:
        click.echo(document)


def _result_payload(result: ForecastResult, series: tuple[Record, ...]) -> dict[str, object]:
    """Combine a forecast with the context needed to read it."""
    payload = result.to_dict()
    # JSON has no infinity; an unbounded upper bound is written as null.
    for point in payload["predictions"]:
        if not math.isfinite(point["upper_bound"]):
            point["upper_bound"] = None
    latest = series[-1]
    payload["latest_year"] = latest.year
    payload["latest_value"] = latest.value
    payload["growth_percent"] = result.growth_percent(latest.value)
    return payload


def _write_csv(rows: list[dict[str, object]], path: Path) -> None:
    """Write prediction rows to CSV via pandas."""
    import pandas as pd  # type: ignore

    path.parent.mkdir(parents=True, exist_ok=True)
    pd.DataFrame(rows).to_csv(path, index=False)


@click.group()
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVEL_CHOICES, case_sensitive=False),
    envvar="CROP_FORECAST_LOG_LEVEL",
    default="warning",
    show_default=True,
    help="Verbosity for structured logs.",
)
@click.option(
    "--log-format",
    type=click.Choice(LOG_FORMAT_CHOICES, case_sensitive=False),
    envvar="CROP_FORECAST_LOG_FORMAT",
    default="console",
    show_default=True,
    help="Render logs as console-friendly text or JSON.",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str, log_format: str) -> None:
    """Ingest crop production CSV files and forecast future production."""
    configure_logging(level=log_level, json_output=log_format.lower() == "json")
    ctx.ensure_object(dict)
    ctx.obj.update({"log_level": log_level.lower(), "log_format": log_format.lower()})
    logger.bind(command_group="crop-forecast").debug(
        "cli.initialized",
        log_level=log_level.lower(),
        log_format=log_format.lower(),
    )


@cli.command("inspect")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Optional path to write the JSON summary.",
)
def inspect(path: Path, output: Path | None) -> None:
    """Summarize the items, year ranges and production history found in a CSV file."""
    bind_run_context("inspect", path)
    logger.info("command.start")
    record_set = _load_record_set(path)
    items = []
    for name in record_set.sorted_items():
        series = record_set.series_for(name)
        first, last = record_set.year_range(name)
        items.append(
            {
                "item": name,
                "records": len(series),
                "first_year": first,
                "last_year": last,
                **summarize_history(to_numpy([record.value for record in series])),
            }
        )
    _emit(
        {
            "source": str(path),
            "record_count": len(record_set),
            "item_count": len(items),
            "items": items,
        },
        output,
    )
    logger.info("command.completed", items=len(items))


@cli.command("forecast")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--item", default=None, help=ITEM_HELP)
@click.option(
    "--horizon",
    type=click.IntRange(1, MAX_HORIZON),
    default=3,
    show_default=True,
    help=HORIZON_HELP,
)
@click.option(
    "--method",
    type=click.Choice(available_methods(), case_sensitive=False),
    default="linear",
    show_default=True,
    help="Forecasting strategy.",
)
@click.option(
    "--alpha",
    type=click.FloatRange(0, 1, min_open=True),
    default=DEFAULT_ALPHA,
    show_default=True,
    help="Smoothing factor for the exponential method.",
)
@click.option(
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Optional path to write the JSON result.",
)
@click.option(
    "--export",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Optional CSV file receiving one row per predicted year.",
)
def forecast(
    *,
    path: Path,
    item: str | None,
    horizon: int,
    method: str,
    alpha: float,
    output: Path | None,
    export: Path | None,
) -> None:
    """Forecast one item's production for the next HORIZON years."""
    method = method.lower()
    bind_run_context("forecast", path, method=method)
    record_set = _load_record_set(path)
    item = _resolve_item(record_set, item)
    cmd_log = logger.bind(item=item, horizon=horizon)
    cmd_log.info("command.start")

    series = record_set.series_for(item)
    try:
        result = get_forecaster(method, alpha=alpha).forecast(series, horizon)
    except CropForecastError as exc:
        raise click.ClickException(str(exc)) from exc

    payload = _result_payload(result, series)
    payload.update(
        {
            "generated_at": datetime.now(timezone.utc).isoformat(),
            "item": item,
            "horizon": horizon,
        }
    )
    if export:
        if export.suffix.lower() != ".csv":
            raise click.BadParameter("Export path must end with .csv", param_hint="--export")
        _write_csv(
            [{"item": item, "method": method, **row} for row in payload["predictions"]],
            export,
        )
        click.echo(f"Predictions written to {export}")
    _emit(payload, output)
    cmd_log.info("command.completed", predictions=len(result.predictions))


@cli.command("compare")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--item", default=None, help=ITEM_HELP)
@click.option(
    "--horizon",
    type=click.IntRange(1, MAX_HORIZON),
    default=3,
    show_default=True,
    help=HORIZON_HELP,
)
@click.option(
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Optional path to write the JSON comparison.",
)
def compare(*, path: Path, item: str | None, horizon: int, output: Path | None) -> None:
    """Run every forecasting method on one item and report them side by side."""
    bind_run_context("compare", path)
    record_set = _load_record_set(path)
    item = _resolve_item(record_set, item)
    cmd_log = logger.bind(item=item, horizon=horizon)
    cmd_log.info("command.start")
    series = record_set.series_for(item)
    try:
        results = compare_methods(series, horizon)
    except CropForecastError as exc:
        raise click.ClickException(str(exc)) from exc
    # A method whose interval could not be estimated only wins when nothing else is left.
    bounded = [
        name
        for name, result in results.items()
        if all(math.isfinite(point.upper_bound) for point in result.predictions)
    ]
    best = min(bounded or results, key=lambda name: results[name].evaluation.rmse)
    _emit(
        {
            "generated_at": datetime.now(timezone.utc).isoformat(),
            "item": item,
            "horizon": horizon,
            "lowest_rmse": best,
            "methods": {name: _result_payload(result, series) for name, result in results.items()},
        },
        output,
    )
    cmd_log.info("command.completed", methods=list(results), lowest_rmse=best)


if __name__ == "__main__":
    cli()
