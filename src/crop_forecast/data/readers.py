"""Row readers for the simple and long CSV layouts."""

from collections.abc import Iterable, Iterator, Sequence

import structlog
from attrs import define

from ..errors import EmptyDataError
from .columns import (
    DEFAULT_ITEM_NAME,
    ITEM_ROLE,
    PRODUCTION_ELEMENT_CODE,
    PRODUCTION_KEYWORD,
    PRODUCTION_PHRASE,
    PRODUCTION_ROLE,
    UNKNOWN_ITEM_NAME,
    YEAR_ROLE,
)
from .models import Record, RecordSet
from .tokenizer import parse_float, parse_int

logger = structlog.get_logger(__name__)

Row = Sequence[str]


@define(slots=True, frozen=True)
class SimpleFormatReader:
    """Read ``(year, value, item)`` triples directly by column position."""

    year_index: int
    value_index: int
    item_index: int | None = None
    default_item: str = DEFAULT_ITEM_NAME

    format_name = "simple"

    def read(self, rows: Iterable[Row]) -> RecordSet:
        """Parse data rows into a record set, skipping rows that fail to parse."""
        records: list[Record] = []
        skipped = 0
        for row in rows:
            record = self._parse_row(row)
            if record is None:
                skipped += 1
                continue
            records.append(record)
        logger.debug("reader.simple_parsed", records=len(records), skipped=skipped)
        if not records:
            raise EmptyDataError("No valid data rows found. Please check your CSV format.")
        return RecordSet.from_records(records)

    def _parse_row(self, row: Row) -> Record | None:
        """Return a record for one row, or None when the row is unusable."""
        if len(row) <= max(self.year_index, self.value_index):
            return None
        year = parse_int(row[self.year_index])
        value = parse_float(row[self.value_index])
        if year is None or value is None:
            return None
        return Record(year=year, value=value, item=self._item_name(row))

    def _item_name(self, row: Row) -> str:
        if self.item_index is None or self.item_index >= len(row):
            return self.default_item
        return row[self.item_index].strip() or self.default_item


def is_production_metric(element: str | None, element_code: str | None) -> bool:
    """Return True when an element column denotes the gross production metric."""
    text = (element or "").strip().lower()
    code = (element_code or "").strip()
    if PRODUCTION_PHRASE in text:
        return True
    if code == PRODUCTION_ELEMENT_CODE:
        return True
    return PRODUCTION_KEYWORD in text


@define(slots=True, frozen=True)
class LongFormatReader:
    """Fold one-metric-per-row agency exports into one record per item and year."""

    year_index: int
    value_index: int
    element_index: int | None = None
    element_code_index: int | None = None
    item_index: int | None = None
    item_code_index: int | None = None

    format_name = "long"

    def __attrs_post_init__(self) -> None:
        if self.element_index is None and self.element_code_index is None:
            raise ValueError("LongFormatReader needs an element or element code column.")

    @property
    def required_width(self) -> int:
        """Minimum number of fields a row needs to hold every required column."""
        indices = [self.year_index, self.value_index]
        indices.extend(
            index for index in (self.element_index, self.element_code_index) if index is not None
        )
        return max(indices) + 1

    def read(self, rows: Iterable[Row]) -> RecordSet:
        """Keep production rows only and emit one record per ``(item, year)`` key."""
        # dict() over the entry stream is the fold: later duplicates overwrite earlier ones.
        accumulated = dict(self._production_entries(rows))
        logger.debug("reader.long_folded", keys=len(accumulated))
        if not accumulated:
            required = ", ".join(
                f"{role.name} ({role.description})" for role in (YEAR_ROLE, ITEM_ROLE, PRODUCTION_ROLE)
            )
            raise EmptyDataError(
                "No gross production rows found. The file must provide these columns: "
                f"{required}."
            )
        records = [
            Record(year=year, value=value, item=item)
            for (item, year), value in accumulated.items()
        ]
        return RecordSet.from_records(records)

    def _production_entries(self, rows: Iterable[Row]) -> Iterator[tuple[tuple[str, int], float]]:
        """Yield ``((item, year), value)`` pairs for rows reporting gross production."""
        width = self.required_width
        for row in rows:
            if len(row) < width:
                continue
            year = parse_int(row[self.year_index])
            if year is None:
                continue
            if not is_production_metric(
                self._field(row, self.element_index), self._field(row, self.element_code_index)
            ):
                continue
            value = parse_float(row[self.value_index])
            if value is None:
                continue
            yield (self._item_name(row), year), value

    def _item_name(self, row: Row) -> str:
        """Prefer the item name, then the item code, then the sentinel."""
        for index in (self.item_index, self.item_code_index):
            name = (self._field(row, index) or "").strip()
            if name:
                return name
        return UNKNOWN_ITEM_NAME

    @staticmethod
    def _field(row: Row, index: int | None) -> str | None:
        if index is None or index >= len(row):
            return None
        return row[index]


Reader = SimpleFormatReader | LongFormatReader


__all__ = [
    "Reader",
    "SimpleFormatReader",
    "LongFormatReader",
    "is_production_metric",
]
