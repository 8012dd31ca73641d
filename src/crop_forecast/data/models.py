"""Domain models for ingested agricultural production records."""

from collections.abc import Iterable
from typing import Any

import marshmallow as ma
from attrs import asdict as attrs_asdict, define, field

from ..errors import EmptyDataError


def _strip(value: str) -> str:
    """Trim surrounding whitespace from a field."""
    return value.strip()


@define(slots=True, frozen=True)
class Record:
    """One observed measurement of a production metric for one item and year."""

    year: int = field(converter=int)
    value: float = field(converter=float)
    item: str = field(converter=_strip)


class RecordSchema(ma.Schema):
    """Marshmallow schema for :class:`Record`."""

    year = ma.fields.Int(required=True)
    value = ma.fields.Float(required=True)
    item = ma.fields.Str(required=True)

    @ma.post_load
    def make_record(self, data: dict[str, Any], **kwargs: object) -> Record:
        """Instantiate :class:`Record` from validated payloads."""
        return Record(**data)


def _sorted_records(records: Iterable[Record]) -> tuple[Record, ...]:
    """Order records by year; the sort is stable so same-year rows keep input order."""
    return tuple(sorted(records, key=lambda record: record.year))


@define(slots=True, frozen=True)
class RecordSet:
    """Chronologically ordered records plus the distinct items they cover."""

    records: tuple[Record, ...] = field(converter=_sorted_records)
    items: frozenset[str] = field(converter=frozenset)

    def __attrs_post_init__(self) -> None:
        """Reject empty sets and records whose item is not registered."""
        if not self.records:
            raise EmptyDataError("No valid data rows found. Please check your CSV format.")
        unknown = {record.item for record in self.records} - self.items
        if unknown:
            raise ValueError(f"Records reference unregistered items: {sorted(unknown)}")

    @classmethod
    def from_records(cls, records: Iterable[Record]) -> "RecordSet":
        """Build a record set, deriving the item set from the records themselves."""
        materialized = list(records)
        return cls(records=materialized, items={record.item for record in materialized})

    def __len__(self) -> int:
        return len(self.records)

    def series_for(self, item: str) -> tuple[Record, ...]:
        """Return the year-ascending records of a single item."""
        return tuple(record for record in self.records if record.item == item)

    def sorted_items(self) -> list[str]:
        """Return item names in alphabetical order."""
        return sorted(self.items)

    def year_range(self, item: str | None = None) -> tuple[int, int]:
        """Return the first and last observed year, optionally for one item."""
        records = self.records if item is None else self.series_for(item)
        if not records:
            raise KeyError(item)
        return records[0].year, records[-1].year

    def to_dict(self) -> dict[str, object]:
        """Return a JSON-friendly representation of the record set."""
        return {
            "items": self.sorted_items(),
            "records": [attrs_asdict(record) for record in self.records],
        }


class RecordSetSchema(ma.Schema):
    """Marshmallow schema for :class:`RecordSet` payloads."""

    items = ma.fields.List(ma.fields.Str(), required=True)
    records = ma.fields.List(ma.fields.Nested(RecordSchema), required=True)

    @ma.post_load
    def make_record_set(self, data: dict[str, Any], **kwargs: object) -> RecordSet:
        """Instantiate :class:`RecordSet` from validated payloads."""
        return RecordSet(records=data["records"], items=data["items"])


__all__ = ["Record", "RecordSchema", "RecordSet", "RecordSetSchema"]
