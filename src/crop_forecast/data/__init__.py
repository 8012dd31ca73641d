"""Tabular ingestion of agricultural production statistics."""

from .headers import classify_header
from .ingest import CsvIngester, ingest_text
from .models import Record, RecordSchema, RecordSet, RecordSetSchema
from .readers import LongFormatReader, SimpleFormatReader

__all__ = [
    "Record",
    "RecordSchema",
    "RecordSet",
    "RecordSetSchema",
    "CsvIngester",
    "LongFormatReader",
    "SimpleFormatReader",
    "classify_header",
    "ingest_text",
]
