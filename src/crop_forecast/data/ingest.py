"""Ingestion entry points turning raw CSV text into a record set."""

from pathlib import Path

import structlog
from attrs import define

from .headers import classify_header
from .models import RecordSet
from .tokenizer import tokenize

logger = structlog.get_logger(__name__)


@define(slots=True)
class CsvIngester:
    """Coordinate tokenizing, header classification and row reading."""

    encoding: str = "utf-8"

    def ingest(self, text: str, *, source: str = "<text>") -> RecordSet:
        """Parse CSV text into a chronologically sorted record set."""
        log = logger.bind(source=source)
        log.info("ingest.start", characters=len(text))
        header, *rows = tokenize(text)
        reader = classify_header(header)
        log.info("ingest.layout_detected", format=reader.format_name, rows=len(rows))
        try:
            record_set = reader.read(rows)
        except ValueError:
            log.warning("ingest.failed", format=reader.format_name, rows=len(rows))
            raise
        log.info(
            "ingest.complete",
            records=len(record_set),
            items=len(record_set.items),
        )
        return record_set

    def ingest_path(self, path: str | Path) -> RecordSet:
        """Read a CSV file from disk and ingest its contents."""
        path = Path(path)
        logger.debug("ingest.read_file", path=str(path), encoding=self.encoding)
        text = path.read_text(encoding=self.encoding)
        return self.ingest(text, source=str(path))


def ingest_text(text: str) -> RecordSet:
    """Parse CSV text with the default ingester."""
    return CsvIngester().ingest(text)


__all__ = ["CsvIngester", "ingest_text"]
