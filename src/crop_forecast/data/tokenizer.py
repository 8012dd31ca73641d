"""Split raw comma-separated text into trimmed rows."""

import re
from collections.abc import Iterator

from ..errors import EmptyDataError

_INT_PREFIX = re.compile(r"^[+-]?\d+")
_FLOAT_PREFIX = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def iter_lines(text: str) -> Iterator[str]:
    """Yield the non-blank lines of ``text`` without line terminators."""
    for line in text.split("\n"):
        if line.strip() == "":
            continue
        yield line.rstrip("\r")


def split_fields(line: str) -> list[str]:
    """Split a single record on commas and trim every field."""
    return [field.strip() for field in line.split(",")]


def tokenize(text: str) -> list[list[str]]:
    """Return every non-blank line of ``text`` as a list of trimmed fields."""
    rows = [split_fields(line) for line in iter_lines(text)]
    if not rows:
        raise EmptyDataError("CSV file appears to be empty")
    return rows


def parse_int(raw: str) -> int | None:
    """Parse the leading integer of a field, returning None when there is none."""
    match = _INT_PREFIX.match(raw.strip())
    if match is None:
        return None
    return int(match.group(0))


def parse_float(raw: str) -> float | None:
    """Parse the leading decimal number of a field, returning None when there is none."""
    match = _FLOAT_PREFIX.match(raw.strip())
    if match is None:
        return None
    return float(match.group(0))


__all__ = ["iter_lines", "split_fields", "tokenize", "parse_int", "parse_float"]
