"""Header classification: pick a reader and locate its semantic columns."""

from collections.abc import Iterable, Sequence

import structlog

from ..errors import SchemaError
from .columns import (
    ELEMENT_ROLE,
    LONG_ELEMENT_CODE_COLUMN,
    LONG_ELEMENT_COLUMN,
    LONG_FORMAT_MARKERS,
    LONG_ITEM_CODE_COLUMN,
    LONG_ITEM_COLUMN,
    LONG_VALUE_COLUMN,
    LONG_YEAR_COLUMNS,
    SIMPLE_ITEM_PATTERNS,
    SIMPLE_VALUE_PATTERNS,
    SIMPLE_YEAR_PATTERNS,
    VALUE_ROLE,
    YEAR_ROLE,
)
from .readers import LongFormatReader, Reader, SimpleFormatReader

logger = structlog.get_logger(__name__)


def normalize_header(fields: Iterable[str]) -> list[str]:
    """Trim and lower-case header names."""
    return [name.strip().lower() for name in fields]


def is_long_format(header: Sequence[str]) -> bool:
    """Return True when the header carries any statistical-agency marker column."""
    return any(name in LONG_FORMAT_MARKERS for name in header)


def _find_substring(
    header: Sequence[str],
    patterns: Iterable[str],
    *,
    exclude: Iterable[int | None] = (),
) -> int | None:
    """Return the first column whose name contains any of ``patterns``."""
    skip = {index for index in exclude if index is not None}
    patterns = tuple(patterns)
    for index, name in enumerate(header):
        if index in skip:
            continue
        if any(pattern in name for pattern in patterns):
            return index
    return None


def _find_exact(header: Sequence[str], *names: str) -> int | None:
    """Return the index of the first of ``names`` present in the header."""
    for name in names:
        if name in header:
            return header.index(name)
    return None


def _simple_reader(header: Sequence[str]) -> SimpleFormatReader:
    year_index = _find_substring(header, SIMPLE_YEAR_PATTERNS)
    value_index = _find_substring(header, SIMPLE_VALUE_PATTERNS, exclude=[year_index])
    missing = []
    if year_index is None:
        missing.append(YEAR_ROLE.name)
    if value_index is None:
        missing.append(VALUE_ROLE.name)
    if missing:
        raise SchemaError(missing, header)
    item_index = _find_substring(
        header, SIMPLE_ITEM_PATTERNS, exclude=[year_index, value_index]
    )
    return SimpleFormatReader(
        year_index=year_index, value_index=value_index, item_index=item_index
    )


def _long_reader(header: Sequence[str]) -> LongFormatReader:
    year_index = _find_exact(header, *LONG_YEAR_COLUMNS)
    element_index = _find_exact(header, LONG_ELEMENT_COLUMN)
    element_code_index = _find_exact(header, LONG_ELEMENT_CODE_COLUMN)
    value_index = _find_exact(header, LONG_VALUE_COLUMN)
    missing = []
    if year_index is None:
        missing.append(YEAR_ROLE.name)
    if element_index is None and element_code_index is None:
        missing.append(ELEMENT_ROLE.name)
    if value_index is None:
        missing.append(VALUE_ROLE.name)
    if missing:
        raise SchemaError(missing, header)
    return LongFormatReader(
        year_index=year_index,
        value_index=value_index,
        element_index=element_index,
        element_code_index=element_code_index,
        item_index=_find_exact(header, LONG_ITEM_COLUMN),
        item_code_index=_find_exact(header, LONG_ITEM_CODE_COLUMN),
    )


def classify_header(fields: Sequence[str]) -> Reader:
    """Choose the reader for a header row and resolve its column positions."""
    header = normalize_header(fields)
    if is_long_format(header):
        reader: Reader = _long_reader(header)
    else:
        reader = _simple_reader(header)
    logger.debug("headers.classified", format=reader.format_name, columns=header)
    return reader


__all__ = ["classify_header", "is_long_format", "normalize_header"]
