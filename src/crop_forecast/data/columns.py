"""Constants describing the column layouts recognized by the ingester."""

from attrs import define

DEFAULT_ITEM_NAME = "Gross Production Data"
UNKNOWN_ITEM_NAME = "Unknown Item"

# Any of these headers marks a statistical-agency long export.
LONG_FORMAT_MARKERS = frozenset({"domain code", "element code", "item code", "item"})

# Substring patterns for the simple layout, checked in order.
SIMPLE_YEAR_PATTERNS = ("year", "date", "time")
SIMPLE_VALUE_PATTERNS = ("value", "gross production")
SIMPLE_ITEM_PATTERNS = ("item", "product", "commodity")

LONG_YEAR_COLUMNS = ("year", "year code")
LONG_ELEMENT_COLUMN = "element"
LONG_ELEMENT_CODE_COLUMN = "element code"
LONG_VALUE_COLUMN = "value"
LONG_ITEM_COLUMN = "item"
LONG_ITEM_CODE_COLUMN = "item code"

PRODUCTION_PHRASE = "gross production"
PRODUCTION_KEYWORD = "production"
# Element code of "Gross Production Value (constant 2014-2016 thousand I$)".
PRODUCTION_ELEMENT_CODE = "152"


@define(frozen=True)
class ColumnRole:
    """Human-readable name of a semantic column used in error messages."""

    name: str
    description: str


YEAR_ROLE = ColumnRole("Year", "observation year or year code")
VALUE_ROLE = ColumnRole("Value", "numeric measurement")
ELEMENT_ROLE = ColumnRole("Element", "metric name or element code")
ITEM_ROLE = ColumnRole("Item", "commodity name or item code")
PRODUCTION_ROLE = ColumnRole("Gross Production Value", "value rows for the production element")


__all__ = [
    "DEFAULT_ITEM_NAME",
    "UNKNOWN_ITEM_NAME",
    "LONG_FORMAT_MARKERS",
    "SIMPLE_YEAR_PATTERNS",
    "SIMPLE_VALUE_PATTERNS",
    "SIMPLE_ITEM_PATTERNS",
    "LONG_YEAR_COLUMNS",
    "LONG_ELEMENT_COLUMN",
    "LONG_ELEMENT_CODE_COLUMN",
    "LONG_VALUE_COLUMN",
    "LONG_ITEM_COLUMN",
    "LONG_ITEM_CODE_COLUMN",
    "PRODUCTION_PHRASE",
    "PRODUCTION_KEYWORD",
    "PRODUCTION_ELEMENT_CODE",
    "ColumnRole",
    "YEAR_ROLE",
    "VALUE_ROLE",
    "ELEMENT_ROLE",
    "ITEM_ROLE",
    "PRODUCTION_ROLE",
]
