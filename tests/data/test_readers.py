"""Unit tests for the simple and long format readers."""

import pytest

from crop_forecast.data.columns import DEFAULT_ITEM_NAME, UNKNOWN_ITEM_NAME
from crop_forecast.data.readers import LongFormatReader, SimpleFormatReader, is_production_metric
from crop_forecast.errors import EmptyDataError


def test_simple_reader_skips_unparseable_and_short_rows():
    """Bad rows are dropped without failing the whole read."""
    reader = SimpleFormatReader(year_index=0, value_index=2)
    rows = [
        ["2020", "x", "100"],
        ["n/a", "x", "110"],
        ["2021", "x", "--"],
        ["2022", "x"],
        ["2023", "x", "130"],
    ]
    record_set = reader.read(rows)
    assert [(r.year, r.value) for r in record_set.records] == [(2020, 100.0), (2023, 130.0)]
    assert record_set.items == {DEFAULT_ITEM_NAME}


def test_simple_reader_uses_item_column():
    """Item names come from the item column, blanks fall back to the default."""
    reader = SimpleFormatReader(year_index=0, value_index=1, item_index=2)
    record_set = reader.read([["2020", "1", " Rice "], ["2020", "2", ""], ["2021", "3"]])
    assert [r.item for r in record_set.records] == ["Rice", DEFAULT_ITEM_NAME, DEFAULT_ITEM_NAME]
    assert record_set.items == {"Rice", DEFAULT_ITEM_NAME}


def test_simple_reader_keeps_same_year_duplicates():
    """Same-year rows stay separate records in input order."""
    reader = SimpleFormatReader(year_index=0, value_index=1)
    record_set = reader.read([["2021", "110"], ["2020", "100"], ["2021", "120"]])
    assert [(r.year, r.value) for r in record_set.records] == [
        (2020, 100.0),
        (2021, 110.0),
        (2021, 120.0),
    ]


def test_simple_reader_no_valid_rows():
    """Zero parsed rows escalate to EmptyDataError."""
    reader = SimpleFormatReader(year_index=0, value_index=1)
    with pytest.raises(EmptyDataError):
        reader.read([["year?", "value?"]])


@pytest.mark.parametrize(
    "element, code, expected",
    [
        ("Gross Production Value (constant 2014-2016 thousand I$)", "152", True),
        ("GROSS PRODUCTION value", None, True),
        (None, "152", True),
        ("Production", "5510", True),
        ("Area harvested", "5312", False),
        ("Yield", None, False),
        (None, None, False),
    ],
)
def test_is_production_metric(element, code, expected):
    """Phrase, numeric code or keyword each qualify a row."""
    assert is_production_metric(element, code) is expected


def _long_reader(**overrides):
    columns = {
        "year_index": 2,
        "value_index": 3,
        "element_index": 1,
        "item_index": 0,
    }
    columns.update(overrides)
    return LongFormatReader(**columns)


def test_long_reader_keeps_only_production_rows():
    """Non-production metrics never contribute records."""
    rows = [
        ["Rice", "Area harvested", "2020", "4700000"],
        ["Rice", "Gross Production Value", "2020", "9000"],
        ["Maize", "Yield", "2020", "30000"],
        ["Maize", "Gross Production Value", "2020", "3000"],
        ["Maize", "Gross Production Value", "2019", "2900"],
    ]
    record_set = _long_reader().read(rows)
    assert record_set.items == {"Rice", "Maize"}
    assert [(r.item, r.year, r.value) for r in record_set.records] == [
        ("Maize", 2019, 2900.0),
        ("Rice", 2020, 9000.0),
        ("Maize", 2020, 3000.0),
    ]


def test_long_reader_last_duplicate_wins():
    """Repeated (item, year) production rows overwrite earlier values."""
    rows = [
        ["Rice", "Gross Production Value", "2020", "1"],
        ["Rice", "Gross Production Value", "2020", "2"],
    ]
    record_set = _long_reader().read(rows)
    assert len(record_set) == 1
    assert record_set.records[0].value == 2.0


def test_long_reader_item_fallbacks():
    """Item code stands in for a blank item, the sentinel for both blank."""
    reader = _long_reader(item_code_index=4)
    rows = [
        ["", "Gross Production Value", "2020", "5", "27"],
        ["", "Gross Production Value", "2020", "6", ""],
    ]
    record_set = reader.read(rows)
    assert record_set.items == {"27", UNKNOWN_ITEM_NAME}


def test_long_reader_without_item_columns():
    """Files without item columns collapse into the sentinel item."""
    reader = LongFormatReader(year_index=0, value_index=2, element_code_index=1)
    record_set = reader.read([["2020", "152", "10"], ["2021", "152", "11"]])
    assert record_set.items == {UNKNOWN_ITEM_NAME}
    assert len(record_set) == 2


def test_long_reader_skips_short_and_unparseable_rows():
    """Short rows and bad years or values are skipped."""
    rows = [
        ["Rice", "Gross Production Value", "2020"],
        ["Rice", "Gross Production Value", "year", "1"],
        ["Rice", "Gross Production Value", "2021", "n/a"],
        ["Rice", "Gross Production Value", "2022", "7"],
    ]
    record_set = _long_reader().read(rows)
    assert [(r.year, r.value) for r in record_set.records] == [(2022, 7.0)]


def test_long_reader_no_production_rows():
    """The error names the conceptual columns the file must provide."""
    with pytest.raises(EmptyDataError) as excinfo:
        _long_reader().read([["Rice", "Area harvested", "2020", "1"]])
    message = str(excinfo.value)
    assert "Year" in message
    assert "Item" in message
    assert "Gross Production Value" in message


def test_long_reader_requires_element_column():
    """A reader without any element column cannot be built."""
    with pytest.raises(ValueError):
        LongFormatReader(year_index=0, value_index=1)
