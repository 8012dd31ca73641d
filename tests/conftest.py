"""Global test configuration and fixtures."""

import pytest

from crop_forecast.data.models import Record

SIMPLE_CSV = """Year,Area harvested,Yield,Gross Production
2010,4528811,3621,16389850
2011,4536640,3681,16684062
2012,4690093,3837,17989143
2013,4746082,3885,18439156
2014,4739672,3969,18805883
"""

LONG_CSV = """Domain Code,Domain,Area,Element Code,Element,Item Code,Item,Year Code,Year,Unit,Value
QV,Value of Production,Philippines,5312,Area harvested,27,Rice,2018,2018,ha,4800143
QV,Value of Production,Philippines,152,Gross Production Value (constant 2014-2016 thousand I$),27,Rice,2018,2018,1000 Int$,9100
QV,Value of Production,Philippines,152,Gross Production Value (constant 2014-2016 thousand I$),27,Rice,2019,2019,1000 Int$,9200
QV,Value of Production,Philippines,5312,Area harvested,56,Maize,2018,2018,ha,2500000
QV,Value of Production,Philippines,152,Gross Production Value (constant 2014-2016 thousand I$),56,Maize,2018,2018,1000 Int$,3100
QV,Value of Production,Philippines,152,Gross Production Value (constant 2014-2016 thousand I$),56,Maize,2019,2019,1000 Int$,3300
"""


@pytest.fixture
def simple_csv() -> str:
    """Four-column export with a gross production column."""
    return SIMPLE_CSV


@pytest.fixture
def long_csv() -> str:
    """Agency long export covering two items and two metrics."""
    return LONG_CSV


@pytest.fixture
def linear_series() -> list[Record]:
    """Perfectly linear series: value = 100 + 10 * (year - 2010)."""
    return [Record(year=year, value=100 + 10 * (year - 2010), item="Rice") for year in range(2010, 2015)]


@pytest.fixture
def noisy_series() -> list[Record]:
    """Growing series with residual noise."""
    values = [16389850, 16684062, 17989143, 18439156, 18805883, 18149838, 18063283, 19276347]
    return [Record(year=2010 + offset, value=value, item="Rice") for offset, value in enumerate(values)]


@pytest.fixture
def declining_series() -> list[Record]:
    """Series falling fast enough for the extrapolation to cross zero."""
    values = [100, 70, 40, 12, 5]
    return [Record(year=2010 + offset, value=value, item="Rice") for offset, value in enumerate(values)]


@pytest.fixture
def write_csv(tmp_path):
    """Write CSV text into a temporary file and return its path."""

    def _write(text: str, name: str = "data.csv"):
        path = tmp_path / name
        path.write_text(text)
        return path

    return _write
