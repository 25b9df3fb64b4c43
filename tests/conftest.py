import os
import sys
from datetime import date

import pytest

# ensure workspace root is on sys.path so our application packages can be imported
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)


def seasonal_rows(pre_levels, post_levels, start_year=2020):
    """One March and one November reading per year, as raw caller records."""
    rows = []
    for offset, (pre, post) in enumerate(zip(pre_levels, post_levels)):
        year = start_year + offset
        rows.append({"date": date(year, 3, 15).isoformat(), "water_level": pre})
        rows.append({"date": date(year, 11, 15).isoformat(), "water_level": post})
    return rows


@pytest.fixture
def make_seasonal():
    return seasonal_rows


@pytest.fixture
def three_points():
    return [
        {"date": "2024-01-01", "water_level": 10.0},
        {"date": "2024-02-01", "water_level": 11.0},
        {"date": "2024-03-01", "water_level": 12.0},
    ]


@pytest.fixture
def seasonal_history():
    # pre-monsoon averages 12.5, post-monsoon 10.5, latest reading 11.0
    return seasonal_rows([12.0, 12.5, 13.0], [10.0, 10.5, 11.0])


@pytest.fixture
def long_history():
    """Twenty readings, two per year over ten years, with a steady decline."""
    rows = []
    for i in range(10):
        year = 2014 + i
        rows.append({"date": date(year, 4, 1).isoformat(), "water_level": 10.0 + 0.3 * i})
        rows.append({"date": date(year, 11, 1).isoformat(), "water_level": 8.0 + 0.3 * i})
    return rows
