from datetime import date

import pytest

from app.core.exceptions import InvalidArgumentError
from app.utils.months import (
    month_end,
    month_start,
    month_window,
    parse_day,
    previous_month,
)


def test_month_bounds():
    assert month_start("2024-02") == date(2024, 2, 1)
    assert month_end("2024-02") == date(2024, 2, 29)
    assert month_end("2023-02") == date(2023, 2, 28)
    assert month_end("2023-12") == date(2023, 12, 31)


def test_previous_month_wraps_years():
    assert previous_month("2023-01") == "2022-12"
    assert previous_month("2024-03") == "2024-02"


def test_month_window():
    assert month_window("2023-02", 3) == ["2022-12", "2023-01", "2023-02"]
    assert month_window("2023-02", 1) == ["2023-02"]
    assert month_window("2023-02", 0) == []


@pytest.mark.parametrize("value", ["2023-00", "2023-13", "23-01", "2023/01", "", None, "2023-1"])
def test_malformed_months_raise(value):
    with pytest.raises(InvalidArgumentError):
        month_start(value)


def test_window_validates_month_even_when_empty():
    with pytest.raises(InvalidArgumentError):
        month_window("nope", 0)


def test_parse_day():
    assert parse_day("2023-03-15") == date(2023, 3, 15)
    with pytest.raises(InvalidArgumentError):
        parse_day("2023-02-30")
