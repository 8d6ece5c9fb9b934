"""Tests for month key helpers."""

from datetime import date, datetime

import pytest

from components.core.exceptions import InvalidArgumentError
from components.core.months import (
    add_months,
    generate_month_range,
    get_current_month_key,
    get_month_date_range,
    get_month_key,
    get_next_month_key,
    get_previous_month_key,
    is_current_month,
    is_future_month,
    is_past_month,
    parse_month_key,
)


class TestMonthKeys:
    """Tests for parsing and formatting month keys."""

    def test_parse_valid_key(self):
        assert parse_month_key("2024-03") == date(2024, 3, 1)

    @pytest.mark.parametrize("key", ["2024-3", "2024-13", "2024-00", "24-03", "2024/03", "", "2024-03-01"])
    def test_parse_invalid_key(self, key):
        with pytest.raises(InvalidArgumentError):
            parse_month_key(key)

    def test_month_key_is_zero_padded(self):
        assert get_month_key(date(2024, 1, 31)) == "2024-01"
        assert get_current_month_key(date(2025, 11, 2)) == "2025-11"

    def test_next_and_previous_wrap_years(self):
        assert get_next_month_key("2024-12") == "2025-01"
        assert get_previous_month_key("2024-01") == "2023-12"

    def test_generate_month_range(self):
        assert generate_month_range("2024-11", "2025-02") == ["2024-11", "2024-12", "2025-01", "2025-02"]
        assert generate_month_range("2024-05", "2024-04") == []


class TestMonthRange:
    """Tests for calendar month boundaries."""

    def test_range_covers_whole_month(self):
        start, end = get_month_date_range("2024-02")
        assert start == datetime(2024, 2, 1, 0, 0, 0)
        assert end == datetime(2024, 2, 29, 23, 59, 59, 999999)

    def test_range_of_december(self):
        start, end = get_month_date_range("2023-12")
        assert start == datetime(2023, 12, 1)
        assert end == datetime(2023, 12, 31, 23, 59, 59, 999999)


class TestAddMonths:
    """Tests for shifting dates by months."""

    def test_day_is_clamped_to_month_end(self):
        assert add_months(datetime(2024, 1, 31, 10, 30), 1) == datetime(2024, 2, 29, 10, 30)
        assert add_months(datetime(2023, 1, 31), 1) == datetime(2023, 2, 28)

    def test_crosses_year_boundary(self):
        assert add_months(datetime(2024, 11, 15), 3) == datetime(2025, 2, 15)
        assert add_months(datetime(2024, 1, 15), -1) == datetime(2023, 12, 15)

    def test_zero_months(self):
        assert add_months(datetime(2024, 5, 5), 0) == datetime(2024, 5, 5)


class TestRelativeMonths:
    """Tests for past/current/future checks."""

    def test_relative_to_reference_date(self):
        now = datetime(2024, 6, 15, 12, 0)
        assert is_past_month("2024-05", now=now) is True
        assert is_past_month("2024-06", now=now) is False
        assert is_future_month("2024-07", now=now) is True
        assert is_future_month("2024-06", now=now) is False
        assert is_current_month("2024-06", today=now.date()) is True
        assert is_current_month("2024-07", today=now.date()) is False
