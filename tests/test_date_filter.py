"""
Tests for date range filtering.
"""
from datetime import date, datetime

import pytest

from submission_exporter.processors.date_filter import (
    end_of_day, filter_by_date_range, parse_filter_date, start_of_day
)

from conftest import make_submission


@pytest.fixture
def submissions():
    return [
        make_submission(1, "2024-03-09T23:59:59", {"A": "1"}),
        make_submission(2, "2024-03-10T00:00:00", {"A": "2"}),
        make_submission(3, "2024-03-10T23:59:00", {"A": "3"}),
        make_submission(4, "2024-03-11T00:00:01", {"A": "4"}),
        make_submission(5, "2024-02-01T08:00:00", {"A": "5"}),
    ]


class TestFilterByDateRange:
    """Test cases for filter_by_date_range."""

    def test_same_day_range_is_inclusive(self, submissions):
        result = filter_by_date_range(submissions, "2024-03-10", "2024-03-10")
        assert [s.id for s in result] == ["2", "3"]

    def test_unbounded_returns_everything_in_order(self, submissions):
        result = filter_by_date_range(submissions)
        assert [s.id for s in result] == ["1", "2", "3", "4", "5"]

    def test_start_only(self, submissions):
        result = filter_by_date_range(submissions, start_date="2024-03-10")
        assert [s.id for s in result] == ["2", "3", "4"]

    def test_end_only(self, submissions):
        result = filter_by_date_range(submissions, end_date=date(2024, 3, 9))
        assert [s.id for s in result] == ["1", "5"]

    def test_empty_strings_are_unbounded(self, submissions):
        assert len(filter_by_date_range(submissions, "", "")) == 5

    def test_datetime_bounds_use_calendar_day(self, submissions):
        result = filter_by_date_range(submissions, datetime(2024, 3, 10, 15, 0), datetime(2024, 3, 10, 1, 0))
        assert [s.id for s in result] == ["2", "3"]

    def test_empty_input(self):
        assert filter_by_date_range([], "2024-03-10", "2024-03-10") == ()

    def test_malformed_date_fails_fast(self, submissions):
        with pytest.raises(ValueError):
            filter_by_date_range(submissions, "10/03/2024")


class TestDayBounds:
    """Test cases for the day boundary helpers."""

    def test_start_of_day(self):
        assert start_of_day(date(2024, 3, 10)) == datetime(2024, 3, 10, 0, 0, 0)

    def test_end_of_day_millisecond(self):
        assert end_of_day(date(2024, 3, 10)) == datetime(2024, 3, 10, 23, 59, 59, 999000)

    def test_parse_filter_date(self):
        assert parse_filter_date(" 2024-03-10 ") == date(2024, 3, 10)
        assert parse_filter_date(None) is None
