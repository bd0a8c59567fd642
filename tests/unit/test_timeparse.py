"""Unit tests for date and time reconstruction."""

from datetime import date, datetime, time, timedelta

import pytest

from rmv_transit_search.core.exceptions import ParseError
from rmv_transit_search.core.timeparse import (
    align_to_previous,
    ensure_not_before,
    join_date_time,
    parse_date,
    parse_time,
    roll_forward_past,
)


class TestParsing:
    """Test parsing of page dates and times."""

    def test_parse_short_year(self):
        """Test two-digit years."""
        assert parse_date("01.03.14") == date(2014, 3, 1)

    def test_parse_long_year(self):
        """Test four-digit years."""
        assert parse_date(" 01.03.2014 ") == date(2014, 3, 1)

    def test_parse_bad_date(self):
        """Test that a malformed date is a parse error."""
        with pytest.raises(ParseError):
            parse_date("2014-03-01")

    def test_parse_time(self):
        """Test clock times with and without leading zero."""
        assert parse_time("8:15") == time(8, 15)
        assert parse_time("23:50") == time(23, 50)

    def test_parse_bad_time(self):
        """Test that an impossible time is a parse error."""
        with pytest.raises(ParseError):
            parse_time("25:00")

    def test_join(self):
        """Test joining a date and a time."""
        assert join_date_time(date(2014, 3, 1), time(8, 15)) == datetime(2014, 3, 1, 8, 15)


class TestRollover:
    """Test the day rollover rules."""

    def test_board_late_evening(self):
        """Test that a board at 23:50 lists 00:10 on the next day."""
        reference = datetime(2014, 3, 1, 23, 50)
        result = roll_forward_past(datetime(2014, 3, 1, 0, 10), reference)
        assert result == datetime(2014, 3, 2, 0, 10)

    def test_board_just_after_midnight(self):
        """Test that a board at 00:10 lists 23:50 on the same day."""
        reference = datetime(2014, 3, 1, 0, 10)
        result = roll_forward_past(datetime(2014, 3, 1, 23, 50), reference)
        assert result == datetime(2014, 3, 1, 23, 50)

    def test_board_slightly_earlier(self):
        """Test that a departure a little before the board time stays put."""
        reference = datetime(2014, 3, 1, 8, 0)
        assert roll_forward_past(datetime(2014, 3, 1, 7, 58), reference) == datetime(
            2014, 3, 1, 7, 58
        )

    def test_custom_threshold(self):
        """Test that the threshold is configurable."""
        reference = datetime(2014, 3, 1, 8, 0)
        result = roll_forward_past(
            datetime(2014, 3, 1, 6, 0), reference, threshold=timedelta(hours=1)
        )
        assert result == datetime(2014, 3, 2, 6, 0)

    def test_align_forward(self):
        """Test that a list entry after midnight moves to the next day."""
        previous = datetime(2014, 3, 1, 23, 50)
        assert align_to_previous(datetime(2014, 3, 1, 0, 10), previous) == datetime(
            2014, 3, 2, 0, 10
        )

    def test_align_backward(self):
        """Test that a list entry before midnight moves to the previous day."""
        previous = datetime(2014, 3, 2, 0, 10)
        assert align_to_previous(datetime(2014, 3, 2, 23, 50), previous) == datetime(
            2014, 3, 1, 23, 50
        )

    def test_align_unchanged(self):
        """Test that nearby entries are left alone."""
        previous = datetime(2014, 3, 1, 8, 0)
        candidate = datetime(2014, 3, 1, 9, 30)
        assert align_to_previous(candidate, previous) == candidate

    def test_arrival_after_midnight(self):
        """Test that an arrival before its departure moves to the next day."""
        departure = datetime(2014, 3, 1, 23, 40)
        assert ensure_not_before(datetime(2014, 3, 1, 0, 5), departure) == datetime(
            2014, 3, 2, 0, 5
        )
        assert ensure_not_before(departure, departure) == departure
