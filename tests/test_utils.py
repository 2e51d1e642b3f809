"""Tests for the date helpers."""
import datetime

import pytest

from core.errors import ValidationError
from core.utils import (
    format_date, parse_date, parse_datetime, pause_duration_days,
    strip_accents, validate_date_range,
)


class TestPauseDuration:

    def test_week_is_inclusive(self):
        assert pause_duration_days("2024-03-01", "2024-03-07") == 7

    def test_single_day(self):
        assert pause_duration_days("2024-03-01", "2024-03-01") == 1

    def test_dst_change_does_not_shift_the_count(self):
        # US and EU clocks change inside these windows
        assert pause_duration_days("2024-03-09", "2024-03-11") == 3
        assert pause_duration_days("2024-10-26", "2024-10-28") == 3

    def test_leap_day(self):
        assert pause_duration_days("2024-02-28", "2024-03-01") == 3

    def test_reversed(self):
        with pytest.raises(ValidationError):
            pause_duration_days("2024-01-10", "2024-01-09")

    @pytest.mark.parametrize("bad", ["", "2024/01/10", "2024-13-01", "yesterday"])
    def test_malformed(self, bad):
        with pytest.raises(ValidationError):
            pause_duration_days(bad, "2024-01-10")


class TestParsing:

    @pytest.mark.parametrize("value,expected", [
        ("2024-03-01", datetime.date(2024, 3, 1)),
        ("2024-03-01T23:10:00", datetime.date(2024, 3, 1)),
        (datetime.date(2024, 3, 1), datetime.date(2024, 3, 1)),
        (datetime.datetime(2024, 3, 1, 8, 0), datetime.date(2024, 3, 1)),
        ("", None),
        (None, None),
        ("not a date", None),
    ])
    def test_parse_date(self, value, expected):
        assert parse_date(value) == expected

    def test_parse_datetime_with_zulu(self):
        dt = parse_datetime("2024-03-01T10:00:00Z")
        assert dt.utcoffset() == datetime.timedelta(0)
        assert dt.hour == 10

    def test_parse_datetime_date_only(self):
        assert parse_datetime("2024-03-01") == datetime.datetime(2024, 3, 1)

    def test_format_date(self):
        assert format_date(datetime.date(2024, 3, 1)) == "2024-03-01"
        assert format_date(None) == "-"

    def test_validate_date_range(self):
        validate_date_range(None, "2024-01-01")
        validate_date_range("2024-01-01", "2024-01-01")
        with pytest.raises(ValidationError):
            validate_date_range("2024-01-02", "2024-01-01")

    def test_strip_accents(self):
        assert strip_accents("Al día, pagó") == "Al dia, pago"
