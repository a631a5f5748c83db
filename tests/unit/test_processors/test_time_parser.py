"""
Unit tests for wall-clock time and duration parsing.
"""

from datetime import datetime, timedelta, timezone

import pytest

from diary_analyzer.processors.core.time_parser import (
    Duration,
    coerce_instant,
    find_duration,
    format_instant,
    local_time_to_utc,
    parse_time_string,
    parse_time_to_utc,
)


def utc(*args):
    return datetime(*args, tzinfo=timezone.utc)


class TestParseTimeString:
    """Test suite for the H[:MM][am|pm] grammar"""

    @pytest.mark.unit
    @pytest.mark.parametrize("text,expected", [
        ("9am", (9, 0)),
        ("9 am", (9, 0)),
        ("2:30pm", (14, 30)),
        ("12pm", (12, 0)),
        ("12am", (0, 0)),
        ("12:15 AM", (0, 15)),
        ("14:30", (14, 30)),
        ("0", (0, 0)),
        ("23:59", (23, 59)),
    ])
    def test_valid_times(self, text, expected):
        assert parse_time_string(text) == expected

    @pytest.mark.unit
    @pytest.mark.parametrize("text", ["13pm", "24", "25:00", "9:75", "noon", ""])
    def test_invalid_times_return_none(self, text):
        assert parse_time_string(text) is None


class TestLocalTimeToUtc:
    """Test suite for anchoring wall-clock times to the local day"""

    @pytest.mark.unit
    def test_negative_offset(self):
        anchor = utc(2026, 2, 2, 12, 0)

        assert local_time_to_utc(9, 0, anchor, -420) == utc(2026, 2, 2, 16, 0)

    @pytest.mark.unit
    def test_local_date_differs_from_utc_date(self):
        """03:00 UTC on Feb 3 is still Feb 2 at UTC-7"""
        anchor = utc(2026, 2, 3, 3, 0)

        assert local_time_to_utc(9, 0, anchor, -420) == utc(2026, 2, 2, 16, 0)

    @pytest.mark.unit
    def test_positive_offset_rolls_local_date_forward(self):
        """20:00 UTC on Feb 2 is already Feb 3 at UTC+10"""
        anchor = utc(2026, 2, 2, 20, 0)

        assert local_time_to_utc(9, 0, anchor, 600) == utc(2026, 2, 2, 23, 0)

    @pytest.mark.unit
    def test_zero_offset(self):
        assert local_time_to_utc(23, 30, utc(2026, 2, 2, 1, 0)) == utc(2026, 2, 2, 23, 30)

    @pytest.mark.unit
    def test_parse_time_to_utc_rejects_invalid(self):
        assert parse_time_to_utc("25", utc(2026, 2, 2, 12, 0)) is None
        assert parse_time_to_utc("5:30pm", utc(2026, 2, 2, 12, 0), 60) == utc(2026, 2, 2, 16, 30)

    @pytest.mark.unit
    def test_out_of_range_anchor_returns_none(self):
        assert local_time_to_utc(9, 0, utc(9999, 12, 31, 23, 0), 120) is None
        assert parse_time_to_utc("9am", utc(1, 1, 1, 1, 0), -420) is None

    @pytest.mark.unit
    @pytest.mark.parametrize("offset", [10 ** 10, -(10 ** 20)])
    def test_huge_offset_returns_none(self, offset):
        assert local_time_to_utc(9, 0, utc(2026, 2, 2, 12, 0), offset) is None


class TestFindDuration:
    """Test suite for duration phrases"""

    @pytest.mark.unit
    def test_for_hours(self):
        duration = find_duration("track meeting for 2 hours")

        assert duration.hours == 2.0
        assert duration.minutes == 0
        assert duration.as_timedelta() == timedelta(hours=2)

    @pytest.mark.unit
    def test_for_minutes(self):
        duration = find_duration("log break for 45 mins")

        assert duration.minutes == 45
        assert duration.as_timedelta() == timedelta(minutes=45)

    @pytest.mark.unit
    def test_decimal_hours_without_for(self):
        duration = find_duration("spent 1.5 hours coding")

        assert duration.as_timedelta() == timedelta(minutes=90)

    @pytest.mark.unit
    def test_short_units(self):
        assert find_duration("for 3h").hours == 3.0
        assert find_duration("for 20m").minutes == 20

    @pytest.mark.unit
    def test_no_duration(self):
        assert find_duration("log lunch") is None
        assert find_duration("log coding from 9am to 11am") is None

    @pytest.mark.unit
    def test_fractional_milliseconds_truncate(self):
        assert Duration(hours=1 / 3600000 * 0.5).as_timedelta() == timedelta(0)

    @pytest.mark.unit
    def test_huge_duration_overflows_timedelta(self):
        duration = find_duration("log nap for 999999999999999999999 hours")

        assert duration.matched_text == "for 999999999999999999999 hours"
        with pytest.raises(OverflowError):
            duration.as_timedelta()


class TestInstantHelpers:
    """Test suite for instant normalization and serialization"""

    @pytest.mark.unit
    def test_coerce_iso_string(self):
        assert coerce_instant("2026-02-02T10:00:00Z") == utc(2026, 2, 2, 10, 0)
        assert coerce_instant("2026-02-02T03:00:00-07:00") == utc(2026, 2, 2, 10, 0)

    @pytest.mark.unit
    def test_coerce_naive_datetime_is_utc(self):
        assert coerce_instant(datetime(2026, 2, 2, 10, 0)) == utc(2026, 2, 2, 10, 0)

    @pytest.mark.unit
    def test_coerce_invalid_values(self):
        assert coerce_instant(None) is None
        assert coerce_instant("yesterday-ish") is None
        assert coerce_instant(12345) is None

    @pytest.mark.unit
    def test_coerce_instant_beyond_utc_range(self):
        assert coerce_instant("9999-12-31T23:00:00-14:00") is None

    @pytest.mark.unit
    def test_format_instant(self):
        assert format_instant(utc(2026, 2, 2, 16, 0)) == "2026-02-02T16:00:00.000Z"
        assert format_instant(utc(2026, 2, 2, 16, 0, 5, 123456)) == "2026-02-02T16:00:05.123Z"
        assert format_instant(None) is None
