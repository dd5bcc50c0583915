"""Tests for EXIF date normalization and display formatting."""

from datetime import datetime, timezone

import pytest

from core.services.date_service import format_date, normalize_exif_date, parse_date, render_date


class TestNormalize:
    def test_exif_date_time(self):
        assert normalize_exif_date("2024:01:05 15:45:00") == "2024-01-05 15:45:00"

    def test_date_only(self):
        assert normalize_exif_date("2024:01:05") == "2024-01-05"

    def test_only_leading_date_is_rewritten(self):
        assert normalize_exif_date("2024:01:05 15:45:00+02:00") == "2024-01-05 15:45:00+02:00"

    def test_trailing_z_becomes_utc_offset(self):
        assert normalize_exif_date("2024:01:05 15:45:00Z") == "2024-01-05 15:45:00+00:00"

    def test_iso_untouched(self):
        assert normalize_exif_date("2024-01-05T15:45:00") == "2024-01-05T15:45:00"


class TestParseDate:
    def test_success(self):
        result = parse_date(" 2024:01:05 15:45:00 ")
        assert result.ok
        assert result.value == datetime(2024, 1, 5, 15, 45)

    def test_utc_suffix(self):
        result = parse_date("2024-01-05T15:45:00Z")
        assert result.ok
        assert result.value == datetime(2024, 1, 5, 15, 45, tzinfo=timezone.utc)

    def test_failure(self):
        result = parse_date("not a date")
        assert not result.ok
        assert result.failure.reason


class TestRenderDate:
    @pytest.mark.parametrize(
        "dt,expected",
        [
            (datetime(2024, 1, 5, 15, 45), "Jan 5, 2024, 3:45 PM"),
            (datetime(2023, 12, 31, 0, 7), "Dec 31, 2023, 12:07 AM"),
            (datetime(2022, 6, 1, 12, 0), "Jun 1, 2022, 12:00 PM"),
            (datetime(2021, 9, 15, 9, 30, 59), "Sep 15, 2021, 9:30 AM"),
        ],
    )
    def test_long_form(self, dt, expected):
        assert render_date(dt) == expected


class TestFormatDate:
    def test_exif_format(self):
        assert format_date("2024:01:05 15:45:00") == "Jan 5, 2024, 3:45 PM"

    def test_iso_format(self):
        assert format_date("2024-02-10T09:05:00") == "Feb 10, 2024, 9:05 AM"

    def test_date_only_is_midnight(self):
        assert format_date("2024:01:05") == "Jan 5, 2024, 12:00 AM"

    @pytest.mark.parametrize("raw", [None, "", 0])
    def test_empty(self, raw):
        assert format_date(raw) is None

    @pytest.mark.parametrize("raw", ["garbage", "0000:00:00 00:00:00", "2024:13:45 99:99:99"])
    def test_malformed_returns_input(self, raw):
        assert format_date(raw) == raw

    def test_malformed_non_string_returned_unchanged(self):
        raw = ["2024"]
        assert format_date(raw) is raw

    @pytest.mark.parametrize("raw", ["garbage", "    ", "2024:99:01", "Jan 5, 2024, 3:45 PM"])
    def test_fallback_is_fixed_point(self, raw):
        assert format_date(format_date(raw)) == raw
