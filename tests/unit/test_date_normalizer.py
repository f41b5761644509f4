"""
Date Normalizer Tests
=====================

Tests for accepted date formats, canonical output and the unrecognized-date
policies.
"""

import logging
from datetime import datetime, timedelta, timezone

import pytest

from feedtree.config.settings import DatePolicy
from feedtree.ingestion.date_normalizer import (
    format_timestamp,
    normalize_date,
    parse_date,
)
from feedtree.utils.exceptions import ErrorCode, InvalidDateError


FIXED_NOW = datetime(2024, 5, 17, 8, 30, 15, 987654, tzinfo=timezone.utc)


class TestAcceptedFormats:
    """Test each accepted input format."""

    @pytest.mark.parametrize("raw, expected", [
        ("Mon, 02 Jan 2006 15:04:05 -0700", "2006-01-02T15:04:05-07:00"),
        ("Mon, 02 Jan 2006 15:04:05 +0000", "2006-01-02T15:04:05Z"),
        ("Mon, 02 Jan 2006 15:04:05 +0530", "2006-01-02T15:04:05+05:30"),
    ])
    def test_rfc1123_numeric_offset(self, raw, expected):
        assert normalize_date(raw) == expected

    @pytest.mark.parametrize("raw, expected", [
        ("Mon, 02 Jan 2006 15:04:05 GMT", "2006-01-02T15:04:05Z"),
        ("Mon, 02 Jan 2006 15:04:05 UTC", "2006-01-02T15:04:05Z"),
        ("Mon, 02 Jan 2006 15:04:05 MST", "2006-01-02T15:04:05-07:00"),
        ("Mon, 02 Jan 2006 15:04:05 EDT", "2006-01-02T15:04:05-04:00"),
    ])
    def test_rfc1123_named_zone(self, raw, expected):
        assert normalize_date(raw) == expected

    def test_unknown_zone_name_reads_as_utc(self):
        assert normalize_date("Mon, 02 Jan 2006 15:04:05 XYZ") == "2006-01-02T15:04:05Z"

    @pytest.mark.parametrize("raw, expected", [
        ("2006-01-02T15:04:05Z", "2006-01-02T15:04:05Z"),
        ("2006-01-02T15:04:05-07:00", "2006-01-02T15:04:05-07:00"),
        ("2006-01-02T15:04:05.5+02:00", "2006-01-02T15:04:05+02:00"),
        ("2006-01-02T15:04:05.123456789Z", "2006-01-02T15:04:05Z"),
    ])
    def test_rfc3339(self, raw, expected):
        assert normalize_date(raw) == expected

    def test_unpadded_day_gmt(self):
        assert normalize_date("Mon, 2 Jan 2006 15:04:05 GMT") == "2006-01-02T15:04:05Z"

    def test_surrounding_whitespace_ignored(self):
        assert normalize_date("  Mon, 02 Jan 2006 15:04:05 GMT \n") == "2006-01-02T15:04:05Z"

    def test_output_is_fixed_point(self):
        once = normalize_date("Mon, 02 Jan 2006 15:04:05 -0700")
        assert normalize_date(once) == once

    def test_parse_date_returns_aware_datetime(self):
        parsed = parse_date("Mon, 02 Jan 2006 15:04:05 -0700")
        assert parsed.utcoffset() == timedelta(hours=-7)

    def test_parse_date_unrecognized(self):
        assert parse_date("yesterday") is None
        assert parse_date("") is None


class TestFormatTimestamp:
    """Test canonical rendering."""

    def test_utc_uses_z(self):
        assert format_timestamp(datetime(2020, 1, 1, tzinfo=timezone.utc)) == "2020-01-01T00:00:00Z"

    def test_microseconds_dropped(self):
        assert format_timestamp(FIXED_NOW) == "2024-05-17T08:30:15Z"

    def test_offset_preserved(self):
        moment = datetime(2020, 1, 1, 12, tzinfo=timezone(timedelta(hours=9)))
        assert format_timestamp(moment) == "2020-01-01T12:00:00+09:00"


class TestUnrecognizedDatePolicies:
    """Test the fallback, fail and sentinel policies."""

    def test_fallback_uses_injected_now(self):
        assert normalize_date("not a date", now=lambda: FIXED_NOW) == "2024-05-17T08:30:15Z"

    def test_fallback_is_close_to_now(self):
        result = normalize_date("not a date")
        published = datetime.strptime(result, "%Y-%m-%dT%H:%M:%SZ").replace(tzinfo=timezone.utc)
        assert abs(datetime.now(timezone.utc) - published) < timedelta(minutes=1)

    def test_fallback_logs_warning(self, caplog):
        with caplog.at_level(logging.WARNING, logger="feedtree"):
            normalize_date("not a date", now=lambda: FIXED_NOW)

        assert any("not a date" in record.getMessage() for record in caplog.records)

    def test_empty_date_falls_back(self):
        assert normalize_date("", now=lambda: FIXED_NOW) == "2024-05-17T08:30:15Z"

    def test_fail_policy_raises(self):
        with pytest.raises(InvalidDateError) as exc_info:
            normalize_date("not a date", policy=DatePolicy.FAIL)

        error = exc_info.value
        assert error.error_code == ErrorCode.VALIDATION_INVALID_FORMAT
        assert error.context["raw_date"] == "not a date"
        assert error.context["field_name"] == "published"

    def test_fail_policy_accepts_valid_dates(self):
        assert normalize_date("2006-01-02T15:04:05Z", policy=DatePolicy.FAIL) == "2006-01-02T15:04:05Z"

    def test_sentinel_policy(self):
        assert normalize_date("not a date", policy=DatePolicy.SENTINEL) == ""
        assert normalize_date("not a date", policy=DatePolicy.SENTINEL, sentinel="unknown") == "unknown"
