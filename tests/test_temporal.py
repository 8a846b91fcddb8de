"""
Tests for date/time formats.
"""

from datetime import date, datetime, timedelta, timezone

import pytest

from spreadsheet_csv.temporal import (
    DEFAULT_DATE_TIME,
    ISO_LOCAL_DATE,
    ISO_LOCAL_DATE_TIME,
    DateTimeFormat,
    PatternDateTimeFormat,
    resolve_formatter,
)


class TestDefaultFormat:
    """The ISO date/time format used when none is configured."""

    @pytest.mark.parametrize("text,expected", [
        ("2014-01-01", date(2014, 1, 1)),
        ("2014-01-01T", date(2014, 1, 1)),
        ("2014-01-01T10:44", datetime(2014, 1, 1, 10, 44)),
        ("2014-01-01t10:44", datetime(2014, 1, 1, 10, 44)),
        ("2014-01-01 10:44:05", datetime(2014, 1, 1, 10, 44, 5)),
        ("2014-01-01T10:44:05.5", datetime(2014, 1, 1, 10, 44, 5, 500000)),
        ("2014-01-01T10:44:05.123456789", datetime(2014, 1, 1, 10, 44, 5, 123456)),
    ])
    def test_local_values(self, text, expected):
        result = DEFAULT_DATE_TIME.parse(text)
        assert result == expected
        assert type(result) is type(expected)

    def test_utc(self):
        result = DEFAULT_DATE_TIME.parse("2014-01-01T10:44Z")
        assert result == datetime(2014, 1, 1, 10, 44, tzinfo=timezone.utc)

    @pytest.mark.parametrize("text,offset", [
        ("2014-01-01T10:44+10:00", timedelta(hours=10)),
        ("2014-01-01T10:44:00-05:30", -timedelta(hours=5, minutes=30)),
        ("2014-01-01T10:44:00+01:00:30", timedelta(hours=1, seconds=30)),
    ])
    def test_offsets(self, text, offset):
        assert DEFAULT_DATE_TIME.parse(text).utcoffset() == offset

    @pytest.mark.parametrize("text", [
        "2014-13-01",
        "2014-01-99",
        "2014-01-01T25:00",
        "10:44",
        "14-01-01",
        "2014-01-01T10",
        "2014/01/01",
        "",
    ])
    def test_no_match(self, text):
        assert DEFAULT_DATE_TIME.parse(text) is None


def test_iso_local_date():
    assert ISO_LOCAL_DATE.parse("2014-02-03") == date(2014, 2, 3)
    assert ISO_LOCAL_DATE.parse("2014-02-03T04:05") is None


def test_iso_local_date_time():
    assert ISO_LOCAL_DATE_TIME.parse("2014-02-03T04:05") == datetime(2014, 2, 3, 4, 5)
    assert ISO_LOCAL_DATE_TIME.parse("2014-02-03") is None
    assert ISO_LOCAL_DATE_TIME.parse("2014-02-03T04:05Z") is None


class TestPatternFormat:
    """strptime-backed formats."""

    def test_date_only(self):
        fmt = PatternDateTimeFormat("%d/%m/%y")
        assert fmt.parse("21/09/14") == date(2014, 9, 21)
        assert type(fmt.parse("21/09/14")) is date

    def test_date_and_time(self):
        fmt = PatternDateTimeFormat("%d/%m/%Y %H:%M")
        assert fmt.parse("21/09/2014 08:30") == datetime(2014, 9, 21, 8, 30)

    def test_zoned(self):
        fmt = PatternDateTimeFormat("%Y-%m-%dT%H:%M%z")
        result = fmt.parse("2014-01-01T10:44+0200")
        assert result.utcoffset() == timedelta(hours=2)

    def test_time_only_never_matches(self):
        assert PatternDateTimeFormat("%H:%M").parse("10:44") is None

    def test_mismatch(self):
        assert PatternDateTimeFormat("%d/%m/%y").parse("2014-01-01") is None

    def test_empty_pattern(self):
        with pytest.raises(ValueError):
            PatternDateTimeFormat("")


class TestResolveFormatter:
    def test_none_is_default(self):
        assert resolve_formatter(None) is DEFAULT_DATE_TIME

    def test_format_passes_through(self):
        fmt = PatternDateTimeFormat("%Y")
        assert resolve_formatter(fmt) is fmt

    def test_pattern(self):
        fmt = resolve_formatter("%d/%m/%y")
        assert isinstance(fmt, PatternDateTimeFormat)
        assert fmt.pattern == "%d/%m/%y"

    def test_wrong_type(self):
        with pytest.raises(TypeError):
            resolve_formatter(42)


def test_base_format_is_abstract():
    with pytest.raises(NotImplementedError):
        DateTimeFormat().parse("2014-01-01")
