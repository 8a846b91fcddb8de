"""
Tests for casting utilities.
"""

import math
from datetime import date, datetime

import pytest

from spreadsheet_csv.casting import (
    get_typed_value,
    number_or_text,
    safe_text,
    to_boolean,
    to_number,
)
from spreadsheet_csv.temporal import PatternDateTimeFormat


def test_safe_text():
    assert safe_text(None) is None
    assert safe_text("   ") is None
    assert safe_text("  abc ") == "abc"
    assert safe_text(12) == "12"


@pytest.mark.parametrize("value,expected", [
    ("true", True), ("T", True), ("y", True), ("YES", True), ("On", True), ("1", True),
    ("false", False), ("f", False), ("N", False), ("no", False), ("OFF", False), ("0", False),
    ("maybe", None), ("", None), ("2", None),
])
def test_to_boolean(value, expected):
    assert to_boolean(value) is expected


class TestToNumber:
    """Decimal double literal parsing."""

    @pytest.mark.parametrize("value,expected", [
        ("1", 1.0),
        ("-1", -1.0),
        ("+2.5", 2.5),
        (".5", 0.5),
        ("5.", 5.0),
        ("1e3", 1000.0),
        ("1.5E-2", 0.015),
        ("2f", 2.0),
        ("3.5D", 3.5),
        ("  42  ", 42.0),
        ("Infinity", math.inf),
        ("-Infinity", -math.inf),
    ])
    def test_numbers(self, value, expected):
        assert to_number(value) == expected

    def test_nan(self):
        assert math.isnan(to_number("NaN"))

    @pytest.mark.parametrize("value", [
        "", "abc", "1.2.3", "1_000", "inf", "nan", "0x10", "1e", "--1", "1 2",
    ])
    def test_not_numbers(self, value):
        assert to_number(value) is None


def test_number_or_text():
    assert number_or_text("12") == 12.0
    assert number_or_text("12 apples") == "12 apples"


class TestGetTypedValue:
    """Inference order for unquoted tokens."""

    def test_blank_is_none(self):
        assert get_typed_value(None) is None
        assert get_typed_value("  ") is None

    def test_single_characters_use_legacy_mapping(self):
        # Not the same as the word table
        assert get_typed_value("0") is True
        assert get_typed_value("1") is False

    @pytest.mark.parametrize("value,expected", [
        ("yes", True), ("t", True), ("Off", False), ("n", False),
    ])
    def test_boolean_words(self, value, expected):
        assert get_typed_value(value) is expected

    def test_iso_temporals(self):
        assert get_typed_value("2014-01-01") == date(2014, 1, 1)
        assert get_typed_value("2014-01-01T10:44") == datetime(2014, 1, 1, 10, 44)

    def test_custom_formatter(self):
        fmt = PatternDateTimeFormat("%d.%m.%Y")
        assert get_typed_value("21.09.2014", fmt) == date(2014, 9, 21)
        assert get_typed_value("2014-01-01", fmt) == "2014-01-01"

    def test_text_is_trimmed(self):
        assert get_typed_value("  hello ") == "hello"

    def test_numbers_are_not_inferred(self):
        assert get_typed_value("42") == "42"
