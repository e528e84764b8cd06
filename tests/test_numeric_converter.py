"""
Tests for processing/numeric_converter.py

Covers: plain and formatted prices, Brazilian decimal comma, thousands
separators, currency prefix, blank placeholders, rejection of negative /
non-finite / non-numeric values.
"""

import math

import pytest

from processing.numeric_converter import parse_price


# ═══════════════════════════════════════════════════════════════════════════
# parse_price
# ═══════════════════════════════════════════════════════════════════════════

class TestParsePrice:
    @pytest.mark.parametrize("raw, expected", [
        ("8.50", 8.5),
        ("8", 8.0),
        ("0", 0.0),
        ("12,90", 12.9),
        ("R$ 8,50", 8.5),
        ("r$9.99", 9.99),
        ("1.234,56", 1234.56),
        ("1,234.56", 1234.56),
        ("1.234.567", 1234567.0),
        ("  7.25  ", 7.25),
        ("R$ 15,00", 15.0),
    ])
    def test_formatted_strings(self, raw, expected):
        assert parse_price(raw) == pytest.approx(expected)

    def test_numbers_pass_through(self):
        assert parse_price(8) == 8.0
        assert parse_price(8.75) == 8.75

    @pytest.mark.parametrize("raw", ["", "   ", "N/A", "na", "-", "null", "None", "nan"])
    def test_placeholders_are_none(self, raw):
        assert parse_price(raw) is None

    def test_none_is_none(self):
        assert parse_price(None) is None

    @pytest.mark.parametrize("raw", ["abc", "12abc", "8.50.x", "R$", "1e"])
    def test_non_numeric_is_none(self, raw):
        assert parse_price(raw) is None

    def test_negative_is_none(self):
        assert parse_price("-3") is None
        assert parse_price(-3.0) is None

    def test_non_finite_is_none(self):
        assert parse_price(float("nan")) is None
        assert parse_price(math.inf) is None
        assert parse_price("inf") is None

    def test_bool_is_not_a_price(self):
        assert parse_price(True) is None
