"""Tests for shilling formatting and parsing."""
from __future__ import annotations

from decimal import Decimal

import pytest

from duka.app.services.currency import format_currency, parse_currency


class TestFormatCurrency:
    def test_thousands_separator_and_symbol(self):
        assert format_currency(1234567) == "TSh 1,234,567"

    def test_at_most_two_fraction_digits(self):
        assert format_currency(Decimal("1234.5")) == "TSh 1,234.5"
        assert format_currency(Decimal("1234.567")) == "TSh 1,234.57"

    def test_zero_fraction_digits_dropped(self):
        assert format_currency(Decimal("2500.00")) == "TSh 2,500"

    def test_negative_sign_in_front(self):
        assert format_currency(-1500) == "-TSh 1,500"

    def test_float_input(self):
        assert format_currency(0.1 + 0.2) == "TSh 0.3"

    def test_zero(self):
        assert format_currency(0) == "TSh 0"

    def test_custom_symbol(self):
        assert format_currency(5000, symbol="TZS") == "TZS 5,000"


class TestParseCurrency:
    @pytest.mark.parametrize("amount", [0, 2500, Decimal("1234.5"), Decimal("0.75"), 19875000])
    def test_parses_formatted_output(self, amount):
        assert parse_currency(format_currency(amount)) == Decimal(str(amount))

    def test_negative_amount(self):
        assert parse_currency(format_currency(-1500)) == Decimal("-1500")

    def test_no_numeric_content_is_nan(self):
        assert parse_currency("TSh").is_nan()
        assert parse_currency("").is_nan()

    def test_stray_characters_ignored(self):
        assert parse_currency("  TSh 5,400 /=") == Decimal("5400")
