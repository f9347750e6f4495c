"""Tests for the form-input checks."""
from __future__ import annotations

from decimal import Decimal

import pytest

from duka.app.core.errors import ValidationError
from duka.app.services.validation import (
    check_discount_percent,
    parse_optional_cost,
    parse_price,
    parse_quantity,
    require_text,
)


class TestRequireText:
    def test_strips(self):
        assert require_text("  Soap ", "name") == "Soap"

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_blank(self, value):
        with pytest.raises(ValidationError) as exc:
            require_text(value, "name")
        assert exc.value.key == "validation.required"
        assert exc.value.params == {"field": "name"}


class TestParsePrice:
    def test_valid(self):
        assert parse_price("2500") == Decimal("2500")
        assert parse_price(" 0.5 ") == Decimal("0.5")

    @pytest.mark.parametrize("raw", ["0", "-10", "abc", "", "NaN", "Infinity"])
    def test_rejected(self, raw):
        with pytest.raises(ValidationError) as exc:
            parse_price(raw)
        assert exc.value.key == "validation.invalid_price"

    def test_is_a_value_error(self):
        with pytest.raises(ValueError):
            parse_price("free")


class TestParseCost:
    def test_blank_is_none(self):
        assert parse_optional_cost(None) is None
        assert parse_optional_cost("  ") is None

    def test_zero_allowed(self):
        assert parse_optional_cost("0") == Decimal("0")

    def test_negative_rejected(self):
        with pytest.raises(ValidationError):
            parse_optional_cost("-1")


class TestParseQuantity:
    def test_valid(self):
        assert parse_quantity("12") == 12
        assert parse_quantity(0) == 0

    @pytest.mark.parametrize("raw", ["-1", "1.5", "ten", True])
    def test_rejected(self, raw):
        with pytest.raises(ValidationError) as exc:
            parse_quantity(raw)
        assert exc.value.key == "validation.invalid_quantity"


class TestDiscountPercent:
    def test_bounds(self):
        assert check_discount_percent(Decimal("0")) == Decimal("0")
        assert check_discount_percent(Decimal("99.5")) == Decimal("99.5")
        with pytest.raises(ValidationError):
            check_discount_percent(Decimal("100"))
