"""Tests for money and currency display helpers."""

import pytest
from decimal import Decimal

from txplan_app.data.models import CostLineItem
from txplan_app.utils.currency import format_cost_breakdown, format_currency, to_money


class TestToMoney:
    @pytest.mark.parametrize("raw,expected", [
        (1500, Decimal("1500.00")),
        ("0.005", Decimal("0.01")),
        (0.1 + 0.2, Decimal("0.30")),
        (Decimal("2.675"), Decimal("2.68")),
    ])
    def test_half_up(self, raw, expected):
        assert to_money(raw) == expected
        assert to_money(raw).as_tuple().exponent == -2


class TestFormatCurrency:
    @pytest.mark.parametrize("amount,expected", [
        (0, "₹0"),
        (500, "₹500"),
        (1500, "₹1,500"),
        (100000, "₹1,00,000"),
        (12345678, "₹1,23,45,678"),
        (Decimal("1500.50"), "₹1,500.5"),
        (Decimal("99.99"), "₹99.99"),
        (-2500, "-₹2,500"),
    ])
    def test_default_decimals(self, amount, expected):
        assert format_currency(amount) == expected

    def test_fixed_decimals(self):
        assert format_currency(1500, decimals=2) == "₹1,500.00"
        assert format_currency(Decimal("1500.75"), decimals=0) == "₹1,501"

    def test_custom_symbol(self):
        assert format_currency(1000, symbol="Rs. ") == "Rs. 1,000"


class TestCostBreakdown:
    def test_breakdown(self):
        item = CostLineItem("2", "Filling", Decimal("1500.00"), quantity=3, material_cost=Decimal("200.00"))
        assert format_cost_breakdown(item) == "₹1,500 × 3 + ₹200"
