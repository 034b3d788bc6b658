"""Tests for forgiving numeric input parsing."""

import pytest
from decimal import Decimal

from txplan_app.data.parsers import (
    parse_amount, parse_quantity, parse_text, parse_doctor_ids
)
from txplan_app.errors import MalformedDataError, MissingDataError


class TestParseAmount:
    """Test money amount coercion."""

    @pytest.mark.parametrize("raw,expected", [
        (1500, Decimal("1500.00")),
        (1500.5, Decimal("1500.50")),
        ("200", Decimal("200.00")),
        ("  12.345", Decimal("12.35")),
        ("12abc", Decimal("12.00")),
        (".5", Decimal("0.50")),
        (Decimal("99.999"), Decimal("100.00")),
    ])
    def test_numeric_input(self, raw, expected):
        assert parse_amount(raw) == expected

    @pytest.mark.parametrize("raw", ["", "abc", None, "-", float("nan"), float("inf"), True, [1]])
    def test_non_numeric_coerced_to_zero(self, raw):
        assert parse_amount(raw) == Decimal("0.00")

    def test_negative_coerced_to_zero(self):
        assert parse_amount(-250) == Decimal("0.00")
        assert parse_amount("-5") == Decimal("0.00")

    def test_strict_rejects_trailing_text(self):
        with pytest.raises(MalformedDataError):
            parse_amount("12abc", strict=True)
        assert parse_amount(" 12.5 ", strict=True) == Decimal("12.50")

    def test_places(self):
        assert parse_amount("10.555", places=0) == Decimal("11")


class TestParseQuantity:
    """Test quantity truncation and clamping."""

    @pytest.mark.parametrize("raw,expected", [
        (3, 3),
        ("7", 7),
        (3.9, 3),
        ("4 units", 4),
        (0, 1),
        (-3, 1),
        (25, 20),
        ("999", 20),
        ("abc", 1),
        (None, 1),
    ])
    def test_clamped(self, raw, expected):
        assert parse_quantity(raw) == expected

    @pytest.mark.parametrize("raw,expected", [
        ("1e2000000", 20),
        ("-1e2000000", 1),
        ("1e-2000000", 1),
        (Decimal("9E+999999"), 20),
    ])
    def test_huge_exponent_clamped(self, raw, expected):
        assert parse_quantity(raw) == expected

    def test_custom_bounds(self):
        assert parse_quantity(12, min_quantity=2, max_quantity=10) == 10
        assert parse_quantity("x", min_quantity=2, max_quantity=10) == 2


class TestParseText:
    def test_none_becomes_empty(self):
        assert parse_text(None) == ""
        assert parse_text("Tooth #12") == "Tooth #12"


class TestParseDoctorIds:
    """Test assigned doctor reference parsing."""

    def test_ids_and_records(self):
        assert parse_doctor_ids(["d1", {"_id": "d2"}, {"id": 3}]) == ("d1", "d2", "3")

    def test_empty(self):
        assert parse_doctor_ids(None) == ()
        assert parse_doctor_ids([]) == ()

    def test_string_rejected(self):
        with pytest.raises(MalformedDataError):
            parse_doctor_ids("d1")

    def test_record_without_id(self):
        with pytest.raises(MissingDataError):
            parse_doctor_ids([{"name": "Dr. Rao"}])
