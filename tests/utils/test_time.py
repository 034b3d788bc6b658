"""Tests for date and identifier helpers."""

import re

import pytest
from datetime import date, datetime

from txplan_app.errors import MalformedDataError
from txplan_app.utils.time import generate_plan_id, normalize_iso_date, today_iso


class TestDates:
    def test_today_iso(self):
        assert today_iso(date(2026, 10, 17)) == "2026-10-17"
        assert re.fullmatch(r"\d{4}-\d{2}-\d{2}", today_iso())

    @pytest.mark.parametrize("raw,expected", [
        ("2026-09-01", "2026-09-01"),
        (" 2026-09-01 ", "2026-09-01"),
        ("2026-09-01T18:30:00.000Z", "2026-09-01"),
        (date(2026, 1, 2), "2026-01-02"),
        (datetime(2026, 1, 2, 23, 59), "2026-01-02"),
    ])
    def test_normalize(self, raw, expected):
        assert normalize_iso_date(raw) == expected

    def test_empty_allowed(self):
        assert normalize_iso_date(None, allow_empty=True) == ""
        assert normalize_iso_date("  ", allow_empty=True) == ""

    @pytest.mark.parametrize("raw", ["", None, "2026-13-01", "next tuesday"])
    def test_invalid(self, raw):
        with pytest.raises(MalformedDataError):
            normalize_iso_date(raw)


class TestPlanIds:
    def test_format(self):
        plan_id = generate_plan_id(now_ms=1760659200000)
        assert re.fullmatch(r"plan_1760659200000_[0-9a-f]{8}", plan_id)

    def test_unique_within_same_millisecond(self):
        ids = {generate_plan_id(now_ms=1) for _ in range(50)}
        assert len(ids) == 50

    def test_prefix(self):
        assert generate_plan_id(prefix="tp-").startswith("tp-")
