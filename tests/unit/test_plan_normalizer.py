"""Tests for persisted plan normalization."""

import json

import pytest
from decimal import Decimal
from structlog.testing import capture_logs

from txplan_app.data.plan_normalizer import PlanNormalizer
from txplan_app.plan.status import PlanStatus


@pytest.fixture
def normalizer(catalog, today):
    return PlanNormalizer(catalog=catalog, today=today)


class TestPlanNormalizer:
    """Test normalization of persisted plan payloads."""

    def test_full_plan(self, normalizer, persisted_plan):
        result = normalizer.normalize_plan(persisted_plan)

        assert result.success
        plan = result.normalized_plan
        assert plan["id"] == "65f0c0ffee"
        assert plan["status"] is PlanStatus.IN_PROGRESS
        assert plan["end_date"] == ""
        assert [i.category_id for i in plan["items"]] == ["2", "4"]
        assert plan["items"][0].total_cost == Decimal("3300.00")

    def test_id_fallbacks(self, normalizer):
        assert normalizer.normalize_plan({"treatmentPlanId": "tp-1"}).normalized_plan["id"] == "tp-1"
        assert normalizer.normalize_plan({"id": 42}).normalized_plan["id"] == "42"
        assert normalizer.normalize_plan({}).normalized_plan["id"] is None

    def test_defaults_for_missing_fields(self, normalizer):
        plan = normalizer.normalize_plan({"_id": "x"}).normalized_plan

        assert plan["name"] == ""
        assert plan["start_date"] == "2026-10-17"
        assert plan["status"] is PlanStatus.PENDING
        assert plan["notes"] == ""
        assert plan["items"] == []

    def test_timestamp_dates_truncated(self, normalizer):
        plan = normalizer.normalize_plan({
            "startDate": "2026-09-01T10:30:00.000Z",
            "endDate": "2026-12-31T00:00:00Z",
        }).normalized_plan
        assert plan["start_date"] == "2026-09-01"
        assert plan["end_date"] == "2026-12-31"

    def test_costs_as_json_string(self, normalizer, persisted_plan):
        persisted_plan["costs"] = json.dumps(persisted_plan["costs"])
        result = normalizer.normalize_plan(persisted_plan)
        assert result.success
        assert len(result.normalized_plan["items"]) == 2

    def test_invalid_costs_json(self, normalizer):
        result = normalizer.normalize_plan({"costs": "[not json"})
        assert not result.success
        assert "costs JSON" in result.error_msg

    def test_missing_category_id(self, normalizer):
        result = normalizer.normalize_plan({"costs": [{"baseCost": 100}]})
        assert not result.success
        assert "categoryId" in result.error_msg

    def test_missing_category_name_from_catalog(self, normalizer):
        plan = normalizer.normalize_plan({"costs": [{"categoryId": "14", "baseCost": 5000}]}).normalized_plan
        item = plan["items"][0]
        assert item.category_name == "Wisdom Tooth"
        assert item.quantity == 1
        assert item.material_cost == Decimal("0.00")

    def test_quantity_clamped(self, normalizer):
        plan = normalizer.normalize_plan({"costs": [{"categoryId": "1", "baseCost": 500, "quantity": 50}]})
        assert plan.normalized_plan["items"][0].quantity == 20

    def test_invalid_status(self, normalizer):
        result = normalizer.normalize_plan({"status": "archived"})
        assert not result.success
        assert "Invalid plan data" in result.error_msg

    def test_not_a_mapping(self, normalizer):
        assert not normalizer.normalize_plan(["plan"]).success

    def test_stored_total_mismatch_logged(self, normalizer, persisted_plan):
        persisted_plan["totalCost"] = 99999
        with capture_logs() as logs:
            result = normalizer.normalize_plan(persisted_plan)

        assert result.success
        warnings = [e for e in logs if e["log_level"] == "warning"]
        assert any("Stored plan total differs" in e["event"] for e in warnings)

    def test_consistent_plan_not_logged(self, normalizer, persisted_plan):
        with capture_logs() as logs:
            normalizer.normalize_plan(persisted_plan)
        assert [e for e in logs if e["log_level"] == "warning"] == []
