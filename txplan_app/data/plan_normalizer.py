"""
Persisted plan normalization for the editing flow.

This module converts a treatment plan as returned by the persistence service
(camelCase keys, optional fields, serialized cost rows) into the canonical
fields a PlanDraft is built from. Stored totals and the stored selected
category list are never trusted: both are derived again from the cost rows.
"""

import json
from dataclasses import dataclass
from datetime import date
from typing import Any, Optional

import structlog

from ..config.defaults import LedgerParams, PlanParams
from ..errors import DataQualityError
from ..plan.status import PlanStatus
from ..utils.currency import ZERO
from ..utils.time import normalize_iso_date, today_iso
from .catalog import CategoryCatalog
from .models import CostLineItem
from .parsers import parse_amount, parse_doctor_ids, parse_quantity, parse_text

logger = structlog.get_logger(__name__)


@dataclass
class PlanNormalizationResult:
    """Result of plan normalization process."""
    normalized_plan: Optional[dict[str, Any]] = None
    success: bool = True
    error_msg: Optional[str] = None

    @classmethod
    def success_with(cls, normalized_plan: dict[str, Any]):
        """Create successful result with normalized plan."""
        return cls(
            normalized_plan=normalized_plan,
            success=True
        )

    @classmethod
    def error(cls, error_msg: str):
        """Create error result."""
        return cls(
            success=False,
            error_msg=error_msg
        )


class PlanNormalizer:
    """
    Persisted plan normalization pipeline.

    Handles JSON-encoded cost rows, identifier fallbacks, defaults for
    missing fields and re-derivation of totals.
    """

    def __init__(
        self,
        catalog: Optional[CategoryCatalog] = None,
        ledger_params: Optional[LedgerParams] = None,
        plan_params: Optional[PlanParams] = None,
        today: Optional[date] = None
    ):
        """
        Initialize plan normalizer.

        Args:
            catalog: Catalog used to fill in missing category names
            ledger_params: Quantity bounds and money precision
            plan_params: Default status
            today: Date used as the default start date
        """
        self.catalog = catalog
        self.ledger_params = ledger_params or LedgerParams()
        self.plan_params = plan_params or PlanParams()
        self.today = today
        self.logger = logger

    def normalize_plan(self, plan_data: dict[str, Any]) -> PlanNormalizationResult:
        """
        Normalize a persisted plan into canonical draft fields.

        The normalized dict carries: id, name, start_date, end_date, status,
        notes, doctors (a tuple of ids) and items (a list of CostLineItem).

        Args:
            plan_data: Raw plan data dictionary

        Returns:
            PlanNormalizationResult with normalized data or error information
        """
        if not isinstance(plan_data, dict):
            return PlanNormalizationResult.error(
                f"Plan must be a mapping, got {type(plan_data).__name__}"
            )

        try:
            plan_id = self._first_present(plan_data, ("_id", "treatmentPlanId", "id"))

            costs = plan_data.get("costs") or []
            if isinstance(costs, str):
                try:
                    costs = json.loads(costs)
                except (json.JSONDecodeError, TypeError) as e:
                    return PlanNormalizationResult.error(f"Failed to parse costs JSON: {e}")
            if not isinstance(costs, list):
                return PlanNormalizationResult.error("costs must be a list")

            items = []
            for i, cost in enumerate(costs):
                if not isinstance(cost, dict):
                    return PlanNormalizationResult.error(f"costs[{i}] must be a dict")
                category_id = cost.get("categoryId")
                if category_id is None or str(category_id) == "":
                    return PlanNormalizationResult.error(f"Missing categoryId in costs[{i}]")
                items.append(self._normalize_cost(str(category_id), cost))

            start_date = plan_data.get("startDate")
            normalized = {
                "id": plan_id,
                "name": parse_text(plan_data.get("name")),
                "start_date": (
                    normalize_iso_date(start_date) if start_date else today_iso(self.today)
                ),
                "end_date": normalize_iso_date(plan_data.get("endDate"), allow_empty=True),
                "status": PlanStatus.parse(
                    plan_data.get("status") or self.plan_params.default_status
                ),
                "notes": parse_text(plan_data.get("notes")),
                "doctors": parse_doctor_ids(plan_data.get("doctors")),
                "items": items,
            }

            self._check_derived_fields(plan_id, plan_data, items)

            return PlanNormalizationResult.success_with(normalized)

        except DataQualityError as e:
            return PlanNormalizationResult.error(f"Invalid plan data: {e}")

    def _normalize_cost(self, category_id: str, cost: dict[str, Any]) -> CostLineItem:
        name = cost.get("categoryName")
        if not name and self.catalog is not None:
            category = self.catalog.get(category_id)
            name = category.name if category is not None else None

        places = self.ledger_params.money_places
        return CostLineItem(
            category_id=category_id,
            category_name=str(name) if name else category_id,
            base_cost=parse_amount(cost.get("baseCost"), places=places),
            quantity=parse_quantity(
                cost.get("quantity", self.ledger_params.default_quantity),
                min_quantity=self.ledger_params.min_quantity,
                max_quantity=self.ledger_params.max_quantity
            ),
            material_cost=parse_amount(cost.get("materialCost"), places=places),
            particulars=parse_text(cost.get("particulars")),
            assigned_doctors=parse_doctor_ids(cost.get("assignedDoctors")),
        )

    def _check_derived_fields(
        self,
        plan_id: Optional[str],
        plan_data: dict[str, Any],
        items: list[CostLineItem]
    ) -> None:
        """Log stored derived values that disagree with the cost rows."""
        stored_total = plan_data.get("totalCost")
        if stored_total is not None:
            derived_total = sum((item.total_cost for item in items), ZERO)
            if parse_amount(stored_total) != derived_total:
                self.logger.warning(
                    "Stored plan total differs from cost rows; using derived total",
                    plan_id=plan_id,
                    stored_total=str(stored_total),
                    derived_total=str(derived_total)
                )

        stored_selected = plan_data.get("selectedCategories")
        if stored_selected is not None:
            derived = {item.category_id for item in items}
            if {str(c) for c in stored_selected} != derived:
                self.logger.warning(
                    "Stored selected categories differ from cost rows; using cost rows",
                    plan_id=plan_id,
                    stored=sorted(str(c) for c in stored_selected),
                    derived=sorted(derived)
                )

    @staticmethod
    def _first_present(data: dict[str, Any], keys: tuple[str, ...]) -> Optional[str]:
        for key in keys:
            value = data.get(key)
            if value is not None and str(value) != "":
                return str(value)
        return None
