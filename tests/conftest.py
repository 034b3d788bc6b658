"""Pytest configuration and shared fixtures."""

import pytest
from datetime import date
from decimal import Decimal
from typing import Any, Dict, List

from txplan_app.data.catalog import CategoryCatalog, default_catalog
from txplan_app.data.models import TreatmentCategory
from txplan_app.engine import TreatmentPlanEditor
from txplan_app.ledger.ledger import CostLedger
from txplan_app.plan.draft import PlanDraft
from txplan_app.stepper.scheduler import ManualScheduler


@pytest.fixture
def today() -> date:
    """Fixed calendar date for default start dates."""
    return date(2026, 10, 17)


@pytest.fixture
def catalog() -> CategoryCatalog:
    """Built-in catalog of 15 dental categories."""
    return default_catalog()


@pytest.fixture
def small_catalog() -> CategoryCatalog:
    """Three-category catalog with predictable prices."""
    return CategoryCatalog([
        TreatmentCategory(id="c1", name="Filling", base_cost=Decimal("1500.00"),
                          description="Tooth filling procedure"),
        TreatmentCategory(id="c2", name="Cleaning", base_cost=Decimal("800.00"),
                          description="Professional dental cleaning"),
        TreatmentCategory(id="c3", name="Crown", base_cost=Decimal("12000.00")),
    ])


@pytest.fixture
def ledger(small_catalog: CategoryCatalog) -> CostLedger:
    """Empty ledger over the small catalog."""
    return CostLedger(small_catalog)


@pytest.fixture
def draft(small_catalog: CategoryCatalog, today: date) -> PlanDraft:
    """New plan draft over the small catalog."""
    return PlanDraft.new(small_catalog, today=today)


@pytest.fixture
def scheduler() -> ManualScheduler:
    """Virtual-clock scheduler."""
    return ManualScheduler()


@pytest.fixture
def editor(catalog: CategoryCatalog, scheduler: ManualScheduler, today: date) -> TreatmentPlanEditor:
    """Editor for a new plan over the built-in catalog."""
    return TreatmentPlanEditor(catalog=catalog, scheduler=scheduler, today=today)


@pytest.fixture
def persisted_plan() -> Dict[str, Any]:
    """Treatment plan as returned by the persistence service."""
    return {
        "_id": "65f0c0ffee",
        "name": "Upper molars",
        "startDate": "2026-09-01",
        "endDate": "",
        "status": "in-progress",
        "notes": "Patient prefers mornings",
        "doctors": [{"_id": "doc-7", "name": "Dr. Rao"}, "doc-9"],
        "costs": [
            {
                "categoryId": "2",
                "categoryName": "Filling",
                "assignedDoctors": ["doc-7"],
                "baseCost": 1500,
                "particulars": "Composite Filling, Tooth #12",
                "quantity": 2,
                "materialCost": 300,
                "totalCost": 3300,
            },
            {
                "categoryId": "4",
                "categoryName": "Root Canal",
                "assignedDoctors": [],
                "baseCost": 8000,
                "particulars": "",
                "quantity": 1,
                "materialCost": 0,
                "totalCost": 8000,
            },
        ],
        "selectedCategories": ["2", "4"],
        "totalCost": 11300,
        "totalMaterialCost": 300,
    }


def assert_ledger_invariants(ledger: CostLedger) -> None:
    """Check the total, line and selection-set invariants."""
    items: List = list(ledger.line_items)
    for item in items:
        assert item.total_cost == item.base_cost * item.quantity + item.material_cost
    assert ledger.total_cost == sum((i.total_cost for i in items), Decimal("0"))
    assert ledger.total_material_cost == sum((i.material_cost for i in items), Decimal("0"))
    ids = [i.category_id for i in items]
    assert len(ids) == len(set(ids))
    assert ledger.selected_category_ids == frozenset(ids)


@pytest.fixture
def check_invariants():
    """Invariant checker for ledgers and drafts."""
    return assert_ledger_invariants
