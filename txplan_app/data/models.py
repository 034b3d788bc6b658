"""
Canonical data models for treatment categories and cost line items.

Both models are immutable. A line item's total is derived in __post_init__,
so every instance satisfies total_cost == base_cost * quantity + material_cost
and edits produce a new instance through with_field().
"""

from dataclasses import dataclass, field, replace
from decimal import Decimal
from typing import Any, Optional

from ..utils.currency import ZERO

SETTABLE_FIELDS = ("base_cost", "quantity", "material_cost", "particulars", "assigned_doctors")
COST_FIELDS = ("base_cost", "quantity", "material_cost")


@dataclass(frozen=True)
class TreatmentCategory:
    """Billable treatment category with its standard price."""
    id: str
    name: str
    base_cost: Decimal              # Non-negative, fixed-point
    description: Optional[str] = None

    def matches(self, query: str) -> bool:
        """Case-insensitive substring match against name or description."""
        needle = query.lower()
        if needle in self.name.lower():
            return True
        return self.description is not None and needle in self.description.lower()


@dataclass(frozen=True)
class CostLineItem:
    """One row of a treatment plan, seeded from a category."""
    category_id: str
    category_name: str              # Snapshot of the category name at add-time
    base_cost: Decimal
    quantity: int = 1
    material_cost: Decimal = ZERO   # Flat add-on, not multiplied by quantity
    particulars: str = ""
    assigned_doctors: tuple[str, ...] = ()
    total_cost: Decimal = field(init=False)

    def __post_init__(self):
        object.__setattr__(
            self,
            "total_cost",
            self.base_cost * self.quantity + self.material_cost
        )

    @classmethod
    def from_category(cls, category: TreatmentCategory, quantity: int = 1) -> "CostLineItem":
        """Create a fresh line item priced from the category."""
        return cls(
            category_id=category.id,
            category_name=category.name,
            base_cost=category.base_cost,
            quantity=quantity,
        )

    def with_field(self, name: str, value: Any) -> "CostLineItem":
        """Create new line item with one field replaced and the total recomputed."""
        return replace(self, **{name: value})

    def to_payload(self) -> dict[str, Any]:
        """Serialize to the persistence shape."""
        return {
            "categoryId": self.category_id,
            "categoryName": self.category_name,
            "assignedDoctors": list(self.assigned_doctors),
            "baseCost": str(self.base_cost),
            "particulars": self.particulars,
            "quantity": self.quantity,
            "materialCost": str(self.material_cost),
            "totalCost": str(self.total_cost),
        }
