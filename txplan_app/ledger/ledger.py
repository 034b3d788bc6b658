"""
Cost ledger for treatment plan line items.

Every mutating operation finishes by calling recompute_totals() before it
returns, so an observer never sees line items and totals out of step.
"""

from collections.abc import Iterable
from decimal import Decimal
from typing import Any, Optional

from ..config.defaults import LedgerParams
from ..data.catalog import CategoryCatalog
from ..data.models import SETTABLE_FIELDS, CostLineItem
from ..data.parsers import parse_amount, parse_doctor_ids, parse_quantity, parse_text
from ..errors import LedgerFieldError, LineItemIndexError, StateTransitionError
from ..logging.config import get_ledger_logger, log_ledger_change
from ..utils.currency import ZERO

ledger_logger = get_ledger_logger(__name__)

FIELD_ALIASES = {
    "baseCost": "base_cost",
    "materialCost": "material_cost",
    "assignedDoctors": "assigned_doctors",
}


class CostLedger:
    """Ordered cost line items plus the plan totals derived from them."""

    def __init__(
        self,
        catalog: CategoryCatalog,
        items: Iterable[CostLineItem] = (),
        params: Optional[LedgerParams] = None,
        plan_id: Optional[str] = None
    ):
        self.catalog = catalog
        self.params = params or LedgerParams()
        self.plan_id = plan_id
        self.logger = ledger_logger

        self._items: list[CostLineItem] = []
        self._selected: set[str] = set()
        self._total_cost: Decimal = ZERO
        self._total_material_cost: Decimal = ZERO
        self._locked = False

        for item in items:
            if item.category_id in self._selected:
                self.logger.warning(
                    "Dropping duplicate category line",
                    plan_id=plan_id,
                    category_id=item.category_id
                )
                continue
            self._items.append(item)
            self._selected.add(item.category_id)

        self.recompute_totals()

    @property
    def line_items(self) -> tuple[CostLineItem, ...]:
        return tuple(self._items)

    @property
    def selected_category_ids(self) -> frozenset[str]:
        return frozenset(self._selected)

    @property
    def total_cost(self) -> Decimal:
        return self._total_cost

    @property
    def total_material_cost(self) -> Decimal:
        return self._total_material_cost

    @property
    def locked(self) -> bool:
        return self._locked

    def __len__(self) -> int:
        return len(self._items)

    def index_of(self, category_id: str) -> Optional[int]:
        """Position of the line for a category, None if it is not in the ledger."""
        for index, item in enumerate(self._items):
            if item.category_id == category_id:
                return index
        return None

    def lock(self) -> None:
        """Reject all further mutations (the owning draft was finalized)."""
        self._locked = True

    def add(self, category_id: str) -> Optional[CostLineItem]:
        """
        Append a line item seeded from a catalog category.

        Unknown and already-selected categories are ignored: the call is a
        no-op and returns None.

        Returns:
            The new line item, or None if nothing was added
        """
        self._ensure_unlocked("add")

        category = self.catalog.get(category_id)
        if category is None:
            self.logger.warning(
                "Ignoring add for unknown category",
                plan_id=self.plan_id,
                category_id=category_id
            )
            return None

        if category_id in self._selected:
            self.logger.warning(
                "Ignoring add for already selected category",
                plan_id=self.plan_id,
                category_id=category_id
            )
            return None

        item = CostLineItem.from_category(category, quantity=self.params.default_quantity)
        self._items.append(item)
        self._selected.add(category_id)
        self.recompute_totals()

        log_ledger_change(
            self.logger,
            plan_id=self.plan_id,
            operation="add",
            context={
                "category_id": category_id,
                "index": len(self._items) - 1,
                "total_cost": str(self._total_cost),
            }
        )
        return item

    def update(self, index: int, field: str, value: Any) -> CostLineItem:
        """
        Set one externally settable field of a line item.

        Cost fields coerce non-numeric input to zero; quantity is truncated
        and clamped to the ledger's bounds.

        Args:
            index: Position of the line item
            field: base_cost, quantity, material_cost, particulars or
                assigned_doctors (camelCase aliases accepted)
            value: Raw input value

        Returns:
            The updated line item

        Raises:
            LineItemIndexError: If index is not a current position
            LedgerFieldError: If field is not externally settable
        """
        self._ensure_unlocked("update")
        self._check_index(index, "update")

        name = FIELD_ALIASES.get(field, field)
        if name not in SETTABLE_FIELDS:
            raise LedgerFieldError(
                f"Field is not settable: {field}",
                field=field,
                context={"settable": list(SETTABLE_FIELDS)}
            )

        updated = self._items[index].with_field(name, self._coerce(name, value))
        self._items[index] = updated
        self.recompute_totals()

        log_ledger_change(
            self.logger,
            plan_id=self.plan_id,
            operation="update",
            context={
                "index": index,
                "field": name,
                "line_total": str(updated.total_cost),
                "total_cost": str(self._total_cost),
            }
        )
        return updated

    def remove(self, index: int) -> CostLineItem:
        """
        Delete the line item at index and release its category.

        Returns:
            The removed line item

        Raises:
            LineItemIndexError: If index is not a current position
        """
        self._ensure_unlocked("remove")
        self._check_index(index, "remove")

        removed = self._items.pop(index)
        self._selected.discard(removed.category_id)
        self.recompute_totals()

        log_ledger_change(
            self.logger,
            plan_id=self.plan_id,
            operation="remove",
            context={
                "category_id": removed.category_id,
                "index": index,
                "total_cost": str(self._total_cost),
            }
        )
        return removed

    def recompute_totals(self) -> None:
        """Derive plan totals from the current line items."""
        self._total_cost = sum((item.total_cost for item in self._items), ZERO)
        self._total_material_cost = sum((item.material_cost for item in self._items), ZERO)

    def _coerce(self, name: str, value: Any) -> Any:
        if name in ("base_cost", "material_cost"):
            return parse_amount(value, places=self.params.money_places)
        if name == "quantity":
            return parse_quantity(
                value,
                min_quantity=self.params.min_quantity,
                max_quantity=self.params.max_quantity
            )
        if name == "assigned_doctors":
            return parse_doctor_ids(value)
        return parse_text(value)

    def _check_index(self, index: int, operation: str) -> None:
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < len(self._items):
            raise LineItemIndexError(
                f"Line item index out of range for {operation}: {index!r}",
                index=index if isinstance(index, int) else None,
                size=len(self._items)
            )

    def _ensure_unlocked(self, operation: str) -> None:
        if self._locked:
            raise StateTransitionError(
                f"Cannot {operation} line items on a finalized plan",
                current_state="finalized",
                attempted_transition=operation,
                context={"plan_id": self.plan_id}
            )
