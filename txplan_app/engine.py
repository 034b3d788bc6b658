"""
Treatment plan editing session coordinator.

Wires the editing pipeline together:
Category search → Ledger add → Stepper per line → Ledger update → Save/Cancel

The editor owns the selector's UI state (query and show-all toggle) and one
StepperController per line item. A line's stepper is disposed when the line
is removed, and every stepper is disposed when the session ends.
"""

from datetime import date
from typing import Any, Optional, Union

import structlog

from .config.defaults import AppConfig, get_default_config
from .data.catalog import CategoryCatalog, default_catalog
from .data.models import CostLineItem
from .delivery.base import DeliveryResult, PlanDelivery
from .errors import StateTransitionError
from .plan.draft import DraftPhase, PlanDraft
from .selection.selector import CategorySelection, CategorySelector
from .stepper.controller import StepperController
from .stepper.models import StepDirection
from .stepper.scheduler import AsyncioScheduler, Scheduler

logger = structlog.get_logger(__name__)


class TreatmentPlanEditor:
    """
    Editing session for a single treatment plan draft.

    Manages the session:
    Search/select categories → add lines → adjust quantities → save or cancel
    """

    def __init__(
        self,
        catalog: Optional[CategoryCatalog] = None,
        plan: Optional[dict[str, Any]] = None,
        delivery: Optional[PlanDelivery] = None,
        scheduler: Optional[Scheduler] = None,
        config: Optional[AppConfig] = None,
        today: Optional[date] = None
    ) -> None:
        """
        Initialize an editing session.

        Args:
            catalog: Resolved category catalog (built-in catalog if omitted)
            plan: Existing persisted plan to edit; None starts a new plan
            delivery: Persistence boundary receiving save/cancel
            scheduler: Timer scheduler for steppers (asyncio if omitted)
            config: Application configuration
            today: Date used as the default start date
        """
        self.logger = logger
        self.config = config or get_default_config()
        self.catalog = catalog or default_catalog()
        self.scheduler = scheduler or AsyncioScheduler()
        self.selector = CategorySelector(self.catalog, self.config.selector)

        if plan is None:
            self.draft = PlanDraft.new(self.catalog, delivery=delivery, config=self.config, today=today)
        else:
            self.draft = PlanDraft.from_existing(
                plan, self.catalog, delivery=delivery, config=self.config, today=today
            )

        self.search_query = ""
        self.show_all = False
        self._steppers: dict[str, StepperController] = {}

        for item in self.draft.line_items:
            self._mount_stepper(item)

        self.logger.info(
            "Plan editor opened",
            plan_id=self.draft.id,
            editing_existing=plan is not None,
            line_items=len(self.draft.line_items)
        )

    @property
    def is_open(self) -> bool:
        return self.draft.phase is DraftPhase.EDITING

    def set_search_query(self, query: str) -> None:
        self.search_query = query or ""

    def clear_search(self) -> None:
        self.search_query = ""

    def set_show_all(self, show_all: bool) -> None:
        self.show_all = bool(show_all)

    def toggle_show_all(self) -> bool:
        self.show_all = not self.show_all
        return self.show_all

    def category_view(self) -> CategorySelection:
        """Categories to offer for the current query and show-all state."""
        return self.selector.select(self.draft, self.search_query, self.show_all)

    def add_category(self, category_id: str) -> Optional[CostLineItem]:
        """Add a category as a new line; unknown or duplicate ids are ignored."""
        item = self.draft.add_line(category_id)
        if item is not None:
            self._mount_stepper(item)
        return item

    def update_line(self, index: int, field: str, value: Any) -> CostLineItem:
        """Edit a line field; quantity edits keep the line's stepper in sync."""
        item = self.draft.update_line(index, field, value)
        stepper = self._steppers.get(item.category_id)
        if stepper is not None:
            stepper.set_value(item.quantity)
        return item

    def remove_line(self, index: int) -> CostLineItem:
        """Remove a line and dispose its stepper."""
        removed = self.draft.remove_line(index)
        stepper = self._steppers.pop(removed.category_id, None)
        if stepper is not None:
            stepper.dispose()
        return removed

    def stepper_for(self, index: int) -> StepperController:
        """Quantity stepper of the line at index."""
        item = self.draft.line_items[index]
        return self._steppers[item.category_id]

    def press_quantity(self, index: int, direction: Union[StepDirection, str]) -> None:
        self.stepper_for(index).press_in(direction)

    def release_quantity(self, index: int) -> None:
        self.stepper_for(index).press_out()

    def save(self) -> Optional[DeliveryResult]:
        """Dispose steppers and save the draft."""
        self._dispose_steppers()
        return self.draft.save()

    def cancel(self) -> Optional[DeliveryResult]:
        """Dispose steppers and discard the draft."""
        self._dispose_steppers()
        return self.draft.cancel()

    def close(self) -> None:
        """Tear down the session without finalizing the draft."""
        self._dispose_steppers()
        self.logger.info("Plan editor closed", plan_id=self.draft.id, phase=self.draft.phase.value)

    def _mount_stepper(self, item: CostLineItem) -> None:
        category_id = item.category_id

        def on_change(value: int) -> None:
            index = self.draft.ledger.index_of(category_id)
            if index is None:
                raise StateTransitionError(
                    "Stepper changed a line that is no longer in the plan",
                    current_state="removed",
                    attempted_transition="update_quantity",
                    context={"category_id": category_id}
                )
            updated = self.draft.update_line(index, "quantity", value)
            # The ledger clamps to its own bounds; the stepper follows the stored value.
            self._steppers[category_id].set_value(updated.quantity)

        self._steppers[category_id] = StepperController(
            self.scheduler,
            on_change=on_change,
            value=item.quantity,
            params=self.config.stepper,
            stepper_id=f"quantity:{category_id}"
        )

    def _dispose_steppers(self) -> None:
        for stepper in self._steppers.values():
            stepper.dispose()
        self._steppers.clear()
