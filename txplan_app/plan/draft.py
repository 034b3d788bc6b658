"""
Plan draft aggregate.

A draft is edited only through its field setters and its CostLedger, and is
finalized exactly once, by save() or cancel(). After that every mutation
raises StateTransitionError.
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any, Optional, Union

import structlog

from ..config.defaults import AppConfig, get_default_config
from ..data.catalog import CategoryCatalog
from ..data.models import CostLineItem
from ..data.plan_normalizer import PlanNormalizer
from ..data.parsers import parse_doctor_ids, parse_text
from ..errors import MalformedDataError, StateTransitionError
from ..ledger.ledger import CostLedger
from ..utils.time import generate_plan_id, normalize_iso_date, today_iso
from .status import PlanStatus

if TYPE_CHECKING:
    from ..delivery.base import DeliveryResult, PlanDelivery

logger = structlog.get_logger(__name__)

DateLike = Union[date, str, None]


class DraftPhase(str, Enum):
    """Draft lifecycle phases."""
    EDITING = "editing"
    SAVED = "saved"
    CANCELLED = "cancelled"


class PlanDraft:
    """In-progress treatment plan with derived cost totals."""

    def __init__(
        self,
        catalog: CategoryCatalog,
        delivery: Optional["PlanDelivery"] = None,
        config: Optional[AppConfig] = None,
        plan_id: Optional[str] = None,
        name: str = "",
        start_date: DateLike = None,
        end_date: DateLike = "",
        status: Union[PlanStatus, str, None] = None,
        notes: str = "",
        doctors: Iterable[str] = (),
        items: tuple[CostLineItem, ...] = (),
        today: Optional[date] = None
    ):
        self.config = config or get_default_config()
        self.catalog = catalog
        self.delivery = delivery
        self.logger = logger

        self._id = plan_id
        self._name = parse_text(name)
        self._start_date = (
            normalize_iso_date(start_date) if start_date else today_iso(today)
        )
        self._end_date = normalize_iso_date(end_date, allow_empty=True)
        self._status = PlanStatus.parse(status or self.config.plan.default_status)
        self._notes = parse_text(notes)
        self._doctors: tuple[str, ...] = parse_doctor_ids(doctors)
        self._phase = DraftPhase.EDITING

        self.ledger = CostLedger(
            catalog,
            items=items,
            params=self.config.ledger,
            plan_id=plan_id
        )

    @classmethod
    def new(
        cls,
        catalog: CategoryCatalog,
        delivery: Optional["PlanDelivery"] = None,
        config: Optional[AppConfig] = None,
        today: Optional[date] = None
    ) -> "PlanDraft":
        """Create an empty draft for a new plan."""
        return cls(catalog, delivery=delivery, config=config, today=today)

    @classmethod
    def from_existing(
        cls,
        plan: dict[str, Any],
        catalog: CategoryCatalog,
        delivery: Optional["PlanDelivery"] = None,
        config: Optional[AppConfig] = None,
        today: Optional[date] = None
    ) -> "PlanDraft":
        """
        Create a draft pre-populated from a persisted plan.

        Raises:
            MalformedDataError: If the persisted plan cannot be normalized
        """
        config = config or get_default_config()
        normalizer = PlanNormalizer(
            catalog=catalog,
            ledger_params=config.ledger,
            plan_params=config.plan,
            today=today
        )
        result = normalizer.normalize_plan(plan)
        if not result.success:
            raise MalformedDataError(
                result.error_msg or "Invalid plan",
                expected_format="persisted treatment plan"
            )

        fields = result.normalized_plan
        return cls(
            catalog,
            delivery=delivery,
            config=config,
            plan_id=fields["id"],
            name=fields["name"],
            start_date=fields["start_date"],
            end_date=fields["end_date"],
            status=fields["status"],
            notes=fields["notes"],
            doctors=fields["doctors"],
            items=tuple(fields["items"]),
            today=today,
        )

    @property
    def id(self) -> Optional[str]:
        return self._id

    @property
    def is_new(self) -> bool:
        return self._id is None

    @property
    def name(self) -> str:
        return self._name

    @property
    def start_date(self) -> str:
        return self._start_date

    @property
    def end_date(self) -> str:
        return self._end_date

    @property
    def status(self) -> PlanStatus:
        return self._status

    @property
    def notes(self) -> str:
        return self._notes

    @property
    def doctors(self) -> tuple[str, ...]:
        """Doctors assigned to the plan as a whole."""
        return self._doctors

    @property
    def phase(self) -> DraftPhase:
        return self._phase

    @property
    def line_items(self) -> tuple[CostLineItem, ...]:
        return self.ledger.line_items

    @property
    def selected_category_ids(self) -> frozenset[str]:
        return self.ledger.selected_category_ids

    @property
    def total_cost(self) -> Decimal:
        return self.ledger.total_cost

    @property
    def total_material_cost(self) -> Decimal:
        return self.ledger.total_material_cost

    def set_name(self, name: Optional[str]) -> None:
        self._ensure_editing("set_name")
        self._name = parse_text(name)

    def set_notes(self, notes: Optional[str]) -> None:
        self._ensure_editing("set_notes")
        self._notes = parse_text(notes)

    def set_doctors(self, doctors: Any) -> None:
        """Set the plan-level doctors from ids or doctor records."""
        self._ensure_editing("set_doctors")
        self._doctors = parse_doctor_ids(doctors)

    def set_status(self, status: Union[PlanStatus, str]) -> None:
        """Set the status; raises MalformedDataError for unknown values."""
        self._ensure_editing("set_status")
        self._status = PlanStatus.parse(status)

    def set_start_date(self, value: DateLike) -> None:
        """Set the start date; it may not be empty."""
        self._ensure_editing("set_start_date")
        self._start_date = normalize_iso_date(value)

    def set_end_date(self, value: DateLike) -> None:
        """Set the end date; empty means not yet set."""
        self._ensure_editing("set_end_date")
        self._end_date = normalize_iso_date(value, allow_empty=True)

    def add_line(self, category_id: str) -> Optional[CostLineItem]:
        return self.ledger.add(category_id)

    def update_line(self, index: int, field: str, value: Any) -> CostLineItem:
        return self.ledger.update(index, field, value)

    def remove_line(self, index: int) -> CostLineItem:
        return self.ledger.remove(index)

    def save(self) -> Optional["DeliveryResult"]:
        """
        Finalize the draft and hand it to the delivery boundary.

        A draft without an identifier gets a generated one first. A plan with
        no line items is valid.

        Returns:
            The delivery result, or None when no delivery is attached

        Raises:
            StateTransitionError: If the draft was already saved or cancelled
        """
        self._ensure_editing("save")

        if self._id is None:
            self._id = generate_plan_id(self.config.plan.id_prefix)
            self.ledger.plan_id = self._id

        self._finalize(DraftPhase.SAVED)
        self.logger.info(
            "Plan draft saved",
            plan_id=self._id,
            line_items=len(self.ledger),
            total_cost=str(self.total_cost),
            total_material_cost=str(self.total_material_cost)
        )

        if self.delivery is None:
            return None
        return self.delivery.save(self)

    def cancel(self) -> Optional["DeliveryResult"]:
        """
        Discard the draft unconditionally.

        Raises:
            StateTransitionError: If the draft was already saved or cancelled
        """
        self._ensure_editing("cancel")
        self._finalize(DraftPhase.CANCELLED)
        self.logger.info("Plan draft cancelled", plan_id=self._id)

        if self.delivery is None:
            return None
        return self.delivery.cancel()

    def to_payload(self) -> dict[str, Any]:
        """
        Serialize to the persistence shape, amounts as decimal strings.

        The shape is the one from_existing() reads back: lines under "costs"
        and their category ids under "selectedCategories".
        """
        return {
            "id": self._id,
            "treatmentPlanId": self._id,
            "name": self._name,
            "startDate": self._start_date,
            "endDate": self._end_date,
            "status": self._status.value,
            "notes": self._notes,
            "doctors": list(self._doctors),
            "costs": [item.to_payload() for item in self.line_items],
            "selectedCategories": [item.category_id for item in self.line_items],
            "totalCost": str(self.total_cost),
            "totalMaterialCost": str(self.total_material_cost),
        }

    def _finalize(self, phase: DraftPhase) -> None:
        self._phase = phase
        self.ledger.lock()

    def _ensure_editing(self, operation: str) -> None:
        if self._phase is not DraftPhase.EDITING:
            raise StateTransitionError(
                f"Cannot {operation} a {self._phase.value} plan draft",
                current_state=self._phase.value,
                attempted_transition=operation,
                context={"plan_id": self._id}
            )
